"""
Constants used throughout the xcsim package.

This module contains the fixed paths, file names and key prefixes of the
CoreSimulator on-disk layout. Import from here rather than hardcoding
values elsewhere.
"""

from pathlib import Path

# Version info
VERSION = "0.1.0"
APP_NAME = "xcsim"

# Default paths
DEFAULT_CONFIG_DIR = Path.home() / ".xcsim"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"
SIMULATORS_ROOT = Path.home() / "Library" / "Developer" / "CoreSimulator" / "Devices"

# Paths relative to a concrete simulator device directory
DEVICE_APP_BUNDLES_RELATIVE_PATH = Path("data/Containers/Bundle/Application")
DEVICE_APP_DATA_RELATIVE_PATH = Path("data/Containers/Data/Application")

# Descriptor listing installed runtimes and devices
DEVICE_SET_PLIST = "device_set.plist"
DEFAULT_DEVICES_KEY = "DefaultDevices"

# Per-container metadata
BUNDLE_METADATA_PLIST = ".com.apple.mobile_container_manager.metadata.plist"
METADATA_ID = "MCMMetadataIdentifier"

# Key prefixes used in device_set.plist
RUNTIME_KEY_PREFIX = "com.apple.CoreSimulator.SimRuntime."
DEVICE_TYPE_KEY_PREFIX = "com.apple.CoreSimulator.SimDeviceType."

# Bundle mode defaults
DEFAULT_DEVICE_NAME = "iPhone 5s"
DEFAULT_LOG_LEVEL = "WARNING"
