"""
Pytest configuration and fixtures for xcsim tests.

This module provides a fake CoreSimulator devices directory with a
device_set.plist, device directories, and installed applications.
"""

from __future__ import annotations

import plistlib
from pathlib import Path
from typing import Optional

import pytest

from xcsim.config import Config
from xcsim.constants import (
    BUNDLE_METADATA_PLIST,
    DEVICE_APP_BUNDLES_RELATIVE_PATH,
    DEVICE_APP_DATA_RELATIVE_PATH,
    DEVICE_SET_PLIST,
    METADATA_ID,
)
from xcsim.core import DeviceSet

RUNTIME = "com.apple.CoreSimulator.SimRuntime."
DEVICE_TYPE = "com.apple.CoreSimulator.SimDeviceType."

# Device GUIDs
IOS92_IPHONE_5S = "A1000000-0000-0000-0000-000000000001"
IOS92_IPAD_AIR = "A1000000-0000-0000-0000-000000000002"
IOS92_IPAD_AIR_2 = "A1000000-0000-0000-0000-000000000003"
IOS92_IPHONE_6 = "A1000000-0000-0000-0000-000000000004"  # never booted
IOS84_IPHONE_5S = "B2000000-0000-0000-0000-000000000001"
IOS84_IPHONE_6 = "B2000000-0000-0000-0000-000000000002"
WATCH21_38MM = "C3000000-0000-0000-0000-000000000001"
TVOS91_TV = "D4000000-0000-0000-0000-000000000001"  # never booted

DEVICE_SET = {
    "DefaultDevices": {
        f"{RUNTIME}iOS-9-2": {
            f"{DEVICE_TYPE}iPhone-5s": IOS92_IPHONE_5S,
            f"{DEVICE_TYPE}iPad-Air": IOS92_IPAD_AIR,
            f"{DEVICE_TYPE}iPad-Air-2": IOS92_IPAD_AIR_2,
            f"{DEVICE_TYPE}iPhone-6": IOS92_IPHONE_6,
            "com.example.NotADeviceType": "E5000000-0000-0000-0000-000000000001",
        },
        f"{RUNTIME}iOS-8-4": {
            f"{DEVICE_TYPE}iPhone-5s": IOS84_IPHONE_5S,
            f"{DEVICE_TYPE}iPhone-6": IOS84_IPHONE_6,
        },
        f"{RUNTIME}watchOS-2-1": {
            f"{DEVICE_TYPE}Apple-Watch-38mm": WATCH21_38MM,
        },
        f"{RUNTIME}tvOS-9-1": {
            f"{DEVICE_TYPE}Apple-TV-1080p": TVOS91_TV,
        },
        "com.example.FutureRuntime-1-0": {
            f"{DEVICE_TYPE}iPhone-5s": IOS92_IPHONE_5S,
        },
    },
    "Version": 0,
}


def write_container(parent: Path, name: str, bundle_id: Optional[str]) -> Path:
    """Create a container directory with a metadata plist."""
    container = parent / name
    container.mkdir(parents=True, exist_ok=True)
    metadata = {"MCMMetadataContentClass": 2}
    if bundle_id is not None:
        metadata[METADATA_ID] = bundle_id
    with open(container / BUNDLE_METADATA_PLIST, "wb") as f:
        plistlib.dump(metadata, f)
    return container


def install_app(
    root: Path,
    guid: str,
    bundle_id: str,
    with_data: bool = True,
) -> tuple[Path, Optional[Path]]:
    """Install a fake application on a fake device."""
    device_dir = root / guid
    container_name = f"{bundle_id.upper().replace('.', '-')}-0000"
    bundle_dir = write_container(
        device_dir / DEVICE_APP_BUNDLES_RELATIVE_PATH, container_name, bundle_id
    )
    data_dir = None
    if with_data:
        data_dir = write_container(
            device_dir / DEVICE_APP_DATA_RELATIVE_PATH, container_name, bundle_id
        )
    return bundle_dir, data_dir


def make_device_dir(root: Path, guid: str) -> None:
    """Create the bundles directory of a booted device."""
    (root / guid / DEVICE_APP_BUNDLES_RELATIVE_PATH).mkdir(parents=True, exist_ok=True)


@pytest.fixture
def simulators_root(tmp_path: Path) -> Path:
    """
    Create a fake simulators root.

    iOS 9.2: iPhone 5s (com.acme.App, com.acme.Widget without data,
    org.example.MyApp), iPad Air (com.acme.App), iPad Air 2.
    iOS 8.4: iPhone 5s (com.acme.App), iPhone 6.
    watchOS 2.1: Apple Watch 38mm.
    tvOS 9.1 and the iOS 9.2 iPhone 6 were never booted.
    """
    root = tmp_path / "Devices"
    root.mkdir()

    with open(root / DEVICE_SET_PLIST, "wb") as f:
        plistlib.dump(DEVICE_SET, f)

    for guid in (
        IOS92_IPHONE_5S,
        IOS92_IPAD_AIR,
        IOS92_IPAD_AIR_2,
        IOS84_IPHONE_5S,
        IOS84_IPHONE_6,
        WATCH21_38MM,
    ):
        make_device_dir(root, guid)

    install_app(root, IOS92_IPHONE_5S, "com.acme.App")
    install_app(root, IOS92_IPHONE_5S, "com.acme.Widget", with_data=False)
    install_app(root, IOS92_IPHONE_5S, "org.example.MyApp")
    install_app(root, IOS92_IPAD_AIR, "com.acme.App")
    install_app(root, IOS84_IPHONE_5S, "com.acme.App")

    return root


@pytest.fixture
def device_set(simulators_root: Path) -> DeviceSet:
    """Load the fake simulators root."""
    return DeviceSet.load(simulators_root)


@pytest.fixture
def test_config(simulators_root: Path) -> Config:
    """Create a test configuration pointing at the fake simulators root."""
    return Config(simulators_root=simulators_root)
