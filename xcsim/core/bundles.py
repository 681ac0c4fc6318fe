"""
Installed application discovery for simulator devices.

This module scans a device's container directories and matches
application bundles with their data directories through the bundle
ID recorded in each container's metadata plist.

Example:
    for bundle in scan_installed_bundles(device).values():
        print(f"{bundle.bundle_id}: {bundle.data_path}")
"""

from __future__ import annotations

import logging
import plistlib
from pathlib import Path
from typing import Iterator, Optional
from xml.parsers.expat import ExpatError

from xcsim.constants import BUNDLE_METADATA_PLIST, METADATA_ID
from xcsim.core.models import BundleInfo, DeviceID
from xcsim.exceptions import AmbiguousBundleDataError

logger = logging.getLogger(__name__)


def _iter_containers(path: Path) -> Iterator[tuple[Path, str]]:
    """
    Yield (directory, bundle ID) for every container directly under path.

    Directories without a metadata plist, with an unreadable one, or
    without a bundle identifier are skipped.
    """
    if not path.is_dir():
        logger.debug(f"No container directory at {path}")
        return

    for container in sorted(path.iterdir()):
        if not container.is_dir():
            continue

        metadata_path = container / BUNDLE_METADATA_PLIST
        if not metadata_path.is_file():
            continue

        try:
            with open(metadata_path, "rb") as f:
                metadata = plistlib.load(f)
        except (ValueError, ExpatError, OSError) as e:
            logger.warning(f"Failed to read {metadata_path}: {e}")
            continue

        bundle_id = metadata.get(METADATA_ID) if isinstance(metadata, dict) else None
        if not isinstance(bundle_id, str):
            logger.debug(f"No {METADATA_ID} in {metadata_path}")
            continue

        yield container, bundle_id


def locate_data_directory(device: DeviceID, bundle_id: str) -> Optional[Path]:
    """
    Find the data directory of an application installed on a device.

    Args:
        device: Simulator device the application is installed on.
        bundle_id: Exact bundle ID of the application.

    Returns:
        Path of the data directory, or None if the application has none.

    Raises:
        AmbiguousBundleDataError: If several data directories claim the bundle ID.
    """
    matches = [
        directory
        for directory, identifier in _iter_containers(device.app_data_path)
        if identifier == bundle_id
    ]

    if len(matches) > 1:
        raise AmbiguousBundleDataError(device, bundle_id, matches)

    return matches[0] if matches else None


def scan_installed_bundles(device: DeviceID) -> dict[str, BundleInfo]:
    """
    List applications installed on a simulator device.

    System applications (Safari et al.) live inside the runtime rather
    than the device and are not reported. The filesystem is read on
    every call.

    Args:
        device: Simulator device to scan.

    Returns:
        Dictionary of bundle ID to BundleInfo.

    Raises:
        AmbiguousBundleDataError: If several bundle or data directories
            claim the same bundle ID.
    """
    bundle_dirs: dict[str, list[Path]] = {}
    for directory, bundle_id in _iter_containers(device.app_bundles_path):
        bundle_dirs.setdefault(bundle_id, []).append(directory)

    bundles: dict[str, BundleInfo] = {}
    for bundle_id, directories in bundle_dirs.items():
        if len(directories) > 1:
            raise AmbiguousBundleDataError(device, bundle_id, directories)

        bundles[bundle_id] = BundleInfo(
            bundle_id=bundle_id,
            bundle_path=directories[0],
            data_path=locate_data_directory(device, bundle_id),
        )

    logger.debug(f"Found {len(bundles)} bundle(s) on {device.name}")
    return bundles
