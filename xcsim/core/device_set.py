"""
Device set parsing for the iOS Simulator.

This module reads device_set.plist from the simulators root and builds
a read-only index of runtimes and the devices provisioned for them.

Example:
    device_set = DeviceSet.load(Path("~/Library/Developer/CoreSimulator/Devices"))
    for os_devices in device_set.values():
        print(os_devices)
"""

from __future__ import annotations

import logging
import plistlib
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional
from xml.parsers.expat import ExpatError

from xcsim.constants import (
    DEFAULT_DEVICE_NAME,
    DEFAULT_DEVICES_KEY,
    DEVICE_SET_PLIST,
    SIMULATORS_ROOT,
)
from xcsim.core.models import DeviceID, OSDevices, OSID
from xcsim.exceptions import ConfigNotFoundError, OSNotFoundError

logger = logging.getLogger(__name__)


class DeviceSet(Mapping[OSID, OSDevices]):
    """
    Read-only mapping of OSID to OSDevices.

    Only runtimes with at least one device whose application bundles
    directory exists are kept. The set is built once; create a new one
    to pick up simulators added afterwards.

    Example:
        device_set = DeviceSet.load()
        newest = device_set[OSID.from_string(device_set.default_os_name())]
        print(sorted(newest.devices))
    """

    def __init__(
        self,
        oses: Mapping[OSID, OSDevices],
        root: Path = SIMULATORS_ROOT,
        default_device_name: str = DEFAULT_DEVICE_NAME,
    ):
        self._oses = dict(oses)
        self._root = Path(root)
        self._default_device_name = default_device_name

    @classmethod
    def load(
        cls,
        root: Optional[Path] = None,
        default_device_name: str = DEFAULT_DEVICE_NAME,
    ) -> DeviceSet:
        """
        Parse device_set.plist located in the simulators root.

        Args:
            root: Simulators root. Defaults to the CoreSimulator devices directory.
            default_device_name: Device used by bundle lookups when none is given.

        Returns:
            DeviceSet for the runtimes with at least one usable device.

        Raises:
            ConfigNotFoundError: If the descriptor is missing or cannot be decoded.
        """
        root = Path(root or SIMULATORS_ROOT).expanduser()
        plist_path = root / DEVICE_SET_PLIST

        if not plist_path.is_file():
            raise ConfigNotFoundError(plist_path, "file does not exist")

        try:
            with open(plist_path, "rb") as f:
                data = plistlib.load(f)
        except (ValueError, ExpatError, OSError) as e:
            raise ConfigNotFoundError(plist_path, str(e)) from e

        device_set = cls.from_plist(data, root, default_device_name)
        logger.info(
            f"Loaded {len(device_set)} runtime(s) from {plist_path}"
        )
        return device_set

    @classmethod
    def from_plist(
        cls,
        data: Any,
        root: Path = SIMULATORS_ROOT,
        default_device_name: str = DEFAULT_DEVICE_NAME,
    ) -> DeviceSet:
        """Build a DeviceSet from decoded device_set.plist contents."""
        root = Path(root)

        default_devices = data.get(DEFAULT_DEVICES_KEY) if isinstance(data, dict) else None
        if not isinstance(default_devices, dict):
            raise ConfigNotFoundError(
                root / DEVICE_SET_PLIST,
                f"missing '{DEFAULT_DEVICES_KEY}' dictionary",
            )

        oses: dict[OSID, OSDevices] = {}

        for os_key, os_entry in default_devices.items():
            os_id = OSID.from_prefixed_string(os_key)
            if os_id is None or not isinstance(os_entry, dict):
                logger.debug(f"Skipping unrecognized runtime key {os_key}")
                continue

            devices = []
            for device_key, guid in os_entry.items():
                device = DeviceID.from_prefixed_string(device_key, str(guid), root)
                if device is None:
                    logger.debug(f"Skipping unrecognized device key {device_key}")
                    continue
                if not device.app_bundles_path.is_dir():
                    logger.debug(
                        f"Skipping {device.name} ({os_id}): "
                        f"no bundles directory at {device.app_bundles_path}"
                    )
                    continue
                devices.append(device)

            if devices:
                oses[os_id] = OSDevices.from_devices(os_id, devices)
            else:
                logger.debug(f"Dropping {os_id}: no usable devices")

        return cls(oses, root, default_device_name)

    @property
    def root(self) -> Path:
        """Simulators root the set was loaded from."""
        return self._root

    @property
    def default_device_name(self) -> str:
        """Device name used by bundle lookups when none is given."""
        return self._default_device_name

    def default_os_name(self) -> str:
        """
        Name of the runtime with the highest version.

        Raises:
            OSNotFoundError: If the set has no runtimes.
        """
        if not self._oses:
            raise OSNotFoundError("<newest>")
        return str(max(self._oses))

    def __getitem__(self, os_id: OSID) -> OSDevices:
        return self._oses[os_id]

    def __iter__(self) -> Iterator[OSID]:
        return iter(self._oses)

    def __len__(self) -> int:
        return len(self._oses)

    def __repr__(self) -> str:
        return f"DeviceSet({', '.join(str(os) for os in self._oses.values())})"
