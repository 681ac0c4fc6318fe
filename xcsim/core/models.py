"""
Data models for iOS Simulator metadata.

This module defines the identifier types used to index simulator
runtimes and devices, and the value objects returned by queries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

from packaging.version import InvalidVersion, Version

from xcsim.constants import (
    DEVICE_APP_BUNDLES_RELATIVE_PATH,
    DEVICE_APP_DATA_RELATIVE_PATH,
    DEVICE_TYPE_KEY_PREFIX,
    RUNTIME_KEY_PREFIX,
    SIMULATORS_ROOT,
)

logger = logging.getLogger(__name__)

_ZERO_VERSION = Version("0")


def _parse_version(version: str) -> Version:
    """Parse a dotted version string, treating garbage as version 0."""
    try:
        return Version(version)
    except InvalidVersion:
        logger.debug(f"Unparsable OS version '{version}', ordering as 0")
        return _ZERO_VERSION


@dataclass(frozen=True)
class OSID:
    """
    Identifies a simulator runtime.

    An OSID is a pair of OS type ("iOS", "watchOS", "tvOS") and version
    string ("9.0", "9.2" etc.). Equality uses both fields, ordering uses
    the numeric value of the version only, so "9.10" sorts after "9.2"
    and max() over a set of OSIDs picks the newest runtime.

    Attributes:
        type: Simulated OS type string
        version: Dotted version string
    """

    type: str
    version: str

    @classmethod
    def from_prefixed_string(cls, string: str) -> Optional[OSID]:
        """
        Create an OSID from a device_set.plist runtime key.

        Keys look like "com.apple.CoreSimulator.SimRuntime.iOS-9-2". No
        validation is done beyond checking the prefix.

        Returns:
            OSID, or None if the string lacks the runtime prefix.
        """
        if not string.startswith(RUNTIME_KEY_PREFIX):
            return None

        components = string[len(RUNTIME_KEY_PREFIX):].split("-")
        return cls(components[0], ".".join(components[1:]))

    @classmethod
    def from_string(cls, string: str) -> OSID:
        """
        Create an OSID from free text in "iOS 9.2" format.

        The first whitespace-separated token is the OS type, the remaining
        ones are joined with "." to form the version.
        """
        components = string.split()
        if not components:
            return cls("", "")
        return cls(components[0], ".".join(components[1:]))

    @property
    def key(self) -> str:
        """Key used for this runtime in device_set.plist."""
        return f"{RUNTIME_KEY_PREFIX}{self.type}-{self.version.replace('.', '-')}"

    @property
    def parsed_version(self) -> Version:
        return _parse_version(self.version)

    def __str__(self) -> str:
        return f"{self.type} {self.version}"

    def __lt__(self, other: OSID) -> bool:
        if not isinstance(other, OSID):
            return NotImplemented
        return self.parsed_version < other.parsed_version

    def __le__(self, other: OSID) -> bool:
        if not isinstance(other, OSID):
            return NotImplemented
        return self.parsed_version <= other.parsed_version

    def __gt__(self, other: OSID) -> bool:
        if not isinstance(other, OSID):
            return NotImplemented
        return self.parsed_version > other.parsed_version

    def __ge__(self, other: OSID) -> bool:
        if not isinstance(other, OSID):
            return NotImplemented
        return self.parsed_version >= other.parsed_version


@dataclass(frozen=True, eq=False)
class DeviceID:
    """
    Identifies one simulator device.

    A DeviceID pairs the device model name with the GUID naming its
    directory under the simulators root. Two DeviceIDs are equal when
    their names are equal; the GUID and root are not compared.

    Attributes:
        name: Device model name (e.g., "iPhone 5s")
        guid: Name of the device directory
        root: Simulators root the device directory lives in
    """

    name: str
    guid: str
    root: Path = field(default=SIMULATORS_ROOT, repr=False)

    @classmethod
    def from_prefixed_string(
        cls,
        string: str,
        guid: str,
        root: Path = SIMULATORS_ROOT,
    ) -> Optional[DeviceID]:
        """
        Create a DeviceID from a device_set.plist device type key.

        Keys look like "com.apple.CoreSimulator.SimDeviceType.iPad-Air-2";
        hyphens in the suffix become spaces in the name.

        Returns:
            DeviceID, or None if the string lacks the device type prefix.
        """
        if not string.startswith(DEVICE_TYPE_KEY_PREFIX):
            return None

        name = string[len(DEVICE_TYPE_KEY_PREFIX):].replace("-", " ")
        return cls(name, guid, Path(root))

    @property
    def key(self) -> str:
        """Key used for this device type in device_set.plist."""
        return f"{DEVICE_TYPE_KEY_PREFIX}{self.name.replace(' ', '-')}"

    @property
    def app_bundles_path(self) -> Path:
        """Directory holding installed application bundles."""
        return self.root / self.guid / DEVICE_APP_BUNDLES_RELATIVE_PATH

    @property
    def app_data_path(self) -> Path:
        """Directory holding application data containers."""
        return self.root / self.guid / DEVICE_APP_DATA_RELATIVE_PATH

    def __str__(self) -> str:
        return self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DeviceID):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)


@dataclass(frozen=True)
class OSDevices:
    """
    Devices available for one simulator runtime.

    Attributes:
        id: Runtime the devices belong to
        devices: Mapping of device name to DeviceID
    """

    id: OSID
    devices: dict[str, DeviceID] = field(default_factory=dict)

    @classmethod
    def from_devices(cls, id: OSID, devices: Iterable[DeviceID]) -> OSDevices:
        """Index devices by name. Later duplicates replace earlier ones."""
        by_name: dict[str, DeviceID] = {}
        for device in devices:
            by_name[device.name] = device
        return cls(id, by_name)

    def __str__(self) -> str:
        return f"{self.id} ({len(self.devices)} devices)"

    def __lt__(self, other: OSDevices) -> bool:
        if not isinstance(other, OSDevices):
            return NotImplemented
        return self.id < other.id

    def __gt__(self, other: OSDevices) -> bool:
        if not isinstance(other, OSDevices):
            return NotImplemented
        return self.id > other.id


@dataclass(frozen=True)
class BundleInfo:
    """
    Information about an application installed on a simulator.

    Attributes:
        bundle_id: Bundle identifier (e.g., "com.example.App")
        bundle_path: Application bundle directory
        data_path: Application data directory, None if not created yet
    """

    bundle_id: str
    bundle_path: Path
    data_path: Optional[Path] = None

    def __str__(self) -> str:
        return self.bundle_id

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "bundle_id": self.bundle_id,
            "bundle_path": str(self.bundle_path),
            "data_path": str(self.data_path) if self.data_path else None,
        }


@dataclass
class DeviceListItem:
    """A device matched by a list query, with its installed bundles."""

    os: OSDevices
    device: DeviceID
    bundles: list[BundleInfo] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        """Name in "iPhone 5s (iOS 9.2)" format."""
        return f"{self.device.name} ({self.os.id})"

    @property
    def short_name(self) -> str:
        return self.device.name

    def __str__(self) -> str:
        return self.full_name

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "os": str(self.os.id),
            "device": self.device.name,
            "guid": self.device.guid,
            "bundles": [bundle.to_dict() for bundle in self.bundles],
        }
