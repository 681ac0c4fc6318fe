"""
Queries over the simulator device set.

Two kinds of queries are supported:

List mode finds simulators by a partial "OS, device" pattern such as
"iOS 9.2, iPhone 5s", "iOS", "9.2", "iPad" or "9, iPhone". Matching is
case-sensitive substring matching on the OS name ("iOS 9.2") and the
device name.

Bundle mode finds a single installed application by a bundle ID
suffix on an exactly named OS and device, defaulting to the newest OS
and the default device.

Example:
    device_set = DeviceSet.load()

    for item in DeviceListQuery(device_set).with_pattern("iOS 9.2, iPad"):
        print(item.full_name)

    bundle = BundleQuery(device_set).with_options("MyApp", os_name="iOS 9.2")
    print(bundle.data_path)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from xcsim.core.bundles import scan_installed_bundles
from xcsim.core.device_set import DeviceSet
from xcsim.core.models import BundleInfo, DeviceID, DeviceListItem, OSDevices, OSID
from xcsim.exceptions import (
    AmbiguousBundleIDError,
    BundleNotFoundError,
    DeviceNotFoundError,
    InvalidArgumentError,
    InvalidPatternError,
    OSNotFoundError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListRequest:
    """List simulators matching a pattern ("" lists everything)."""

    pattern: str = ""


@dataclass(frozen=True)
class BundleRequest:
    """Find one installed application by bundle ID suffix."""

    bundle_id: Optional[str]
    os_name: Optional[str] = None
    device_name: Optional[str] = None


Request = Union[ListRequest, BundleRequest]


class DeviceListQuery:
    """Implements list mode: finds simulators matching a pattern."""

    def __init__(self, device_set: DeviceSet):
        self._device_set = device_set

    def with_pattern(self, pattern: str) -> list[DeviceListItem]:
        """
        Find simulators matching an "OS, device" pattern.

        With two comma-separated components the first is matched against
        OS names and the second against device names. A single component
        is tried as an OS pattern first and as a device pattern when no OS
        matches. Exact device name matches win over partial ones, so
        "iPad Air" does not also return "iPad Air 2".

        Args:
            pattern: Pattern string; an empty pattern matches every device.

        Returns:
            List of DeviceListItem with freshly scanned bundles.

        Raises:
            InvalidPatternError: If the pattern has more than two components.
        """
        if len(pattern) == 0:
            return self.all_devices()

        os_pattern, device_pattern = self._parse_pattern(pattern)
        pairs = [
            (os_devices, device)
            for os_devices in self._matching_oses(os_pattern)
            for device in os_devices.devices.values()
        ]

        matches = (
            self._strict_device_matches(pairs, device_pattern)
            or self._partial_device_matches(pairs, device_pattern)
        )

        logger.debug(
            f"Pattern '{pattern}' (os={os_pattern!r}, device={device_pattern!r}) "
            f"matched {len(matches)} device(s)"
        )
        return [self._item(os_devices, device) for os_devices, device in matches]

    def all_devices(self) -> list[DeviceListItem]:
        """List every simulator in the device set."""
        return [
            self._item(os_devices, device)
            for os_devices in self._device_set.values()
            for device in os_devices.devices.values()
        ]

    @staticmethod
    def _item(os_devices: OSDevices, device: DeviceID) -> DeviceListItem:
        bundles = list(scan_installed_bundles(device).values())
        return DeviceListItem(os_devices, device, bundles)

    def _parse_pattern(self, pattern: str) -> tuple[Optional[str], Optional[str]]:
        components = [component.strip() for component in pattern.split(",")]

        if len(components) == 2:
            return components[0], components[1]

        if len(components) == 1:
            # Unknown whether this names an OS or a device; OS wins
            if self._matching_oses(components[0]):
                return components[0], None
            return None, components[0]

        raise InvalidPatternError(pattern)

    def _matching_oses(self, pattern: Optional[str]) -> list[OSDevices]:
        return [
            os_devices
            for os_devices in self._device_set.values()
            if (pattern or "") in str(os_devices.id)
        ]

    @staticmethod
    def _strict_device_matches(
        pairs: list[tuple[OSDevices, DeviceID]],
        pattern: Optional[str],
    ) -> list[tuple[OSDevices, DeviceID]]:
        return [pair for pair in pairs if pair[1].name == pattern]

    @staticmethod
    def _partial_device_matches(
        pairs: list[tuple[OSDevices, DeviceID]],
        pattern: Optional[str],
    ) -> list[tuple[OSDevices, DeviceID]]:
        return [pair for pair in pairs if (pattern or "") in pair[1].name]


class BundleQuery:
    """Implements bundle mode: finds one application by bundle ID suffix."""

    def __init__(self, device_set: DeviceSet):
        self._device_set = device_set

    def with_options(
        self,
        bundle_id: Optional[str],
        os_name: Optional[str] = None,
        device_name: Optional[str] = None,
    ) -> BundleInfo:
        """
        Find an installed application.

        Args:
            bundle_id: Bundle ID or a suffix of it ("MyApp" matches
                "com.example.MyApp").
            os_name: OS in "iOS 9.2" format. Defaults to the newest OS.
            device_name: Exact device name. Defaults to the device set's
                default device.

        Returns:
            BundleInfo of the single matching application.

        Raises:
            InvalidArgumentError: If bundle_id is missing.
            OSNotFoundError: If the OS is not in the device set.
            DeviceNotFoundError: If the OS has no such device.
            BundleNotFoundError: If no bundle ID ends with bundle_id.
            AmbiguousBundleIDError: If several bundle IDs end with bundle_id.
        """
        if not bundle_id:
            raise InvalidArgumentError("bundle ID is required")

        os_devices = self.os_named(os_name or self._device_set.default_os_name())
        device = self.device_named(
            os_devices, device_name or self._device_set.default_device_name
        )

        matches = [
            bundle
            for bundle in scan_installed_bundles(device).values()
            if bundle.bundle_id.endswith(bundle_id)
        ]

        if len(matches) > 1:
            raise AmbiguousBundleIDError(
                device, bundle_id, [bundle.bundle_id for bundle in matches]
            )
        if not matches:
            raise BundleNotFoundError(os_devices, device, bundle_id)

        logger.debug(f"'{bundle_id}' resolved to {matches[0].bundle_id} on {device.name}")
        return matches[0]

    def os_named(self, name: str) -> OSDevices:
        """Look up an OS by its exact "iOS 9.2" name."""
        os_devices = self._device_set.get(OSID.from_string(name))
        if os_devices is None:
            raise OSNotFoundError(name)
        return os_devices

    @staticmethod
    def device_named(os_devices: OSDevices, name: str) -> DeviceID:
        """Look up a device of an OS by its exact name."""
        device = os_devices.devices.get(name)
        if device is None:
            raise DeviceNotFoundError(os_devices, name)
        return device


def run_query(
    device_set: DeviceSet,
    request: Request,
) -> Union[list[DeviceListItem], BundleInfo]:
    """
    Answer a list or bundle request against a device set.

    Returns:
        List of DeviceListItem for a ListRequest, BundleInfo for a BundleRequest.
    """
    if isinstance(request, ListRequest):
        return DeviceListQuery(device_set).with_pattern(request.pattern)

    if isinstance(request, BundleRequest):
        return BundleQuery(device_set).with_options(
            request.bundle_id,
            os_name=request.os_name,
            device_name=request.device_name,
        )

    raise InvalidArgumentError(f"unsupported request {request!r}")
