"""
Custom exceptions for the xcsim package.

All xcsim-specific exceptions inherit from XCSimError to allow
catching all package exceptions with a single except clause.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence, Union

if TYPE_CHECKING:
    from xcsim.core.models import DeviceID, OSDevices


class XCSimError(Exception):
    """Base exception for all xcsim errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigNotFoundError(XCSimError):
    """The simulator device set descriptor is missing or unreadable."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        details = f"Path: {path}"
        if reason:
            details += f", Reason: {reason}"
        super().__init__("Device set not found", details)


# Query errors
class QueryError(XCSimError):
    """Base class for errors raised while answering a query."""

    pass


class InvalidPatternError(QueryError):
    """List mode pattern has more than two comma-separated components."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(
            "Invalid pattern",
            f"'{pattern}' should look like 'iOS 9.2, iPhone 5s'"
        )


class InvalidArgumentError(QueryError):
    """A required argument is missing or empty."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__("Invalid argument", reason)


class OSNotFoundError(QueryError):
    """No simulator runtime matches the requested OS name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__("OS not found", f"Unknown OS '{name}'")


class DeviceNotFoundError(QueryError):
    """No simulator device with the requested name exists for the OS."""

    def __init__(self, os: OSDevices, name: str):
        self.os = os
        self.name = name
        super().__init__(
            "Device not found",
            f"Unknown device '{name}' for {os.id}"
        )


class BundleNotFoundError(QueryError):
    """No installed bundle ID ends with the requested bundle ID."""

    def __init__(self, os: OSDevices, device: DeviceID, bundle_id: str):
        self.os = os
        self.device = device
        self.bundle_id = bundle_id
        super().__init__(
            "Bundle not found",
            f"Unknown bundle ID '{bundle_id}' on {device.name} ({os.id})"
        )


class AmbiguousBundleIDError(QueryError):
    """Bundle ID suffix matches more than one installed bundle."""

    def __init__(self, device: DeviceID, bundle_id: str, matches: Sequence[str]):
        self.device = device
        self.bundle_id = bundle_id
        self.matches = list(matches)
        super().__init__(
            "Ambiguous bundle ID",
            f"Multiple bundles matching '{bundle_id}' found on {device.name}: "
            f"{', '.join(self.matches)}"
        )


class AmbiguousBundleDataError(XCSimError):
    """Several container directories claim the same bundle ID on one device."""

    def __init__(
        self,
        device: DeviceID,
        bundle_id: str,
        directories: Sequence[Union[str, Path]],
    ):
        self.device = device
        self.bundle_id = bundle_id
        self.directories = [Path(d) for d in directories]
        super().__init__(
            "Non-unique bundle directories",
            f"Multiple directories matching bundle ID '{bundle_id}' found on "
            f"{device.name}: {', '.join(str(d) for d in self.directories)}"
        )
