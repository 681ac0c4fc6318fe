"""
xcsim - iOS Simulator application directory lookup.

This package indexes the iOS, watchOS and tvOS simulators installed on
a development machine and resolves the bundle and data directories of
the applications installed on them.
"""

__version__ = "0.1.0"
__author__ = "xcsim Contributors"

from xcsim.core import (
    BundleInfo,
    BundleQuery,
    DeviceID,
    DeviceListItem,
    DeviceListQuery,
    DeviceSet,
    OSDevices,
    OSID,
    report_from_device_list,
)

__all__ = [
    "BundleInfo",
    "BundleQuery",
    "DeviceID",
    "DeviceListItem",
    "DeviceListQuery",
    "DeviceSet",
    "OSDevices",
    "OSID",
    "report_from_device_list",
    "__version__",
]
