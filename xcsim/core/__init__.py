"""
xcsim core library modules.

This package contains the device set parser, the installed bundle
scanner, the list and bundle queries, and report summarization.
"""

from xcsim.core.bundles import locate_data_directory, scan_installed_bundles
from xcsim.core.device_set import DeviceSet
from xcsim.core.models import (
    BundleInfo,
    DeviceID,
    DeviceListItem,
    OSDevices,
    OSID,
)
from xcsim.core.query import (
    BundleQuery,
    BundleRequest,
    DeviceListQuery,
    ListRequest,
    run_query,
)
from xcsim.core.reports import Report, ReportKind, report_from_device_list

__all__ = [
    "BundleInfo",
    "BundleQuery",
    "BundleRequest",
    "DeviceID",
    "DeviceListItem",
    "DeviceListQuery",
    "DeviceSet",
    "ListRequest",
    "OSDevices",
    "OSID",
    "Report",
    "ReportKind",
    "locate_data_directory",
    "report_from_device_list",
    "run_query",
    "scan_installed_bundles",
]
