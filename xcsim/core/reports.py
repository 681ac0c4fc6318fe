"""
Human-readable summaries of list query results.

Depending on how many OS versions and device models a result covers,
the most useful view of it differs: the installed bundles for a single
simulator, the device names for a single OS, or a device count per OS.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from xcsim.core.models import DeviceListItem, OSID
from xcsim.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


class ReportKind(Enum):
    """What the entries of a Report are."""

    BUNDLES = "bundles"  # BundleInfo of a single simulator
    DEVICES = "devices"  # Device names within one OS
    OSES = "oses"  # "<OS> (<n> devices)" strings
    ITEMS = "items"  # DeviceListItem, unmodified


@dataclass
class Report:
    """Summary of a list query result."""

    kind: ReportKind
    entries: list[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def lines(self) -> list[str]:
        """Entries as display strings."""
        return [str(entry) for entry in self.entries]


def report_from_device_list(items: list[DeviceListItem]) -> Report:
    """
    Summarize list query results.

    The summary is chosen in this order:

    1. a single OS and device: the bundles installed on it
    2. a single OS: the device names
    3. no OS with exactly one device: "<OS> (<n> devices)" per OS
    4. otherwise: the items themselves

    Raises:
        InvalidArgumentError: If items is empty.
    """
    if not items:
        raise InvalidArgumentError("cannot summarize an empty device list")

    unique_oses = list(dict.fromkeys(item.os.id for item in items))
    unique_devices = list(dict.fromkeys(item.short_name for item in items))

    count_by_os: dict[OSID, int] = {}
    for item in items:
        count_by_os[item.os.id] = count_by_os.get(item.os.id, 0) + 1

    if len(unique_oses) == 1 and len(unique_devices) == 1:
        return Report(ReportKind.BUNDLES, list(items[0].bundles))

    if len(unique_oses) == 1:
        return Report(ReportKind.DEVICES, [item.short_name for item in items])

    if 1 not in count_by_os.values():
        return Report(
            ReportKind.OSES,
            [f"{os_id} ({count} devices)" for os_id, count in count_by_os.items()],
        )

    return Report(ReportKind.ITEMS, list(items))
