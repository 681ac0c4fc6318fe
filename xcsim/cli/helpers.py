"""
Shared helpers for xcsim CLI commands.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console

from xcsim.config import get_config
from xcsim.core import DeviceSet

logger = logging.getLogger(__name__)


def get_console(ctx: click.Context) -> Console:
    """Get the Rich console from context."""
    if ctx.obj and "console" in ctx.obj:
        return ctx.obj["console"]
    return Console()


def get_device_set(ctx: click.Context) -> DeviceSet:
    """
    Get the device set for this invocation, loading it on first use.

    Raises:
        ConfigNotFoundError: If device_set.plist cannot be read.
    """
    ctx.ensure_object(dict)
    if "device_set" not in ctx.obj:
        config = ctx.obj.get("config") or get_config()
        root = ctx.obj.get("root") or config.simulators_root
        ctx.obj["device_set"] = DeviceSet.load(root, config.default_device)
        logger.debug(f"Device set loaded from {root}")
    return ctx.obj["device_set"]


def print_available_oses(console: Console, device_set: DeviceSet) -> None:
    """Print the runtimes of a device set, oldest first."""
    console.print("Available simulator OS:")
    for os_devices in sorted(device_set.values()):
        console.print(f"  {os_devices}")
