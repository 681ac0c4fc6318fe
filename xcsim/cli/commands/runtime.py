"""
Simulator runtime CLI commands.

Commands for listing installed simulator OS versions and their devices.
"""

from __future__ import annotations

import json
from typing import Optional

import click

from xcsim.cli.helpers import get_console, get_device_set
from xcsim.core import BundleQuery
from xcsim.exceptions import XCSimError


@click.group("os")
def runtime() -> None:
    """Inspect installed simulator OS versions."""
    pass


@runtime.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(ctx: click.Context, as_json: bool) -> None:
    """List simulator OS versions with at least one device."""
    console = get_console(ctx)

    try:
        device_set = get_device_set(ctx)
    except XCSimError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    oses = sorted(device_set.values())

    if as_json:
        output = [
            {"os": str(os_devices.id), "devices": sorted(os_devices.devices)}
            for os_devices in oses
        ]
        click.echo(json.dumps(output, indent=2))
        return

    if not oses:
        console.print("[yellow]No simulators found.[/yellow]")
        return

    console.print("Available simulator OS:")
    for os_devices in oses:
        console.print(f"  {os_devices}")


@runtime.command("default")
@click.pass_context
def default_cmd(ctx: click.Context) -> None:
    """Print the OS used when none is specified (the newest)."""
    console = get_console(ctx)

    try:
        click.echo(get_device_set(ctx).default_os_name())
    except XCSimError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)


@runtime.command("devices")
@click.option("--os", "-o", "os_name", help="OS in 'iOS 9.2' format (default: the newest).")
@click.pass_context
def devices_cmd(ctx: click.Context, os_name: Optional[str]) -> None:
    """List simulator devices available for an OS."""
    console = get_console(ctx)

    try:
        device_set = get_device_set(ctx)
        os_devices = BundleQuery(device_set).os_named(
            os_name or device_set.default_os_name()
        )
    except XCSimError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(f"Available simulators for {os_devices.id}:")
    for name in sorted(os_devices.devices):
        console.print(f"  {name}")
