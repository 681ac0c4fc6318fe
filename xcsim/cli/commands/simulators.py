"""
CLI command for listing simulators.

Finds simulators by an "OS, device" pattern and prints the most
useful summary of the result.
"""

from __future__ import annotations

import json
import logging

import click
from rich.console import Console
from rich.table import Table

from xcsim.cli.helpers import get_console, get_device_set, print_available_oses
from xcsim.core import (
    DeviceListItem,
    ListRequest,
    Report,
    ReportKind,
    report_from_device_list,
    run_query,
)
from xcsim.exceptions import XCSimError

logger = logging.getLogger(__name__)


def print_report(console: Console, report: Report, items: list[DeviceListItem]) -> None:
    """Print a summarized list result."""
    if report.kind == ReportKind.BUNDLES:
        if not report.entries:
            console.print(f"[dim]No applications installed on {items[0].full_name}.[/dim]")
            return

        table = Table(title=f"Applications installed on {items[0].full_name}")
        table.add_column("Bundle ID", style="cyan", no_wrap=True)
        table.add_column("Data directory", style="dim", overflow="fold")
        for bundle in report.entries:
            table.add_row(bundle.bundle_id, str(bundle.data_path or "-"))
        console.print(table)

    elif report.kind in (ReportKind.DEVICES, ReportKind.OSES):
        if report.kind == ReportKind.DEVICES:
            console.print(f"Available simulators for {items[0].os.id}:")
        else:
            console.print("Available simulator OS:")
        for line in report.lines():
            console.print(f"  {line}")

    else:
        table = Table(title="Matching simulators")
        table.add_column("Device", style="cyan", no_wrap=True)
        table.add_column("OS", style="green")
        table.add_column("Apps", justify="right")
        for item in report.entries:
            table.add_row(item.short_name, str(item.os.id), str(len(item.bundles)))
        console.print(table)


@click.command("list")
@click.argument("pattern", nargs=-1)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(ctx: click.Context, pattern: tuple[str, ...], as_json: bool) -> None:
    """
    List simulators matching PATTERN.

    PATTERN partially matches an OS version and/or a device model in
    "iOS 9.2, iPhone 5s" format. A pattern without a comma is matched
    against OS versions first and against device models if no OS matches.

    Examples:

        $ xcsim list
        $ xcsim list iOS 9.2
        $ xcsim list iPad
        $ xcsim list "9, iPhone"
        $ xcsim list "iOS 9.2, iPhone 5s"
    """
    console = get_console(ctx)
    text = " ".join(pattern)

    try:
        device_set = get_device_set(ctx)
        items = run_query(device_set, ListRequest(text))

        if as_json:
            click.echo(json.dumps([item.to_dict() for item in items], indent=2))
            return

        if not items:
            console.print(f"[yellow]No simulators matching '{text}'.[/yellow]")
            print_available_oses(console, device_set)
            return

        print_report(console, report_from_device_list(items), items)

    except XCSimError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)
