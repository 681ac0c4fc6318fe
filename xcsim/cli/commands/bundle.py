"""
CLI command for locating an installed application.

Prints the data or bundle directory of an application installed on a
simulator, suitable for use in scripts.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import click

from xcsim.cli.helpers import get_console, get_device_set, print_available_oses
from xcsim.core import BundleRequest, run_query, scan_installed_bundles
from xcsim.exceptions import (
    BundleNotFoundError,
    DeviceNotFoundError,
    OSNotFoundError,
    XCSimError,
)

logger = logging.getLogger(__name__)


@click.command("bundle")
@click.argument("bundle_id")
@click.option("--os", "-o", "os_name", help="OS in 'iOS 9.2' format (default: the newest).")
@click.option("--device", "-d", "device_name", help="Device model (default: iPhone 5s).")
@click.option("--data", "show_data", is_flag=True, help="Print the application data directory (default).")
@click.option("--bundle", "show_bundle", is_flag=True, help="Print the bundle directory.")
@click.option("--open", "open_dir", is_flag=True, help="Open the directory in the file manager.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def bundle_cmd(
    ctx: click.Context,
    bundle_id: str,
    os_name: Optional[str],
    device_name: Optional[str],
    show_data: bool,
    show_bundle: bool,
    open_dir: bool,
    as_json: bool,
) -> None:
    """
    Print the directory of an installed application.

    BUNDLE_ID may be a suffix of the full bundle ID, so "MyApp" finds
    "com.example.MyApp" as long as no other application matches.

    Examples:

        $ xcsim bundle com.example.MyApp
        $ xcsim bundle MyApp --os "iOS 9.2" --device "iPad Air"
        $ xcsim bundle MyApp --bundle --open
    """
    console = get_console(ctx)

    try:
        device_set = get_device_set(ctx)
        bundle = run_query(device_set, BundleRequest(bundle_id, os_name, device_name))

    except OSNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        print_available_oses(console, get_device_set(ctx))
        raise SystemExit(1)

    except DeviceNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print(f"Available simulators for {e.os.id}:")
        for name in sorted(e.os.devices):
            console.print(f"  {name}")
        raise SystemExit(1)

    except BundleNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print(f"Applications installed on {e.device.name} ({e.os.id}):")
        for installed in sorted(scan_installed_bundles(e.device)):
            console.print(f"  {installed}")
        raise SystemExit(1)

    except XCSimError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(bundle.to_dict(), indent=2))
        return

    # --bundle wins over --data
    path = bundle.bundle_path if show_bundle else bundle.data_path
    if path is None:
        console.print(
            f"[red]Error:[/red] {bundle.bundle_id} has no data directory yet"
        )
        raise SystemExit(1)

    if open_dir:
        logger.info(f"Opening {path}")
        click.launch(str(path))
        return

    click.echo(str(path))
