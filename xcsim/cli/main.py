"""
Command-line entry point for xcsim.

The root group loads the configuration, sets up logging and shares a
console and the simulators root with the subcommands through the
click context. The device set itself is loaded lazily by the commands
that need it.

Usage:
    xcsim --help
    xcsim list "iOS 9.2, iPhone 5s"
    xcsim bundle com.example.MyApp
    xcsim --root /path/to/Devices os list
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from xcsim import __version__
from xcsim.config import Config, get_config
from xcsim.cli.commands import bundle, runtime, simulators
from xcsim.constants import DEFAULT_LOG_LEVEL
from xcsim.exceptions import XCSimError

console = Console()


def resolve_log_level(verbose: bool, debug: bool, configured: str = DEFAULT_LOG_LEVEL) -> int:
    """
    Pick the log level for a run.

    --debug beats -v, and both beat the configured level. An unknown
    configured level name falls back to WARNING.
    """
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO

    level = logging.getLevelName(configured.upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int) -> None:
    """Route log records through a Rich handler on the shared console."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="xcsim")
@click.option("-v", "--verbose", is_flag=True, help="Log query progress.")
@click.option("--debug", is_flag=True, help="Log everything, including skipped entries.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Config file (default: ~/.xcsim/config.json).",
)
@click.option(
    "--root",
    type=click.Path(file_okay=False),
    help="Simulators root (default: ~/Library/Developer/CoreSimulator/Devices).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    debug: bool,
    config_path: Optional[str],
    root: Optional[str],
) -> None:
    """
    xcsim - Locate applications installed on iOS Simulators.

    \b
    List the simulators matching a pattern:
        $ xcsim list "iOS 9.2"
    Print where an application keeps its data:
        $ xcsim bundle com.example.MyApp --device "iPad Air"
    Show the simulator OS versions:
        $ xcsim os list
    """
    config = Config.load(Path(config_path)) if config_path else get_config()
    configure_logging(resolve_log_level(verbose, debug, config.log_level))

    ctx.ensure_object(dict)
    ctx.obj.update(console=console, config=config, verbose=verbose, debug=debug)
    if root:
        ctx.obj["root"] = Path(root)


cli.add_command(simulators.list_cmd)
cli.add_command(bundle.bundle_cmd)
cli.add_command(runtime.runtime)


def main() -> None:
    """Run the CLI, turning uncaught xcsim and filesystem errors into exit codes."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except (XCSimError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        if "--debug" in sys.argv:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
