"""
xcsim command-line interface.

This package provides the CLI for querying installed iOS Simulators
from the command line.
"""

from xcsim.cli.main import cli

__all__ = ["cli"]
