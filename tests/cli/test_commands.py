"""
Tests for CLI commands.

Tests the command-line interface for xcsim against a fake simulators root.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from xcsim.cli.main import cli

from tests.conftest import IOS92_IPHONE_5S


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner: CliRunner, simulators_root: Path):
    """Invoke the CLI against the fake simulators root."""

    def _invoke(*args: str):
        return cli_runner.invoke(cli, ["--root", str(simulators_root), *args])

    return _invoke


class TestListCommand:
    """Tests for 'xcsim list'."""

    def test_list_single_simulator(self, invoke) -> None:
        """Should show installed bundles for a single simulator."""
        result = invoke("list", "iOS 9.2, iPhone 5s")

        assert result.exit_code == 0
        assert "com.acme.App" in result.output
        assert "org.example.MyApp" in result.output

    def test_list_joins_words(self, invoke) -> None:
        """Pattern words should be joined with spaces."""
        result = invoke("list", "iOS", "9.2,", "iPhone", "5s")

        assert result.exit_code == 0
        assert "com.acme.Widget" in result.output

    def test_list_os(self, invoke) -> None:
        """Should show device names for a single OS."""
        result = invoke("list", "iOS 8.4")

        assert result.exit_code == 0
        assert "Available simulators for iOS 8.4" in result.output
        assert "iPhone 6" in result.output

    def test_list_os_summaries(self, invoke) -> None:
        """Should show OS summaries for several OSes."""
        result = invoke("list", "iOS")

        assert result.exit_code == 0
        assert "iOS 9.2 (3 devices)" in result.output
        assert "iOS 8.4 (2 devices)" in result.output

    def test_list_everything(self, invoke) -> None:
        """Should list every simulator without a pattern."""
        result = invoke("list")

        assert result.exit_code == 0
        assert "Apple Watch 38mm" in result.output
        assert "iPad Air 2" in result.output

    def test_list_device_across_oses(self, invoke) -> None:
        """Should show a table when one device model spans several OSes."""
        result = invoke("list", "iPhone 5s")

        assert result.exit_code == 0
        assert "Matching simulators" in result.output
        assert "iPhone 5s" in result.output
        assert "iOS 8.4" in result.output

    def test_list_json(self, invoke) -> None:
        """Should output JSON when --json flag used."""
        result = invoke("list", "--json", "iOS 9.2, iPhone 5s")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data) == 1
        assert data[0]["os"] == "iOS 9.2"
        assert data[0]["device"] == "iPhone 5s"
        assert data[0]["guid"] == IOS92_IPHONE_5S
        assert len(data[0]["bundles"]) == 3

    def test_list_no_match(self, invoke) -> None:
        """Should show the pattern and the available OSes when nothing matches."""
        result = invoke("list", "Nokia")

        assert result.exit_code == 0
        assert "No simulators matching 'Nokia'" in result.output
        assert "Available simulator OS" in result.output
        assert "watchOS 2.1 (1 devices)" in result.output

    def test_list_invalid_pattern(self, invoke) -> None:
        """Should fail for patterns with too many components."""
        result = invoke("list", "a, b, c")

        assert result.exit_code == 1
        assert "Invalid pattern" in result.output

    def test_missing_device_set(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        """Should fail when device_set.plist is missing."""
        result = cli_runner.invoke(cli, ["--root", str(tmp_path), "list"])

        assert result.exit_code == 1
        assert "Device set not found" in result.output


class TestBundleCommand:
    """Tests for 'xcsim bundle'."""

    def test_prints_data_path(self, invoke, simulators_root: Path) -> None:
        """Should print the data directory by default."""
        result = invoke("bundle", "MyApp")

        assert result.exit_code == 0
        path = Path(result.output.strip())
        assert path.is_dir()
        assert path.parent == (
            simulators_root / IOS92_IPHONE_5S / "data/Containers/Data/Application"
        )

    def test_prints_bundle_path(self, invoke, simulators_root: Path) -> None:
        """Should print the bundle directory with --bundle."""
        result = invoke("bundle", "MyApp", "--bundle")

        assert result.exit_code == 0
        path = Path(result.output.strip())
        assert path.parent == (
            simulators_root / IOS92_IPHONE_5S / "data/Containers/Bundle/Application"
        )

    def test_os_and_device(self, invoke) -> None:
        """Should honor --os and --device."""
        result = invoke("bundle", "App", "--os", "iOS 8.4", "-d", "iPhone 5s")

        assert result.exit_code == 0
        assert Path(result.output.strip()).is_dir()

    def test_json(self, invoke) -> None:
        """Should output JSON when --json flag used."""
        result = invoke("bundle", "Widget", "--json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["bundle_id"] == "com.acme.Widget"
        assert data["data_path"] is None

    def test_no_data_directory(self, invoke) -> None:
        """Should fail when the application has no data directory."""
        result = invoke("bundle", "Widget")

        assert result.exit_code == 1
        assert "no data directory" in result.output

    def test_open(self, invoke) -> None:
        """Should open the directory instead of printing it."""
        with patch("xcsim.cli.commands.bundle.click.launch") as mock_launch:
            result = invoke("bundle", "MyApp", "--open")

        assert result.exit_code == 0
        mock_launch.assert_called_once()
        assert Path(mock_launch.call_args[0][0]).is_dir()
        assert Path(mock_launch.call_args[0][0]).parent.name == "Application"
        assert mock_launch.call_args[1] == {}

    def test_unknown_os(self, invoke) -> None:
        """Should list available OSes for an unknown OS."""
        result = invoke("bundle", "App", "--os", "iOS 9")

        assert result.exit_code == 1
        assert "Unknown OS 'iOS 9'" in result.output
        assert "iOS 9.2 (3 devices)" in result.output

    def test_unknown_device(self, invoke) -> None:
        """Should list available devices for an unknown device."""
        result = invoke("bundle", "App", "--device", "iPad")

        assert result.exit_code == 1
        assert "Unknown device 'iPad'" in result.output
        assert "iPad Air 2" in result.output

    def test_unknown_bundle(self, invoke) -> None:
        """Should list installed applications for an unknown bundle."""
        result = invoke("bundle", "com.acme.Ap")

        assert result.exit_code == 1
        assert "Bundle not found" in result.output
        assert "'com.acme.Ap'" in result.output
        assert "com.acme.Widget" in result.output

    def test_ambiguous_bundle(self, invoke) -> None:
        """Should fail when the suffix matches several applications."""
        result = invoke("bundle", "App")

        assert result.exit_code == 1
        assert "Ambiguous bundle ID" in result.output


class TestOSCommands:
    """Tests for 'xcsim os'."""

    def test_os_list(self, invoke) -> None:
        """Should list OS versions."""
        result = invoke("os", "list")

        assert result.exit_code == 0
        assert "iOS 9.2 (3 devices)" in result.output
        assert "tvOS" not in result.output

    def test_os_list_json(self, invoke) -> None:
        """Should output JSON sorted by version."""
        result = invoke("os", "list", "--json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [entry["os"] for entry in data] == ["watchOS 2.1", "iOS 8.4", "iOS 9.2"]

    def test_os_default(self, invoke) -> None:
        """Should print the newest OS."""
        result = invoke("os", "default")

        assert result.exit_code == 0
        assert result.output.strip() == "iOS 9.2"

    def test_os_devices(self, invoke) -> None:
        """Should list devices of the selected OS."""
        result = invoke("os", "devices", "--os", "iOS 8.4")

        assert result.exit_code == 0
        assert "iPhone 6" in result.output
        assert "iPad" not in result.output

    def test_os_devices_unknown(self, invoke) -> None:
        """Should fail for an unknown OS."""
        result = invoke("os", "devices", "-o", "iOS 7.1")

        assert result.exit_code == 1
        assert "Unknown OS" in result.output


class TestVersion:
    """Tests for --version."""

    def test_version(self, cli_runner: CliRunner) -> None:
        """Should print the version."""
        result = cli_runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output
