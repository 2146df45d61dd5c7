"""Tests for the ddocmac entry point."""

import signal
import pytest
from click.testing import CliRunner
from unittest.mock import patch
from ddocmac.commands.app import cli
from ddocmac.config.settings import appsettings
from ddocmac.ddocmac import __version__, main, signal_handle


def test_version_flag():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert result.output == f"ddocmac {__version__}\n"


def test_quiet_flag_sets_setting():
    result = CliRunner().invoke(cli, ["-q", "expand"], input="x")
    assert result.exit_code == 0
    assert appsettings.beQuiet is True


def test_group_help_lists_commands():
    with patch("ddocmac.commands.base.console") as mock_console:
        result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    printed = " ".join(str(call.args[0]) for call in mock_console.print.call_args_list if call.args)
    assert "expand" in printed
    assert "macros" in printed


def test_main_registers_handler_and_runs_cli():
    with patch("ddocmac.ddocmac.cli") as mock_cli, patch(
        "ddocmac.ddocmac.signal.signal"
    ) as mock_signal:
        main()
    mock_signal.assert_called_once_with(signal.SIGINT, signal_handle)
    mock_cli.assert_called_once_with(prog_name="ddocmac")


def test_signal_handle_exits():
    with patch("ddocmac.ddocmac.console"):
        with pytest.raises(SystemExit) as excinfo:
            signal_handle(signal.SIGINT, None)
    assert excinfo.value.code == 130
