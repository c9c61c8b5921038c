"""Tests for the routerscout orchestrator CLI (routerscout/__main__.py)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

import routerscout.__main__ as entry

_original_banner = entry._print_startup_banner


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Skip loguru sink setup and the startup banner."""
    with (
        patch.object(entry, "configure_logging"),
        patch.object(entry, "_print_startup_banner"),
    ):
        yield


class TestMain:
    """Tests for sub-command dispatch."""

    def test_no_arguments_prints_usage_and_exits_one(self, monkeypatch, capsys):
        """Running without a command prints usage and exits 1."""
        monkeypatch.setattr("sys.argv", ["routerscout"])

        with pytest.raises(SystemExit) as exc_info:
            entry.main()

        assert exc_info.value.code == 1
        assert "Available commands:" in capsys.readouterr().out

    def test_help_exits_zero(self, monkeypatch, capsys):
        """--help prints usage and exits 0."""
        monkeypatch.setattr("sys.argv", ["routerscout", "--help"])

        with pytest.raises(SystemExit) as exc_info:
            entry.main()

        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert "scan" in out
        assert "hunt" in out

    def test_unknown_command_exits_one(self, monkeypatch, capsys):
        """Unknown commands are reported on stderr."""
        monkeypatch.setattr("sys.argv", ["routerscout", "bogus"])

        with pytest.raises(SystemExit) as exc_info:
            entry.main()

        assert exc_info.value.code == 1
        assert "unknown command 'bogus'" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "command,module_path",
        [("scan", "routerscout.discovery.cli"), ("hunt", "routerscout.discovery.hunt_cli")],
    )
    def test_dispatches_remaining_args(self, monkeypatch, command, module_path):
        """Sub-command main() receives the remaining arguments."""
        monkeypatch.setattr("sys.argv", ["routerscout", command, "-v", "-i", "eth0"])
        module = MagicMock()

        with patch("importlib.import_module", return_value=module) as mock_import:
            entry.main()

        mock_import.assert_called_once_with(module_path)
        module.main.assert_called_once_with(["-v", "-i", "eth0"])



class TestStartupBanner:
    """Tests for the startup banner."""

    def test_banner_contains_version_and_title(self):
        """The raw banner log line carries the title and the version."""
        with patch.object(entry.glogger, "opt") as mock_opt:
            _original_banner()

        mock_opt.assert_called_once_with(raw=True)
        banner = mock_opt.return_value.info.call_args.args[1]
        assert "routerscout starting up" in banner
        assert entry.__version__ in banner

    @patch.object(entry.shutil, "which", return_value=None)
    def test_banner_reports_missing_ip_command(self, mock_which):
        """A missing iproute2 binary shows up in the banner before any scan starts."""
        with patch.object(entry.glogger, "opt") as mock_opt:
            _original_banner()

        banner = mock_opt.return_value.info.call_args.args[1]
        mock_which.assert_called_with("ip")
        assert "not found" in banner

    @patch.object(entry.shutil, "which", return_value="/usr/sbin/ip")
    def test_banner_reports_ip_path_and_log_level(self, mock_which, monkeypatch):
        """The banner lists the resolved ip binary and the active log level."""
        monkeypatch.setenv("LOGURU_LEVEL", "INFO")
        with patch.object(entry.glogger, "opt") as mock_opt:
            _original_banner()

        banner = mock_opt.return_value.info.call_args.args[1]
        assert "/usr/sbin/ip" in banner
        assert "INFO" in banner
