"""Tests for routerscout/discovery/cli.py and hunt_cli.py"""

import json
from unittest.mock import MagicMock, patch

import pytest

from routerscout.discovery import hunt_cli
from routerscout.discovery.cli import _parse_interfaces, build_config, main, parse_args
from routerscout.discovery.models import Classification, DeviceRecord, Reason, ScanResult
from routerscout.exceptions import MissingDependencyError


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep the CLIs from reconfiguring the global loguru sinks."""
    with (
        patch("routerscout.discovery.cli.logger", MagicMock()),
        patch("routerscout.discovery.hunt_cli.logger", MagicMock()),
    ):
        yield


@pytest.fixture
def scan_result():
    """ScanResult with one confirmed router."""
    return ScanResult(
        scanned_subnets=["10.0.0.5/24"],
        confirmed=[DeviceRecord(ip="10.0.0.1", classification=Classification.confirmed(Reason.ADMIN_PAGE, "login"))],
    )


class TestParseArgs:
    """Tests for parse_args function."""

    def test_default_values(self):
        """Test default values are set."""
        args = parse_args([])

        assert args.policy == "general"
        assert args.concurrency == 10
        assert args.format == "text"
        assert args.sequential is False
        assert args.no_gateway is False
        assert args.deadline is None

    def test_all_flags(self):
        """Test all flags are parsed correctly."""
        args = parse_args(["-i", "eth0", "-p", "full", "-c", "4", "--sequential", "--no-gateway", "-v", "--format", "json"])

        assert args.interface == "eth0"
        assert args.policy == "full"
        assert args.concurrency == 4
        assert args.sequential is True
        assert args.no_gateway is True
        assert args.verbose is True
        assert args.format == "json"

    def test_unknown_policy_rejected(self):
        """Test policy choices are enforced."""
        with pytest.raises(SystemExit):
            parse_args(["-p", "everything"])

    def test_zero_concurrency_rejected(self):
        """Test concurrency below one is rejected."""
        with pytest.raises(SystemExit):
            parse_args(["-c", "0"])


class TestBuildConfig:
    """Tests for build_config and _parse_interfaces."""

    def test_interfaces_split_and_stripped(self):
        """Test comma-separated interfaces are split and empty parts skipped."""
        assert _parse_interfaces("eth0, wlan0,,") == ["eth0", "wlan0"]
        assert _parse_interfaces(None) == []

    def test_flags_mapped_to_config(self):
        """Test CLI flags map onto ScanConfig fields."""
        config = build_config(parse_args(["-i", "eth0", "-p", "gateway", "-c", "3", "--sequential", "--no-gateway"]))

        assert config.interfaces == ["eth0"]
        assert config.range_policy == "gateway"
        assert config.max_concurrency == 3
        assert config.concurrent_checks is False
        assert config.probe_gateway is False


class TestMain:
    """Tests for the scan CLI main function."""

    @patch("routerscout.discovery.cli.ScanCoordinator")
    def test_prints_text_report(self, mock_coordinator_cls, scan_result, capsys):
        """Test the text report goes to stdout."""
        mock_coordinator_cls.return_value.run.return_value = scan_result

        main([])

        out = capsys.readouterr().out
        assert "10.0.0.1 - Web interface" in out

    @patch("routerscout.discovery.cli.ScanCoordinator")
    def test_writes_json_and_exports(self, mock_coordinator_cls, scan_result, tmp_path):
        """Test JSON output file and list export."""
        mock_coordinator_cls.return_value.run.return_value = scan_result
        out_file = tmp_path / "result.json"

        main(["--format", "json", "-o", str(out_file), "--export-dir", str(tmp_path)])

        assert json.loads(out_file.read_text())["confirmed"][0]["ip"] == "10.0.0.1"
        assert (tmp_path / "found_routers.txt").read_text() == "10.0.0.1 - Web interface\n"

    @patch("routerscout.discovery.cli.ScanCoordinator")
    def test_missing_dependency_exits_nonzero(self, mock_coordinator_cls):
        """Test a missing external command exits with status 1."""
        mock_coordinator_cls.return_value.run.side_effect = MissingDependencyError(["ip"])

        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 1

    @patch("routerscout.discovery.cli.ScanCoordinator")
    def test_deadline_passed_to_run(self, mock_coordinator_cls, scan_result):
        """Test --deadline becomes a monotonic deadline."""
        mock_coordinator_cls.return_value.run.return_value = scan_result

        main(["--deadline", "30"])

        _, kwargs = mock_coordinator_cls.return_value.run.call_args
        assert kwargs["deadline"] is not None


class TestHuntCli:
    """Tests for the hunt CLI."""

    def test_default_vendor_is_huawei(self):
        """Test huawei is the default vendor."""
        assert hunt_cli.parse_args([]).vendor == "huawei"

    @patch("routerscout.discovery.hunt_cli.VendorHunter")
    def test_found_exits_zero(self, mock_hunter_cls, capsys):
        """Test a found router exits 0 and prints it."""
        mock_hunter_cls.return_value.hunt.return_value = ("192.168.100.1", "HuaweiHomeGateway")

        with pytest.raises(SystemExit) as exc_info:
            hunt_cli.main(["huawei"])

        assert exc_info.value.code == 0
        assert "192.168.100.1" in capsys.readouterr().out
        markers = mock_hunter_cls.call_args.args[0]
        assert markers == ["Huawei", "HW"]

    @patch("routerscout.discovery.hunt_cli.VendorHunter")
    def test_not_found_exits_one(self, mock_hunter_cls):
        """Test no router found exits 1."""
        mock_hunter_cls.return_value.hunt.return_value = None

        with pytest.raises(SystemExit) as exc_info:
            hunt_cli.main([])

        assert exc_info.value.code == 1

    @patch("routerscout.discovery.hunt_cli.VendorHunter")
    def test_extra_markers_appended(self, mock_hunter_cls):
        """Test --marker adds to the vendor's markers."""
        mock_hunter_cls.return_value.hunt.return_value = None

        with pytest.raises(SystemExit):
            hunt_cli.main(["mikrotik", "-m", "Webfig"])

        assert mock_hunter_cls.call_args.args[0] == ["MikroTik", "RouterOS", "Webfig"]
