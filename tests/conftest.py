"""Shared fixtures for the routerscout test suite."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from routerscout.discovery.models import Evidence, NetworkInterface

# ── discovery fixtures ────────────────────────────────────────────────


@pytest.fixture()
def make_evidence():
    """Factory fixture returning an Evidence record with customizable fields."""

    def _make(**kwargs):
        defaults = {
            "ip": "192.168.1.1",
            "open_ports": [],
            "server_header": None,
            "location_header": None,
            "upnp_body": None,
            "admin_snippet": None,
        }
        defaults.update(kwargs)
        return Evidence(**defaults)

    return _make


@pytest.fixture()
def eth0():
    """Interface eth0 on 10.0.0.5/24."""
    return NetworkInterface(name="eth0", ip="10.0.0.5", prefix_len=24)


@pytest.fixture()
def mock_enumerator():
    """MagicMock of TopologyEnumerator with no interfaces and no gateway."""
    enumerator = MagicMock()
    enumerator.list_interfaces.return_value = []
    enumerator.default_gateway.return_value = None
    return enumerator


@pytest.fixture()
def evidence_prober():
    """Factory fixture: prober whose probe() returns preset Evidence per address.

    Addresses without a preset get empty evidence.
    """

    def _make(by_ip=None):
        by_ip = by_ip or {}
        prober = MagicMock()
        prober.probe.side_effect = lambda ip: by_ip.get(ip, Evidence(ip=ip))
        return prober

    return _make


@pytest.fixture()
def no_dependency_check(monkeypatch):
    """Pretend every required external command is installed."""
    monkeypatch.setattr("routerscout.discovery.scanner.check_dependencies", lambda: None)
    monkeypatch.setattr("routerscout.discovery.hunt.check_dependencies", lambda: None)
