"""Single-vendor gateway hunt by HTTP ``Server`` header."""

from __future__ import annotations

import threading

from loguru import logger

from routerscout.discovery._util import check_dependencies
from routerscout.discovery.config import ScanConfig
from routerscout.discovery.probes import HostProber
from routerscout.discovery.ranges import GATEWAY_POLICY, RangePolicy, generate_candidates
from routerscout.discovery.scanner import dispatch_bounded
from routerscout.discovery.topology import TopologyEnumerator

# Case-sensitive substrings of the Server header
VENDOR_MARKERS: dict[str, list[str]] = {
    "huawei": ["Huawei", "HW"],
    "mikrotik": ["MikroTik", "RouterOS"],
    "zyxel": ["ZyXEL", "Zyxel"],
    "tplink": ["TP-LINK", "TP-Link"],
}


class VendorHunter:
    """Stops at the first host whose ``Server`` header carries a vendor marker.

    The default gateway is checked first, then the gateway-oriented offset
    blocks of every interface's network.
    """

    def __init__(
        self,
        markers: list[str],
        config: ScanConfig | None = None,
        enumerator: TopologyEnumerator | None = None,
        prober: HostProber | None = None,
        policy: RangePolicy = GATEWAY_POLICY,
    ):
        self.markers = markers
        self.config = config or ScanConfig()
        self.enumerator = enumerator or TopologyEnumerator(self.config.interfaces)
        self.prober = prober or HostProber(self.config)
        self.policy = policy

    def check(self, ip: str) -> tuple[str, str] | None:
        """Return ``(ip, server_header)`` when the header carries a marker."""
        server, _ = self.prober.fetch_http_headers(ip)
        if server and any(marker in server for marker in self.markers):
            return ip, server
        return None

    def hunt(self, deadline: float | None = None) -> tuple[str, str] | None:
        check_dependencies()

        gateway = self.enumerator.default_gateway()
        if gateway:
            logger.info(f"Current gateway: {gateway}")
            match = self.check(gateway)
            if match:
                self._report(match)
                return match

        found: list[tuple[str, str]] = []
        lock = threading.Lock()
        stop = threading.Event()

        def on_result(match: tuple[str, str] | None) -> None:
            if match is None:
                return
            with lock:
                found.append(match)
            stop.set()

        for iface in self.enumerator.list_interfaces():
            base = str(iface.network.network_address).rsplit(".", 1)[0]
            candidates = generate_candidates(base, self.policy)
            if not candidates:
                continue
            logger.info(f"Scanning {iface.cidr} on {iface.name}: {candidates[0]} - {candidates[-1]}")
            dispatch_bounded(
                candidates,
                self.check,
                on_result,
                max_concurrency=self.config.max_concurrency,
                deadline=deadline,
                stop_event=stop,
            )
            if found:
                match = found[0]
                self._report(match)
                return match

        logger.info("No matching router found on the network")
        return None

    @staticmethod
    def _report(match: tuple[str, str]) -> None:
        ip, server = match
        logger.success(f"Router found: {ip} (Server: {server})")
