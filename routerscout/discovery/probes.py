"""HostProber — per-candidate evidence collection (ports, HTTP, UPnP, admin page)."""

from __future__ import annotations

import codecs
import concurrent.futures
import socket
import time

import requests
from loguru import logger

from routerscout.discovery.classify import classify
from routerscout.discovery.config import ScanConfig
from routerscout.discovery.models import Evidence, Verdict

UPNP_HEADERS: dict[str, str] = {
    "ST": "upnp:rootdevice",
    "MAN": '"ssdp:discover"',
    "MX": "1",
}


def _read_body(resp: requests.Response, max_bytes: int, deadline: float) -> bytes:
    """Read at most ``max_bytes`` of a streamed body, stopping once ``deadline`` passes."""
    chunks: list[bytes] = []
    received = 0
    for chunk in resp.iter_content(chunk_size=1024):
        chunks.append(chunk)
        received += len(chunk)
        if received >= max_bytes:
            break
        if time.monotonic() >= deadline:
            logger.debug(f"{resp.url}: read deadline reached after {received} bytes")
            break
    return b"".join(chunks)[:max_bytes]


def _decode(data: bytes, encoding: str | None) -> str:
    """Decode with the server-declared charset, falling back to UTF-8 for unknown ones."""
    encoding = encoding or "utf-8"
    try:
        codecs.lookup(encoding)
    except LookupError:
        encoding = "utf-8"
    return data.decode(encoding, errors="replace")


class HostProber:
    """Runs the four detection checks against one address.

    Every check is individually time-bounded. A refused connection, a timeout
    or any other transport error just means that piece of evidence is absent.
    """

    def __init__(self, config: ScanConfig | None = None):
        self.config = config or ScanConfig()

    def check_ports(self, ip: str) -> list[int]:
        """TCP connect to each configured port within the overall port-probe budget."""
        open_ports: list[int] = []
        deadline = time.monotonic() + self.config.port_probe_timeout

        for port in self.config.ports:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.debug(f"{ip}: port probe budget exhausted before port {port}")
                break
            try:
                with socket.create_connection((ip, port), timeout=min(self.config.connect_timeout, remaining)):
                    open_ports.append(port)
            except OSError as e:
                logger.debug(f"{ip}:{port} closed ({e})")

        return open_ports

    def fetch_http_headers(self, ip: str) -> tuple[str | None, str | None]:
        """HEAD ``http://<ip>/``; return (Server, Location) headers."""
        try:
            resp = requests.head(f"http://{ip}/", timeout=self.config.http_timeout, allow_redirects=False)
        except requests.RequestException as e:
            logger.debug(f"{ip}: HTTP header probe failed: {e}")
            return None, None

        server = resp.headers.get("Server") or None
        location = resp.headers.get("Location") or None
        return server, location

    def fetch_upnp(self, ip: str) -> str | None:
        """Unicast SSDP-style request to the UPnP port; any non-empty body counts."""
        url = f"http://{ip}:{self.config.upnp_port}/"
        deadline = time.monotonic() + self.config.upnp_timeout
        try:
            with requests.get(
                url, headers=UPNP_HEADERS, timeout=self.config.upnp_timeout, allow_redirects=False, stream=True
            ) as resp:
                data = _read_body(resp, self.config.upnp_max_bytes, deadline)
                encoding = resp.encoding
        except requests.RequestException as e:
            logger.debug(f"{ip}: UPnP probe failed: {e}")
            return None

        body = _decode(data, encoding).strip()
        return body or None

    def fetch_admin_page(self, ip: str) -> str | None:
        """GET the admin path and return the leading lines of the body."""
        url = f"http://{ip}{self.config.admin_path}"
        deadline = time.monotonic() + self.config.admin_timeout
        try:
            with requests.get(url, timeout=self.config.admin_timeout, allow_redirects=False, stream=True) as resp:
                data = _read_body(resp, self.config.admin_max_bytes, deadline)
                encoding = resp.encoding
        except requests.RequestException as e:
            logger.debug(f"{ip}: admin page probe failed: {e}")
            return None

        text = _decode(data, encoding)
        snippet = "\n".join(text.splitlines()[: self.config.admin_max_lines]).strip()
        return snippet or None

    def probe(self, ip: str) -> Evidence:
        """Collect all evidence for ``ip``."""
        if self.config.concurrent_checks:
            evidence = self._probe_concurrent(ip)
        else:
            evidence = self._probe_sequential(ip)
        self._log_evidence(evidence)
        return evidence

    def _probe_concurrent(self, ip: str) -> Evidence:
        with concurrent.futures.ThreadPoolExecutor(max_workers=4) as pool:
            ports_f = pool.submit(self.check_ports, ip)
            headers_f = pool.submit(self.fetch_http_headers, ip)
            upnp_f = pool.submit(self.fetch_upnp, ip)
            admin_f = pool.submit(self.fetch_admin_page, ip)

            server, location = headers_f.result()
            return Evidence(
                ip=ip,
                open_ports=ports_f.result(),
                server_header=server,
                location_header=location,
                upnp_body=upnp_f.result(),
                admin_snippet=admin_f.result(),
            )

    def _probe_sequential(self, ip: str) -> Evidence:
        """Run checks in rule order and stop once the evidence already confirms a router."""
        evidence = Evidence(ip=ip)

        evidence.server_header, evidence.location_header = self.fetch_http_headers(ip)
        if self._is_confirmed(evidence):
            return evidence

        evidence.upnp_body = self.fetch_upnp(ip)
        if self._is_confirmed(evidence):
            return evidence

        evidence.admin_snippet = self.fetch_admin_page(ip)
        if self._is_confirmed(evidence):
            return evidence

        evidence.open_ports = self.check_ports(ip)
        return evidence

    def _is_confirmed(self, evidence: Evidence) -> bool:
        result = classify(evidence, self.config.vendor_keywords, self.config.admin_keywords)
        return result.verdict == Verdict.CONFIRMED

    @staticmethod
    def _log_evidence(evidence: Evidence) -> None:
        ip = evidence.ip
        if evidence.open_ports:
            logger.info(f"{ip}: open ports: {' '.join(str(p) for p in evidence.open_ports)}")
        if evidence.server_header:
            logger.info(f"{ip}: HTTP server: {evidence.server_header}")
        if evidence.location_header:
            logger.info(f"{ip}: redirect: {evidence.location_header}")
