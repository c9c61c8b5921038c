"""Local interface and default route enumeration via iproute2."""

from __future__ import annotations

import fnmatch
import re

from loguru import logger

from routerscout.discovery._util import _run_cmd, _validate_interface_name, _validate_ip
from routerscout.discovery.models import NetworkInterface

# Loopback plus container, bridge and hypervisor interfaces
EXCLUDED_INTERFACE_PATTERNS: tuple[str, ...] = (
    "lo",
    "docker*",
    "br-*",
    "veth*",
    "virbr*",
    "vmnet*",
    "vboxnet*",
    "podman*",
    "cni*",
    "flannel*",
    "cali*",
    "lxcbr*",
    "lxdbr*",
)

# "2: eth0    inet 192.168.1.23/24 brd 192.168.1.255 scope global dynamic eth0\ ..."
_ADDR_LINE_RE = re.compile(r"^\d+:\s+(\S+)\s+inet\s+(\d+\.\d+\.\d+\.\d+)/(\d+)")
_DEFAULT_ROUTE_RE = re.compile(r"default via (\S+) dev (\S+)")


def is_excluded_interface(name: str) -> bool:
    """True for loopback and virtual/container interfaces."""
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in EXCLUDED_INTERFACE_PATTERNS)


class TopologyEnumerator:
    def __init__(self, interfaces: list[str] | None = None):
        self.interfaces = interfaces or []

    def list_interfaces(self) -> list[NetworkInterface]:
        """Return non-loopback, non-virtual interfaces with their first IPv4 address."""
        output = _run_cmd(["ip", "-o", "-4", "addr", "show"])
        if not output:
            logger.warning("No IPv4 interface information available")
            return []

        found: dict[str, NetworkInterface] = {}
        for line in output.splitlines():
            m = _ADDR_LINE_RE.match(line.strip())
            if not m:
                continue
            # "eth0.10@eth0" style names on some iproute2 versions
            name = m.group(1).split("@", 1)[0]
            if name in found or is_excluded_interface(name):
                continue
            if not _validate_interface_name(name):
                logger.debug(f"Ignoring interface with unexpected name: {name!r}")
                continue
            if self.interfaces and name not in self.interfaces:
                continue
            found[name] = NetworkInterface(name=name, ip=m.group(2), prefix_len=int(m.group(3)))

        if self.interfaces:
            for wanted in self.interfaces:
                if wanted not in found:
                    logger.warning(f"Interface {wanted} has no usable IPv4 address")

        logger.info(f"Found interfaces: {' '.join(found) or '(none)'}")
        return list(found.values())

    def default_gateway(self) -> str | None:
        """Return the first default-route gateway address, if any."""
        output = _run_cmd(["ip", "-4", "route", "show", "default"])
        for line in output.splitlines():
            m = _DEFAULT_ROUTE_RE.search(line)
            if m and _validate_ip(m.group(1)):
                return m.group(1)
        logger.info("No default gateway configured")
        return None
