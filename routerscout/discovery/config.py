"""Scan configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# SSH, HTTP, alt web (81, 88), HTTPS, TR-069 CPE management, HTTP-alt
DEFAULT_PORTS: list[int] = [22, 80, 81, 88, 443, 7547, 8080]

DEFAULT_VENDOR_KEYWORDS: list[str] = [
    "router",
    "asus",
    "tplink",
    "d-link",
    "linksys",
    "netgear",
    "huawei",
    "zyxel",
    "mikrotik",
    "ubiquiti",
    "edgeos",
]

DEFAULT_ADMIN_KEYWORDS: list[str] = ["login", "password", "router", "admin"]


class ScanConfig(BaseModel):
    ports: list[int] = Field(default_factory=lambda: list(DEFAULT_PORTS))
    connect_timeout: float = 1.0
    port_probe_timeout: float = 2.0
    http_timeout: float = 3.0
    upnp_timeout: float = 2.0
    admin_timeout: float = 2.0
    upnp_port: int = 1900
    admin_path: str = "/admin/"
    admin_max_lines: int = 20
    admin_max_bytes: int = 4096
    upnp_max_bytes: int = 8192
    max_concurrency: int = Field(default=10, ge=1)
    range_policy: str = "general"
    max_hosts: int = Field(default=1024, ge=1)  # cap for the cidr policy
    concurrent_checks: bool = True
    vendor_keywords: list[str] = Field(default_factory=lambda: list(DEFAULT_VENDOR_KEYWORDS))
    admin_keywords: list[str] = Field(default_factory=lambda: list(DEFAULT_ADMIN_KEYWORDS))
    interfaces: list[str] = Field(default_factory=list)  # empty: all non-virtual
    probe_gateway: bool = True

    @field_validator("ports")
    @classmethod
    def _check_ports(cls, ports: list[int]) -> list[int]:
        for port in ports:
            if not 0 < port < 65536:
                raise ValueError(f"Invalid TCP port: {port}")
        return ports

    @field_validator("admin_path")
    @classmethod
    def _check_admin_path(cls, path: str) -> str:
        return path if path.startswith("/") else f"/{path}"
