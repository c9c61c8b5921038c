"""Pydantic models and enums for router discovery."""

from __future__ import annotations

import ipaddress
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Verdict(str, Enum):
    CONFIRMED = "confirmed"
    POSSIBLE = "possible"
    NO_MATCH = "no-match"


class Reason(str, Enum):
    SERVER_HEADER = "server-header"
    UPNP = "upnp"
    ADMIN_PAGE = "admin-page"
    WEAK_SIGNAL = "weak-signal"


# Presentation tags per reason; server-header records show the header itself
REASON_LABELS: dict[Reason, str] = {
    Reason.UPNP: "UPnP device",
    Reason.ADMIN_PAGE: "Web interface",
    Reason.WEAK_SIGNAL: "Unidentified network device",
}


class NetworkInterface(BaseModel):
    name: str
    ip: str
    prefix_len: int = 24

    @property
    def cidr(self) -> str:
        return f"{self.ip}/{self.prefix_len}"

    @property
    def network(self) -> ipaddress.IPv4Network:
        return ipaddress.IPv4Network(self.cidr, strict=False)

    @property
    def base(self) -> str:
        """First three octets of the interface address, e.g. ``192.168.1``."""
        return self.ip.rsplit(".", 1)[0]


class Evidence(BaseModel):
    ip: str
    open_ports: list[int] = Field(default_factory=list)
    server_header: Optional[str] = None
    location_header: Optional[str] = None
    upnp_body: Optional[str] = None
    admin_snippet: Optional[str] = None


class Classification(BaseModel):
    verdict: Verdict
    reason: Optional[Reason] = None
    detail: str = ""  # matched header text or keyword

    @classmethod
    def confirmed(cls, reason: Reason, detail: str = "") -> Classification:
        return cls(verdict=Verdict.CONFIRMED, reason=reason, detail=detail)

    @classmethod
    def possible(cls, detail: str = "") -> Classification:
        return cls(verdict=Verdict.POSSIBLE, reason=Reason.WEAK_SIGNAL, detail=detail)

    @classmethod
    def no_match(cls) -> Classification:
        return cls(verdict=Verdict.NO_MATCH)


class DeviceRecord(BaseModel):
    ip: str
    classification: Classification
    evidence: Optional[Evidence] = None

    @property
    def label(self) -> str:
        reason = self.classification.reason
        if reason == Reason.SERVER_HEADER:
            return self.classification.detail
        if reason is None:
            return ""
        return REASON_LABELS[reason]

    @property
    def line(self) -> str:
        return f"{self.ip} - {self.label}"


class ScanResult(BaseModel):
    interfaces: list[NetworkInterface] = Field(default_factory=list)
    scanned_subnets: list[str] = Field(default_factory=list)
    gateway: Optional[str] = None
    probed: int = 0
    confirmed: list[DeviceRecord] = Field(default_factory=list)
    possible: list[DeviceRecord] = Field(default_factory=list)
    timestamp: str = ""
