"""Evidence classification rules.

Rules are evaluated in order and the first one that returns a
``Classification`` wins. Protocol-level self identification (``Server``
header, UPnP answer) and an authentication surface on the admin page confirm
a router; open ports or unmatched headers only mark a possible device.
"""

from __future__ import annotations

from typing import Callable, Optional

from routerscout.discovery.config import DEFAULT_ADMIN_KEYWORDS, DEFAULT_VENDOR_KEYWORDS
from routerscout.discovery.models import Classification, Evidence, Reason

Rule = Callable[[Evidence, list[str], list[str]], Optional[Classification]]


def _first_keyword(text: str, keywords: list[str]) -> str:
    lower = text.lower()
    for keyword in keywords:
        if keyword.lower() in lower:
            return keyword
    return ""


def _server_header_rule(
    evidence: Evidence, vendor_keywords: list[str], admin_keywords: list[str]
) -> Optional[Classification]:
    if evidence.server_header and _first_keyword(evidence.server_header, vendor_keywords):
        return Classification.confirmed(Reason.SERVER_HEADER, evidence.server_header)
    return None


def _upnp_rule(
    evidence: Evidence, vendor_keywords: list[str], admin_keywords: list[str]
) -> Optional[Classification]:
    if evidence.upnp_body:
        return Classification.confirmed(Reason.UPNP)
    return None


def _admin_page_rule(
    evidence: Evidence, vendor_keywords: list[str], admin_keywords: list[str]
) -> Optional[Classification]:
    if evidence.admin_snippet:
        keyword = _first_keyword(evidence.admin_snippet, admin_keywords)
        if keyword:
            return Classification.confirmed(Reason.ADMIN_PAGE, keyword)
    return None


def _weak_signal_rule(
    evidence: Evidence, vendor_keywords: list[str], admin_keywords: list[str]
) -> Optional[Classification]:
    signals: list[str] = []
    if evidence.open_ports:
        signals.append("ports " + ",".join(str(p) for p in evidence.open_ports))
    if evidence.server_header:
        signals.append(f"server {evidence.server_header}")
    if evidence.location_header:
        signals.append(f"location {evidence.location_header}")
    if signals:
        return Classification.possible("; ".join(signals))
    return None


CLASSIFICATION_RULES: list[tuple[str, Rule]] = [
    ("server-header", _server_header_rule),
    ("upnp", _upnp_rule),
    ("admin-page", _admin_page_rule),
    ("weak-signal", _weak_signal_rule),
]


def classify(
    evidence: Evidence,
    vendor_keywords: list[str] | None = None,
    admin_keywords: list[str] | None = None,
) -> Classification:
    """Map evidence to exactly one classification, first matching rule wins."""
    vendor_keywords = DEFAULT_VENDOR_KEYWORDS if vendor_keywords is None else vendor_keywords
    admin_keywords = DEFAULT_ADMIN_KEYWORDS if admin_keywords is None else admin_keywords

    for _, rule in CLASSIFICATION_RULES:
        result = rule(evidence, vendor_keywords, admin_keywords)
        if result is not None:
            return result
    return Classification.no_match()
