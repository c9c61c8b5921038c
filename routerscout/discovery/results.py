"""Result collection and presentation."""

from __future__ import annotations

import ipaddress
import threading
from pathlib import Path

from loguru import logger
from tabulate import tabulate

from routerscout.discovery.models import DeviceRecord, ScanResult, Verdict

FOUND_FILENAME = "found_routers.txt"
POSSIBLE_FILENAME = "possible_routers.txt"


def _ip_key(record: DeviceRecord) -> ipaddress.IPv4Address:
    return ipaddress.IPv4Address(record.ip)


class ResultSink:
    """Thread-safe store of confirmed and possible devices keyed by address.

    A confirmed record replaces a possible one for the same address; a later
    possible or no-match record never downgrades a confirmed one.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._confirmed: dict[str, DeviceRecord] = {}
        self._possible: dict[str, DeviceRecord] = {}
        self._recorded = 0

    def add(self, record: DeviceRecord) -> None:
        verdict = record.classification.verdict
        with self._lock:
            self._recorded += 1
            if verdict == Verdict.CONFIRMED:
                if record.ip in self._confirmed:
                    return
                self._possible.pop(record.ip, None)
                self._confirmed[record.ip] = record
            elif verdict == Verdict.POSSIBLE:
                if record.ip in self._confirmed or record.ip in self._possible:
                    return
                self._possible[record.ip] = record

    @property
    def recorded(self) -> int:
        """Number of records received, including no-match ones."""
        with self._lock:
            return self._recorded

    def confirmed(self) -> list[DeviceRecord]:
        with self._lock:
            return sorted(self._confirmed.values(), key=_ip_key)

    def possible(self) -> list[DeviceRecord]:
        with self._lock:
            return sorted(self._possible.values(), key=_ip_key)


def render_text(result: ScanResult) -> str:
    """Plain listing: confirmed routers first, then possible devices."""
    lines: list[str] = ["=== SCAN RESULTS ==="]
    if result.confirmed:
        lines.append("Routers found:")
        lines.extend(r.line for r in result.confirmed)
    else:
        lines.append("No routers found")
    if result.possible:
        lines.append("Possible network devices:")
        lines.extend(r.line for r in result.possible)
    return "\n".join(lines)


def render_table(result: ScanResult) -> str:
    rows = [
        [r.ip, "router", r.classification.reason.value if r.classification.reason else "", r.label]
        for r in result.confirmed
    ]
    rows += [[r.ip, "possible", r.classification.detail, r.label] for r in result.possible]
    if not rows:
        return "No routers or network devices found"
    return tabulate(rows, headers=["Address", "Category", "Signal", "Description"], tablefmt="simple")


def render_json(result: ScanResult) -> str:
    return result.model_dump_json(indent=2)


RENDERERS = {
    "text": render_text,
    "table": render_table,
    "json": render_json,
}


def export_lists(result: ScanResult, directory: Path) -> tuple[Path, Path]:
    """Write one ``<ip> - <label>`` line per device into the two list files."""
    directory.mkdir(parents=True, exist_ok=True)
    found_path = directory / FOUND_FILENAME
    possible_path = directory / POSSIBLE_FILENAME
    found_path.write_text("".join(f"{r.line}\n" for r in result.confirmed))
    possible_path.write_text("".join(f"{r.line}\n" for r in result.possible))
    logger.info(
        f"Wrote {len(result.confirmed)} router(s) to {found_path}, "
        f"{len(result.possible)} device(s) to {possible_path}"
    )
    return found_path, possible_path
