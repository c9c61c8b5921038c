"""CLI entry point for the single-vendor router hunt — standalone-capable."""

from __future__ import annotations

import argparse
import sys
import time

from loguru import logger

from routerscout.discovery.config import ScanConfig
from routerscout.discovery.hunt import VENDOR_MARKERS, VendorHunter
from routerscout.exceptions import RouterScoutError


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Build argparse parser for the vendor hunt."""
    parser = argparse.ArgumentParser(
        description="Look for one vendor's router by its HTTP Server header; exit 0 when found",
    )
    parser.add_argument(
        "vendor",
        nargs="?",
        choices=sorted(VENDOR_MARKERS),
        default="huawei",
        help="Vendor to look for (default: huawei)",
    )
    parser.add_argument(
        "-m",
        "--marker",
        action="append",
        help="Extra Server header substring to match (repeatable, case-sensitive)",
    )
    parser.add_argument(
        "-i",
        "--interface",
        help="Interface(s) to scan, comma-separated (default: all non-virtual interfaces)",
    )
    parser.add_argument(
        "-c",
        "--concurrency",
        type=int,
        default=45,
        help="Maximum hosts probed at the same time (default: 45, one full gateway range)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=2.0,
        help="HTTP timeout per host in seconds (default: 2)",
    )
    parser.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="Stop dispatching new hosts after this many seconds",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose logging",
    )
    parsed = parser.parse_args(args)
    if parsed.concurrency < 1:
        parser.error("--concurrency must be at least 1")
    return parsed


def main(args: list[str] | None = None) -> None:
    """Main entry point for the hunt CLI. Exits 0 when a router was found, 1 otherwise."""
    parsed = parse_args(args)

    logger.enable("routerscout")
    if not parsed.verbose:
        logger.remove()
        logger.add(sys.stderr, level="INFO")

    markers = list(VENDOR_MARKERS[parsed.vendor]) + (parsed.marker or [])
    interfaces = [i.strip() for i in parsed.interface.split(",") if i.strip()] if parsed.interface else []
    config = ScanConfig(interfaces=interfaces, max_concurrency=parsed.concurrency, http_timeout=parsed.timeout)
    deadline = time.monotonic() + parsed.deadline if parsed.deadline else None

    try:
        match = VendorHunter(markers, config=config).hunt(deadline=deadline)
    except RouterScoutError as e:
        logger.error(str(e))
        sys.exit(1)

    if match is None:
        print(f"No {parsed.vendor} router found on the network.")
        sys.exit(1)

    ip, server = match
    print(f"Found {parsed.vendor} router: {ip}")
    print(f"Server header: {server}")
    sys.exit(0)
