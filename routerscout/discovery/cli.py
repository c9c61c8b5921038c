"""CLI entry point for the router scan — standalone-capable."""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from loguru import logger

from routerscout.discovery.config import ScanConfig
from routerscout.discovery.ranges import POLICIES
from routerscout.discovery.results import RENDERERS, export_lists
from routerscout.discovery.scanner import ScanCoordinator
from routerscout.exceptions import RouterScoutError


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Build argparse parser for the router scan."""
    parser = argparse.ArgumentParser(
        description="Find routers and other network equipment on the local networks",
    )
    parser.add_argument(
        "-i",
        "--interface",
        help="Interface(s) to scan, comma-separated (default: all non-virtual interfaces)",
    )
    parser.add_argument(
        "-p",
        "--policy",
        choices=sorted(POLICIES),
        default="general",
        help="Candidate range policy (default: general = offsets 1-10 and 125-134)",
    )
    parser.add_argument(
        "-c",
        "--concurrency",
        type=int,
        default=10,
        help="Maximum hosts probed at the same time (default: 10)",
    )
    parser.add_argument(
        "--max-hosts",
        type=int,
        default=1024,
        help="Host cap per interface for the cidr policy (default: 1024)",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Run the per-host checks one after another, stopping at the first confirming signal",
    )
    parser.add_argument(
        "--no-gateway",
        action="store_true",
        help="Do not re-check the default gateway after the sweep",
    )
    parser.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="Stop dispatching new hosts after this many seconds",
    )
    parser.add_argument(
        "--format",
        choices=sorted(RENDERERS),
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--export-dir",
        metavar="DIR",
        help="Also write found_routers.txt and possible_routers.txt into DIR",
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
    if parsed.max_hosts < 1:
        parser.error("--max-hosts must be at least 1")
    return parsed


def _parse_interfaces(interface_str: str | None) -> list[str]:
    if not interface_str:
        return []
    return [i.strip() for i in interface_str.split(",") if i.strip()]


def build_config(parsed: argparse.Namespace) -> ScanConfig:
    return ScanConfig(
        interfaces=_parse_interfaces(parsed.interface),
        range_policy=parsed.policy,
        max_concurrency=parsed.concurrency,
        max_hosts=parsed.max_hosts,
        concurrent_checks=not parsed.sequential,
        probe_gateway=not parsed.no_gateway,
    )


def main(args: list[str] | None = None) -> None:
    """Main entry point for the scan CLI."""
    parsed = parse_args(args)

    logger.enable("routerscout")
    if not parsed.verbose:
        logger.remove()
        logger.add(sys.stderr, level="INFO")

    deadline = time.monotonic() + parsed.deadline if parsed.deadline else None

    try:
        coordinator = ScanCoordinator(build_config(parsed))
        result = coordinator.run(deadline=deadline)
    except RouterScoutError as e:
        logger.error(str(e))
        sys.exit(1)

    output = RENDERERS[parsed.format](result)

    if parsed.export_dir:
        export_lists(result, Path(parsed.export_dir))

    if parsed.output:
        Path(parsed.output).write_text(output + "\n")
        logger.info(f"Output written to {parsed.output}")
    else:
        print(output)
