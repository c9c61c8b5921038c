"""Orchestrator CLI — dispatches to sub-CLIs.

Sub-commands:
  scan   Find routers and possible network devices on all local networks
  hunt   Look for a single vendor's router by HTTP Server header

Examples:
  routerscout scan -i eth0 --format table

  routerscout scan --policy full --export-dir ./results

  routerscout hunt huawei
"""

from __future__ import annotations

import os
import shutil
import sys

from tabulate import tabulate

from routerscout import __version__, configure_logging
from routerscout import glogger
from routerscout.discovery._util import REQUIRED_COMMANDS

COMMANDS = {
    "scan": ("routerscout.discovery.cli", "Router and network device scan"),
    "hunt": ("routerscout.discovery.hunt_cli", "Single-vendor router hunt"),
}


def _print_usage() -> None:
    print("usage: routerscout <command> [options]\n")
    print("Available commands:")
    for cmd, (_, desc) in COMMANDS.items():
        print(f"  {cmd:14s}  {desc}")
    print("\nRun 'routerscout <command> --help' for command-specific options.")


def _print_startup_banner() -> None:
    startup_rows = [
        ["version", __version__],
        ["python", sys.version.split()[0]],
        ["log level", os.environ.get("LOGURU_LEVEL", "DEBUG")],
    ]
    for cmd in REQUIRED_COMMANDS:
        startup_rows.append([cmd, shutil.which(cmd) or "not found"])

    table_str = tabulate(startup_rows, tablefmt="mixed_grid")
    lines = table_str.split("\n")
    table_width = len(lines[0])
    title = "routerscout starting up"
    title_border = "┍" + "━" * (table_width - 2) + "┑"
    title_row = "│ " + title.center(table_width - 4) + " │"
    separator = lines[0].replace("┍", "┝").replace("┑", "┥").replace("┯", "┿")

    glogger.opt(raw=True).info(
        "\n{}\n", title_border + "\n" + title_row + "\n" + separator + "\n" + "\n".join(lines[1:])
    )


def main() -> None:
    """Main entry point — dispatch to sub-CLI."""
    configure_logging()
    _print_startup_banner()

    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        _print_usage()
        sys.exit(0 if len(sys.argv) >= 2 else 1)

    command = sys.argv[1]
    if command not in COMMANDS:
        print(f"routerscout: unknown command '{command}'\n", file=sys.stderr)
        _print_usage()
        sys.exit(1)

    module_path, _ = COMMANDS[command]

    # Import and call the sub-CLI's main(), passing remaining args
    from importlib import import_module

    module = import_module(module_path)
    module.main(sys.argv[2:])


if __name__ == "__main__":
    main()
