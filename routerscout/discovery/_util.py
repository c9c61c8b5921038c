"""Shared helper functions for router discovery."""

from __future__ import annotations

import ipaddress
import re
import shutil
import subprocess

from loguru import logger

from routerscout.exceptions import MissingDependencyError

# iproute2 is the only external command the scanner shells out to
REQUIRED_COMMANDS: tuple[str, ...] = ("ip",)


def _run_cmd(cmd: list[str], timeout: int = 30) -> str:
    """Run a subprocess command and return stdout."""
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        return result.stdout
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.debug(f"Command {cmd[0]} failed: {e}")
        return ""


def _validate_interface_name(name: str) -> bool:
    """Validate interface name to prevent injection."""
    return bool(re.match(r"^[a-zA-Z0-9._-]+$", name))


def _validate_ip(ip: str) -> bool:
    """Validate IPv4 address string."""
    try:
        ipaddress.IPv4Address(ip)
        return True
    except ValueError:
        return False


def check_dependencies(commands: tuple[str, ...] = REQUIRED_COMMANDS) -> None:
    """Raise ``MissingDependencyError`` listing every command absent from PATH."""
    missing = [cmd for cmd in commands if shutil.which(cmd) is None]
    if missing:
        raise MissingDependencyError(missing)
