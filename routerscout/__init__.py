"""LAN router and gateway discovery.

Enumerates local IPv4 interfaces, probes a bounded set of candidate addresses
per subnet (open ports, HTTP headers, UPnP, admin page) and classifies each
host as a confirmed router, a possible network device, or neither.
"""

__version__ = "0.1.0"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Configure a default ``loguru`` sink with a convenient format and filter."""
    os.environ["LOGURU_LEVEL"] = os.getenv("LOGURU_LEVEL", "DEBUG")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"classname": "None", "skiplog": False})
    glogger.enable(__name__)


from routerscout.discovery.classify import classify  # noqa: E402
from routerscout.discovery.config import ScanConfig  # noqa: E402
from routerscout.discovery.scanner import ScanCoordinator  # noqa: E402
from routerscout.exceptions import (  # noqa: E402
    InvalidRangePolicyError,
    MissingDependencyError,
    RouterScoutError,
)

__all__ = [
    "glogger",
    "configure_logging",
    "classify",
    "ScanConfig",
    "ScanCoordinator",
    "RouterScoutError",
    "MissingDependencyError",
    "InvalidRangePolicyError",
]
