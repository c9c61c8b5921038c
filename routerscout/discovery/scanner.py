"""ScanCoordinator — enumerate, fan out probes with bounded concurrency, collect results."""

from __future__ import annotations

import concurrent.futures
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Iterable, TypeVar

from loguru import logger

from routerscout.discovery._util import check_dependencies
from routerscout.discovery.classify import classify
from routerscout.discovery.config import ScanConfig
from routerscout.discovery.models import DeviceRecord, ScanResult, Verdict
from routerscout.discovery.probes import HostProber
from routerscout.discovery.ranges import get_policy
from routerscout.discovery.results import ResultSink
from routerscout.discovery.topology import TopologyEnumerator

T = TypeVar("T")


def _stop_requested(deadline: float | None, stop_event: threading.Event | None) -> bool:
    if stop_event is not None and stop_event.is_set():
        return True
    return deadline is not None and time.monotonic() >= deadline


def dispatch_bounded(
    candidates: Iterable[str],
    task: Callable[[str], T],
    on_result: Callable[[T], None],
    max_concurrency: int = 10,
    deadline: float | None = None,
    stop_event: threading.Event | None = None,
) -> int:
    """Run ``task`` for each candidate with at most ``max_concurrency`` in flight.

    A slot is taken before each submission and released when that task
    finishes, so dispatching blocks while the pool is full. Once the deadline
    passes or ``stop_event`` is set no further candidates are dispatched;
    in-flight tasks run to their own timeouts.

    Returns the number of candidates dispatched.
    """
    slots = threading.BoundedSemaphore(max_concurrency)
    futures: dict[concurrent.futures.Future[None], str] = {}

    def run_one(ip: str) -> None:
        try:
            on_result(task(ip))
        finally:
            slots.release()

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_concurrency) as pool:
        for ip in candidates:
            if _stop_requested(deadline, stop_event):
                logger.info("Stop requested, not dispatching remaining candidates")
                break
            slots.acquire()
            if _stop_requested(deadline, stop_event):
                slots.release()
                logger.info("Stop requested, not dispatching remaining candidates")
                break
            futures[pool.submit(run_one, ip)] = ip

        for future in concurrent.futures.as_completed(futures):
            try:
                future.result()
            except Exception as e:
                logger.warning(f"Probe of {futures[future]} failed: {e}")

    return len(futures)


class ScanCoordinator:
    def __init__(
        self,
        config: ScanConfig | None = None,
        enumerator: TopologyEnumerator | None = None,
        prober: HostProber | None = None,
    ):
        self.config = config or ScanConfig()
        self.policy = get_policy(self.config.range_policy)
        self.enumerator = enumerator or TopologyEnumerator(self.config.interfaces)
        self.prober = prober or HostProber(self.config)

    def check_host(self, ip: str) -> DeviceRecord:
        """Probe one address and classify the evidence."""
        logger.info(f"Checking {ip}...")
        evidence = self.prober.probe(ip)
        classification = classify(evidence, self.config.vendor_keywords, self.config.admin_keywords)
        record = DeviceRecord(ip=ip, classification=classification, evidence=evidence)

        if classification.verdict == Verdict.CONFIRMED:
            logger.success(f"Router found: {record.line} ({classification.reason.value})")  # type: ignore[union-attr]
        elif classification.verdict == Verdict.POSSIBLE:
            logger.info(f"Possible router: {ip} (needs further checking)")
        return record

    def run(
        self,
        deadline: float | None = None,
        stop_event: threading.Event | None = None,
    ) -> ScanResult:
        """Scan every usable interface, then re-check the default gateway.

        Args:
            deadline: ``time.monotonic()`` value after which no new candidates
                are dispatched.
            stop_event: Setting it has the same effect as the deadline passing.

        Raises:
            MissingDependencyError: A required external command is missing.
        """
        check_dependencies()

        logger.info("Detecting network interfaces...")
        interfaces = self.enumerator.list_interfaces()
        gateway = self.enumerator.default_gateway()
        sink = ResultSink()
        scanned: list[str] = []
        probed = 0

        if not interfaces:
            logger.warning("No usable interfaces, skipping subnet sweep")

        for iface in interfaces:
            if _stop_requested(deadline, stop_event):
                logger.info(f"Stop requested, skipping interface {iface.name}")
                continue
            candidates = self.policy.candidates(iface, max_hosts=self.config.max_hosts)
            logger.info(
                f"Scanning interface {iface.name}: network {iface.cidr}, "
                f"{len(candidates)} candidates ({self.policy.name})"
            )
            scanned.append(iface.cidr)
            probed += dispatch_bounded(
                candidates,
                self.check_host,
                sink.add,
                max_concurrency=self.config.max_concurrency,
                deadline=deadline,
                stop_event=stop_event,
            )

        if gateway and self.config.probe_gateway:
            if _stop_requested(deadline, stop_event):
                logger.info(f"Stop requested, not re-checking gateway {gateway}")
            else:
                logger.info(f"Checking default gateway: {gateway}")
                probed += 1
                try:
                    sink.add(self.check_host(gateway))
                except Exception as e:
                    logger.warning(f"Probe of gateway {gateway} failed: {e}")

        result = ScanResult(
            interfaces=interfaces,
            scanned_subnets=scanned,
            gateway=gateway,
            probed=probed,
            confirmed=sink.confirmed(),
            possible=sink.possible(),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        logger.info(
            f"Scan complete: {len(scanned)} subnet(s), {probed} address(es) probed, "
            f"{len(result.confirmed)} router(s), {len(result.possible)} possible device(s)"
        )
        return result
