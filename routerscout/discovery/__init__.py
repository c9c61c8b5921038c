"""Router discovery subpackage.

Interface enumeration, candidate range policies, per-host probing, evidence
classification and the bounded-concurrency scan coordinator.
"""

from routerscout.discovery.classify import CLASSIFICATION_RULES, classify
from routerscout.discovery.config import ScanConfig
from routerscout.discovery.hunt import VENDOR_MARKERS, VendorHunter
from routerscout.discovery.models import (
    Classification,
    DeviceRecord,
    Evidence,
    NetworkInterface,
    Reason,
    ScanResult,
    Verdict,
)
from routerscout.discovery.probes import HostProber
from routerscout.discovery.ranges import POLICIES, RangePolicy, generate_candidates, get_policy
from routerscout.discovery.results import ResultSink
from routerscout.discovery.scanner import ScanCoordinator, dispatch_bounded
from routerscout.discovery.topology import TopologyEnumerator

__all__ = [
    "ScanCoordinator",
    "dispatch_bounded",
    "HostProber",
    "TopologyEnumerator",
    "VendorHunter",
    "VENDOR_MARKERS",
    "ResultSink",
    "ScanConfig",
    "RangePolicy",
    "POLICIES",
    "generate_candidates",
    "get_policy",
    "classify",
    "CLASSIFICATION_RULES",
    "Classification",
    "DeviceRecord",
    "Evidence",
    "NetworkInterface",
    "Reason",
    "ScanResult",
    "Verdict",
]
