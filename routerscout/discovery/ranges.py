"""Candidate address generation.

Routers and gateways conventionally sit in the low and high blocks of a /24,
so the default policies probe a few fixed offset blocks instead of all 254
hosts. The ``cidr`` policy walks the interface's real network instead.
"""

from __future__ import annotations

import itertools

from pydantic import BaseModel, Field, model_validator

from routerscout.discovery.models import NetworkInterface
from routerscout.exceptions import InvalidRangePolicyError


class RangePolicy(BaseModel):
    name: str
    blocks: list[tuple[int, int]] = Field(default_factory=list)  # inclusive offset ranges
    cidr_aware: bool = False

    @model_validator(mode="after")
    def _check_blocks(self) -> RangePolicy:
        for start, end in self.blocks:
            if not 0 <= start <= end <= 255:
                raise ValueError(f"Invalid offset block {start}-{end} in policy '{self.name}'")
        return self

    def offsets(self) -> list[int]:
        """Expanded offsets in block order, duplicates removed."""
        seen: set[int] = set()
        result: list[int] = []
        for offset in itertools.chain.from_iterable(range(s, e + 1) for s, e in self.blocks):
            if offset not in seen:
                seen.add(offset)
                result.append(offset)
        return result

    def candidates(self, iface: NetworkInterface, max_hosts: int = 1024) -> list[str]:
        if self.cidr_aware:
            return cidr_candidates(iface, max_hosts=max_hosts)
        return generate_candidates(iface.base, self)


GENERAL_POLICY = RangePolicy(name="general", blocks=[(1, 10), (125, 134)])
GATEWAY_POLICY = RangePolicy(name="gateway", blocks=[(1, 20), (230, 254)])
FULL_POLICY = RangePolicy(name="full", blocks=[(1, 254)])
CIDR_POLICY = RangePolicy(name="cidr", cidr_aware=True)

POLICIES: dict[str, RangePolicy] = {p.name: p for p in (GENERAL_POLICY, GATEWAY_POLICY, FULL_POLICY, CIDR_POLICY)}


def get_policy(name: str) -> RangePolicy:
    try:
        return POLICIES[name.lower()]
    except KeyError:
        available = ", ".join(sorted(POLICIES))
        raise InvalidRangePolicyError(f"Unknown range policy '{name}'. Available: {available}") from None


def generate_candidates(base: str, policy: RangePolicy = GENERAL_POLICY) -> list[str]:
    """Expand a three-octet base (``192.168.1``) with the policy's offsets."""
    octets = base.split(".")
    if len(octets) != 3 or not all(o.isdigit() and int(o) <= 255 for o in octets):
        raise InvalidRangePolicyError(f"Invalid subnet base: {base!r}")
    return [f"{base}.{offset}" for offset in policy.offsets()]


def cidr_candidates(iface: NetworkInterface, max_hosts: int = 1024) -> list[str]:
    """All host addresses of the interface's network except its own, capped at ``max_hosts``."""
    hosts = (str(h) for h in iface.network.hosts() if str(h) != iface.ip)
    return list(itertools.islice(hosts, max_hosts))
