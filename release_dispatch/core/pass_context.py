"""Pass Context — the mutable bookkeeping of one dispatch pass.

Invariants:
    - Constructed fresh for every pass; never shared, never module-level
    - claimed_units is exactly the union of unit ids of `claimed`
    - A protocol latch only goes False -> True within a pass
    - failed_attempts holds each decision at most once (identity), in first-added order

Design Decisions:
    - Dataclass with small mutation helpers: the async shell drives it, tests poke it directly
    - protocol_failed keyed by DownloadProtocol with a False default, so new
      protocols need no code change
"""

from collections import defaultdict
from dataclasses import dataclass, field

from release_dispatch.core.decisions import Decision
from release_dispatch.core.domain_types import (
    ContentUnitId, DeferralReason, DownloadProtocol, PassId,
)
from release_dispatch.core.pass_result import DeferredDecision


@dataclass
class PassContext:
    """Per-pass enforcement state: pure dataclass, no IO."""

    pass_id: PassId = PassId("")

    claimed_units: set[ContentUnitId] = field(default_factory=set)
    claimed: list[Decision] = field(default_factory=list)
    deferred: list[DeferredDecision] = field(default_factory=list)

    protocol_failed: dict[DownloadProtocol, bool] = field(
        default_factory=lambda: defaultdict(bool),
    )

    # Transient: consumed by the fallback classifier after the loop
    failed_attempts: list[Decision] = field(default_factory=list)

    def is_claimed(self, decision: Decision) -> bool:
        return not decision.unit_ids.isdisjoint(self.claimed_units)

    def claim(self, decision: Decision) -> None:
        self.claimed.append(decision)
        self.claimed_units.update(decision.unit_ids)

    def defer(self, decision: Decision, reason: DeferralReason) -> DeferredDecision:
        entry = DeferredDecision(decision, reason)
        self.deferred.append(entry)
        return entry

    def latch(self, protocol: DownloadProtocol) -> None:
        self.protocol_failed[protocol] = True

    def is_latched(self, protocol: DownloadProtocol) -> bool:
        return self.protocol_failed.get(protocol, False)

    def add_failed_attempt(self, decision: Decision) -> bool:
        """Append unless this exact decision is already there. Returns True if added."""
        if any(f is decision for f in self.failed_attempts):
            return False
        self.failed_attempts.append(decision)
        return True
