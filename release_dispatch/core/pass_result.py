"""Pass Result — three-way output of a dispatch pass and its summary counts.

Invariants:
    - deferred = Delay entries in scan order, then classifier entries in failed-attempt order
    - rejected is independent of dispatch outcomes
    - compute_pass_stats never raises and always reports every DeferralReason (0 if absent)
"""

from dataclasses import dataclass, field

from release_dispatch.core.decisions import Decision
from release_dispatch.core.domain_types import DeferralReason, PassId


@dataclass(frozen=True, slots=True)
class DeferredDecision:
    decision: Decision
    reason: DeferralReason


@dataclass
class PassResult:
    """Claimed, deferred and rejected decisions of one pass."""
    pass_id: PassId
    claimed: list[Decision] = field(default_factory=list)
    deferred: list[DeferredDecision] = field(default_factory=list)
    rejected: list[Decision] = field(default_factory=list)

    def deferred_with(self, reason: DeferralReason) -> list[Decision]:
        return [d.decision for d in self.deferred if d.reason == reason]


def build_pass_result(
    pass_id: PassId,
    claimed: list[Decision],
    delayed: list[DeferredDecision],
    classified: list[DeferredDecision],
    rejected: list[Decision],
) -> PassResult:
    """Assemble the pass output. Copies lists so callers can't alias pass state."""
    return PassResult(
        pass_id=pass_id,
        claimed=list(claimed),
        deferred=[*delayed, *classified],
        rejected=list(rejected),
    )


def compute_pass_stats(result: PassResult) -> dict:
    """Aggregate counts per outcome bucket. Pure, no IO."""
    stats = {
        "claimed": len(result.claimed),
        "deferred": len(result.deferred),
        "rejected": len(result.rejected),
    }
    for reason in DeferralReason:
        stats[f"deferred_{reason.value}"] = sum(
            1 for d in result.deferred if d.reason == reason
        )
    return stats
