"""Qualification — pure filters run before and during a dispatch pass.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - qualify_decisions never reorders its input
    - Overlap is set intersection over ContentUnitId; one shared unit is enough
"""

from collections.abc import Iterable

from release_dispatch.core.decisions import Decision


def qualify_decisions(decisions: Iterable[Decision]) -> list[Decision]:
    """Keep approved and temporarily rejected decisions that cover at least one unit."""
    return [
        d for d in decisions
        if (d.approved or d.temporarily_rejected) and d.unit_ids
    ]


def rejected_decisions(decisions: Iterable[Decision]) -> list[Decision]:
    """Input decisions flagged rejected upstream, in input order."""
    return [d for d in decisions if d.rejected]


def covers_processed_units(
    processed: Iterable[Decision], decision: Decision, same_protocol: bool = False,
) -> bool:
    """True if any processed decision shares a content unit with `decision`.

    With same_protocol=True only processed decisions on the same protocol count.
    """
    candidates = (
        [p for p in processed if p.protocol == decision.protocol]
        if same_protocol else processed
    )
    units = decision.unit_ids
    return any(not units.isdisjoint(p.unit_ids) for p in candidates)
