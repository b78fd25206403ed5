"""Fallback Classification — assigns a deferral reason to every failed dispatch attempt.

Invariants:
    - PURE: no IO; the shell persists the returned entries in order
    - Output has exactly one entry per failed attempt, same order
    - Rule order (first match wins):
        1. shares a unit with any claimed decision      -> FALLBACK
        2. shares a unit with an earlier CLIENT_UNAVAILABLE entry -> FALLBACK
        3. otherwise                                    -> CLIENT_UNAVAILABLE
    - Only rule 3 grows stored_units; FALLBACK entries never shadow later failures

Design Decisions:
    - A failure that overlaps something claimed is kept as a backup so the next
      pass can filter it out if a lower-ranked release reached another client
    - stored_units is local to the call: a classification never leaks into the next pass
"""

from release_dispatch.core.decisions import Decision
from release_dispatch.core.domain_types import ContentUnitId, DeferralReason
from release_dispatch.core.pass_result import DeferredDecision
from release_dispatch.core.qualify import covers_processed_units


def classify_failed_attempt(
    failed: Decision, claimed: list[Decision], stored_units: set[ContentUnitId],
) -> DeferralReason:
    """Reason for one failed attempt given what is claimed and already stored."""
    if covers_processed_units(claimed, failed):
        return DeferralReason.FALLBACK
    if not failed.unit_ids.isdisjoint(stored_units):
        return DeferralReason.FALLBACK
    return DeferralReason.CLIENT_UNAVAILABLE


def classify_failed_attempts(
    claimed: list[Decision], failed_attempts: list[Decision],
) -> list[DeferredDecision]:
    """Classify failed attempts in the order they were recorded."""
    stored_units: set[ContentUnitId] = set()
    classified: list[DeferredDecision] = []
    for failed in failed_attempts:
        reason = classify_failed_attempt(failed, claimed, stored_units)
        if reason == DeferralReason.CLIENT_UNAVAILABLE:
            stored_units.update(failed.unit_ids)
        classified.append(DeferredDecision(failed, reason))
    return classified
