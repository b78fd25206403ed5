"""Fallback Classification — reason selection for failed dispatch attempts.

Tests cover:
    - overlap with claimed -> FALLBACK
    - overlap with earlier stored failure -> FALLBACK
    - first-seen failure -> CLIENT_UNAVAILABLE
    - FALLBACK entries don't grow stored units
    - output order and length match input
"""

from release_dispatch.core.classify_fallback import (
    classify_failed_attempt, classify_failed_attempts,
)
from release_dispatch.core.domain_types import DeferralReason


def _reasons(entries):
    return [(e.decision.release.guid, e.reason) for e in entries]


def test_overlap_with_claimed_is_fallback(make_decision):
    claimed = [make_decision("A", [1])]
    failed = [make_decision("B", [1, 2])]
    assert _reasons(classify_failed_attempts(claimed, failed)) == [
        ("B", DeferralReason.FALLBACK),
    ]


def test_first_failure_is_client_unavailable(make_decision):
    failed = [make_decision("A", [1])]
    assert _reasons(classify_failed_attempts([], failed)) == [
        ("A", DeferralReason.CLIENT_UNAVAILABLE),
    ]


def test_duplicate_failure_for_same_units_is_fallback(make_decision):
    failed = [make_decision("A", [1]), make_decision("B", [1])]
    assert _reasons(classify_failed_attempts([], failed)) == [
        ("A", DeferralReason.CLIENT_UNAVAILABLE),
        ("B", DeferralReason.FALLBACK),
    ]


def test_disjoint_failures_are_each_client_unavailable(make_decision):
    failed = [make_decision("A", [1]), make_decision("B", [2])]
    assert _reasons(classify_failed_attempts([], failed)) == [
        ("A", DeferralReason.CLIENT_UNAVAILABLE),
        ("B", DeferralReason.CLIENT_UNAVAILABLE),
    ]


def test_fallback_does_not_shadow_later_failures(make_decision):
    # B overlaps claimed unit 1 but also covers unit 2; C on unit 2 was never
    # stored as client_unavailable, so it is first-seen
    claimed = [make_decision("A", [1])]
    failed = [make_decision("B", [1, 2]), make_decision("C", [2])]
    assert _reasons(classify_failed_attempts(claimed, failed)) == [
        ("B", DeferralReason.FALLBACK),
        ("C", DeferralReason.CLIENT_UNAVAILABLE),
    ]


def test_claimed_rule_wins_over_stored_rule(make_decision):
    stored_units = {5}
    claimed = [make_decision("A", [5])]
    assert classify_failed_attempt(
        make_decision("B", [5]), claimed, stored_units,
    ) == DeferralReason.FALLBACK


def test_empty_failed_list_yields_nothing(make_decision):
    assert classify_failed_attempts([make_decision("A")], []) == []
