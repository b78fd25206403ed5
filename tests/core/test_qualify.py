"""Qualification — tests for the pure pre-pass filters.

Tests cover:
    - approved or temporarily rejected decisions with units qualify
    - plain rejected / unflagged / empty-unit decisions do not
    - input order preserved
    - rejected_decisions reads the raw input flag
    - covers_processed_units overlap, optionally per protocol
"""

from release_dispatch.core.qualify import (
    covers_processed_units, qualify_decisions, rejected_decisions,
)


# ─── qualify_decisions ───────────────────────────────────────────

def test_approved_and_temporarily_rejected_qualify(make_decision):
    approved = make_decision("A", approved=True)
    delayed = make_decision("B", approved=False, temporarily_rejected=True)
    assert qualify_decisions([approved, delayed]) == [approved, delayed]


def test_unflagged_and_rejected_do_not_qualify(make_decision):
    rejected = make_decision("A", approved=False, rejected=True)
    unflagged = make_decision("B", approved=False)
    assert qualify_decisions([rejected, unflagged]) == []


def test_decision_without_units_does_not_qualify(make_decision):
    empty = make_decision("A", units=[])
    assert qualify_decisions([empty]) == []


def test_qualify_preserves_order(make_decision):
    ds = [make_decision(g, [i]) for i, g in enumerate("CBA")]
    assert qualify_decisions(ds) == ds


# ─── rejected_decisions ──────────────────────────────────────────

def test_rejected_decisions_keeps_only_rejected_flag(make_decision):
    a = make_decision("A", approved=False, rejected=True)
    b = make_decision("B")
    c = make_decision("C", approved=True, rejected=True)
    assert rejected_decisions([a, b, c]) == [a, c]


# ─── covers_processed_units ──────────────────────────────────────

def test_overlap_on_single_shared_unit(make_decision):
    processed = [make_decision("A", [1, 2])]
    assert covers_processed_units(processed, make_decision("B", [2, 3]))


def test_no_overlap_on_disjoint_units(make_decision):
    processed = [make_decision("A", [1, 2])]
    assert not covers_processed_units(processed, make_decision("B", [3]))


def test_same_protocol_ignores_other_protocols(make_decision):
    processed = [make_decision("A", [1], protocol="usenet")]
    candidate = make_decision("B", [1], protocol="torrent")
    assert covers_processed_units(processed, candidate)
    assert not covers_processed_units(processed, candidate, same_protocol=True)
