"""
Tests for temporal burst detection (spikes and acceleration).
"""

from __future__ import annotations

import pytest

from shadowledger.analysis_engine.temporal import detect_temporal_burst

NOW = 1_700_000_000.0


def _history(make_tx, entity="e"):
    """One transaction per day from 31 to 120 days ago: historical frequency 1/day."""
    return [make_tx(entity, f"h{d}", days_ago=float(d)) for d in range(31, 121)]


def test_no_transactions_scores_zero():
    r = detect_temporal_burst("e", [], now=NOW)
    assert r.score == 0.0
    assert r.reason == "No transactions"


def test_steady_activity_scores_zero(make_tx):
    """One transaction a day for four months: no spike, no acceleration."""
    txs = [make_tx("e", "x", days_ago=d + 0.5) for d in range(120)]
    r = detect_temporal_burst("e", txs, now=NOW)
    assert r.score == 0.0
    assert r.flags == []


def test_spike_detected(make_tx):
    """30 transactions in the last week against 1/day before: spike only (halves are even)."""
    recent = [make_tx("x", "e", days_ago=1.0) for _ in range(15)]
    recent += [make_tx("e", "x", days_ago=5.0) for _ in range(15)]
    r = detect_temporal_burst("e", _history(make_tx) + recent, now=NOW)
    assert r.score == pytest.approx(0.5)
    assert len(r.flags) == 1
    assert r.flags[0].startswith("Spike detected: ")
    assert r.details["acceleration_ratio"] == pytest.approx(1.0)


def test_acceleration_detected(make_tx):
    """Second half of the last week has 3x the first half; not enough volume for a spike."""
    recent = [make_tx("e", "x", days_ago=5.0) for _ in range(2)]
    recent += [make_tx("e", "x", days_ago=1.0) for _ in range(6)]
    r = detect_temporal_burst("e", _history(make_tx) + recent, now=NOW)
    assert r.score == pytest.approx(0.5)
    assert r.flags == ["Acceleration detected: 3.00x increase"]


def test_spike_and_acceleration_cap_at_one(make_tx):
    recent = [make_tx("e", "x", days_ago=5.0) for _ in range(5)]
    recent += [make_tx("e", "x", days_ago=1.0) for _ in range(40)]
    r = detect_temporal_burst("e", _history(make_tx) + recent, now=NOW)
    assert r.score == 1.0
    assert len(r.flags) == 2


def test_new_entity_with_high_rate(make_tx):
    """No history before the 30-day cutoff and 25 transactions/day: 0.6 with a flag."""
    txs = [make_tx("e", "x", days_ago=2.0)] + [make_tx("e", "x", days_ago=1.0) for _ in range(49)]
    r = detect_temporal_burst("e", txs, now=NOW)
    assert r.score == pytest.approx(0.6)
    assert r.flags == ["New entity with high activity rate: 25.00 transactions/day"]


def test_new_entity_with_low_rate(make_tx):
    txs = [make_tx("e", "x", days_ago=float(d)) for d in (10, 8, 6, 4, 2)]
    r = detect_temporal_burst("e", txs, now=NOW)
    assert r.score == 0.0
    assert r.reason == "New entity, insufficient history"


def test_unrelated_transactions_are_ignored(make_tx):
    txs = [make_tx("a", "b", days_ago=1.0) for _ in range(100)]
    r = detect_temporal_burst("e", txs, now=NOW)
    assert r.score == 0.0
    assert r.reason == "No transactions"
