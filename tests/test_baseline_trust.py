"""
Tests for baseline trust: profile fields, corruption proximity and manipulation.
"""

from __future__ import annotations

import pytest

from shadowledger.analysis_engine.baseline_trust import (
    ACCESS_FAST,
    ACCESS_RESTRICTED,
    ACCESS_STANDARD,
    ACCESS_VENDOR_RESTRICTED,
    access_level_for,
    compute_baseline_trust,
)
from shadowledger.analysis_engine.proximity import UNREACHABLE, CorruptionProximity


def _far(entity_id: str) -> CorruptionProximity:
    return CorruptionProximity(entity_id, UNREACHABLE, 1.0)


def test_transparent_audited_entity_gets_fast_approvals(make_entity):
    e = make_entity("v1", "vendor", transparency=1.0, audit_history=1.0)
    b = compute_baseline_trust(e, _far("v1"))
    assert b.trust_score == pytest.approx(90.0)
    assert b.access_level == ACCESS_FAST
    assert b.manipulation_detected is False


def test_corrupt_entity_clamped_to_zero(make_entity):
    e = make_entity("w1", suspicious_activity=0.9)
    b = compute_baseline_trust(e, CorruptionProximity("w1", 0, 1.0))
    assert b.trust_score == 0.0
    assert b.access_level == ACCESS_VENDOR_RESTRICTED


def test_manipulation_boost_and_real_trust(make_entity):
    """Manipulation counts as suspicion, then is added back as a visible boost."""
    e = make_entity(
        "sc1", "shell_company", transparency=0.5, audit_history=0.5, manipulation_score=0.5
    )
    b = compute_baseline_trust(e, _far("sc1"))
    assert b.trust_score == pytest.approx(50.0)
    assert b.real_trust_score == pytest.approx(40.0)
    assert b.manipulation_detected is True
    assert b.access_level == ACCESS_STANDARD


def test_proximity_lowers_trust(make_entity):
    e = make_entity("d1", "director", transparency=0.5, audit_history=0.5)
    near = compute_baseline_trust(e, CorruptionProximity("d1", 4, 0.2))
    far = compute_baseline_trust(e, _far("d1"))
    assert near.trust_score < far.trust_score


@pytest.mark.parametrize(
    "score,level",
    [
        (100.0, ACCESS_FAST),
        (70.0, ACCESS_FAST),
        (69.9, ACCESS_STANDARD),
        (40.0, ACCESS_STANDARD),
        (39.9, ACCESS_RESTRICTED),
        (5.0, ACCESS_RESTRICTED),
        (4.9, ACCESS_VENDOR_RESTRICTED),
    ],
)
def test_access_level_thresholds(score, level):
    assert access_level_for(score) == level
