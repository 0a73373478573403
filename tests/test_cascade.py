"""
Tests for the politician -> shell company -> wallet cascade.
"""

from __future__ import annotations

import pytest

from shadowledger.analysis_engine.cascade import CASCADE_INCREMENT, propagate_cascading_risk
from shadowledger.snapshot.models import Relationship, Snapshot


@pytest.fixture
def cascade_snapshot(make_entity):
    entities = [
        make_entity("p1", "politician"),
        make_entity("sc1", "shell_company"),
        make_entity("w1", "wallet", suspicious_activity=0.2),
        make_entity("w2", "wallet", suspicious_activity=0.95),
        make_entity("v1", "vendor", suspicious_activity=0.1),
        make_entity("w3", "wallet", suspicious_activity=0.3),
    ]
    relationships = [
        Relationship("p1", "sc1", "influences"),
        Relationship("sc1", "w1", "owns"),
        Relationship("w2", "sc1", "pays"),
        Relationship("sc1", "v1", "contracts"),
    ]
    return Snapshot.of(entities, relationships)


def test_cascade_raises_connected_wallets(cascade_snapshot):
    """Wallets on either side of the shell company gain 0.15; others are untouched."""
    result = propagate_cascading_risk(cascade_snapshot)
    by_id = result.snapshot.entity_map()
    assert by_id["w1"].suspicious_activity == pytest.approx(0.2 + CASCADE_INCREMENT)
    assert by_id["w2"].suspicious_activity == 1.0
    assert by_id["v1"].suspicious_activity == pytest.approx(0.1)
    assert by_id["w3"].suspicious_activity == pytest.approx(0.3)
    assert result.affected_wallets == {"w1", "w2"}
    assert len(result.hits) == 2


def test_cascade_does_not_mutate_input(cascade_snapshot):
    propagate_cascading_risk(cascade_snapshot)
    assert cascade_snapshot.entity_map()["w1"].suspicious_activity == pytest.approx(0.2)


def test_cascade_is_not_idempotent(cascade_snapshot):
    """Applying twice adds the increment twice, still clamped at 1."""
    once = propagate_cascading_risk(cascade_snapshot)
    twice = propagate_cascading_risk(once.snapshot)
    by_id = twice.snapshot.entity_map()
    assert by_id["w1"].suspicious_activity == pytest.approx(0.5)
    assert by_id["w2"].suspicious_activity == 1.0


def test_cascade_requires_influences_from_politician_to_shell(make_entity):
    """Wrong relationship type or wrong endpoint types leave the snapshot as is."""
    entities = [
        make_entity("p1", "politician"),
        make_entity("i1", "influencer"),
        make_entity("sc1", "shell_company"),
        make_entity("v1", "vendor"),
        make_entity("w1", "wallet", suspicious_activity=0.2),
    ]
    relationships = [
        Relationship("p1", "sc1", "linked"),
        Relationship("i1", "sc1", "influences"),
        Relationship("p1", "v1", "influences"),
        Relationship("v1", "w1", "pays"),
        Relationship("sc1", "w1", "owns"),
    ]
    snapshot = Snapshot.of(entities, relationships)
    result = propagate_cascading_risk(snapshot)
    assert result.snapshot is snapshot
    assert result.hits == []


def test_each_path_applies_separately(make_entity):
    """Two influencing politicians and a duplicate shell-wallet edge each add the increment."""
    entities = [
        make_entity("p1", "politician"),
        make_entity("p2", "politician"),
        make_entity("sc1", "shell_company"),
        make_entity("w1", "wallet", suspicious_activity=0.0),
    ]
    relationships = [
        Relationship("p1", "sc1", "influences"),
        Relationship("p2", "sc1", "influences"),
        Relationship("sc1", "w1", "owns"),
        Relationship("sc1", "w1", "controls"),
    ]
    result = propagate_cascading_risk(Snapshot.of(entities, relationships))
    assert result.snapshot.entity_map()["w1"].suspicious_activity == pytest.approx(0.6)
    assert len(result.hits) == 4


def test_custom_increment(cascade_snapshot):
    result = propagate_cascading_risk(cascade_snapshot, increment=0.5)
    assert result.snapshot.entity_map()["w1"].suspicious_activity == pytest.approx(0.7)
