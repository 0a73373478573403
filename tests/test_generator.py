"""
Tests for the seeded synthetic snapshot generator.
"""

from __future__ import annotations

from shadowledger.snapshot import GeneratorConfig, generate_snapshot
from shadowledger.snapshot.models import EntityType

NOW = 1_700_000_000.0


def test_same_seed_same_snapshot():
    cfg = GeneratorConfig().scaled(0.05)
    assert generate_snapshot(seed=11, config=cfg, now=NOW) == generate_snapshot(seed=11, config=cfg, now=NOW)
    assert generate_snapshot(seed=11, config=cfg, now=NOW) != generate_snapshot(seed=12, config=cfg, now=NOW)


def test_default_city_has_a_thousand_entities():
    snapshot = generate_snapshot(now=NOW)
    assert len(snapshot.entities) == 1000
    counts = {t.value: 0 for t in EntityType}
    for e in snapshot.entities:
        counts[e.type_value] += 1
    assert counts == {
        "shell_company": 200,
        "director": 150,
        "wallet": 300,
        "vendor": 150,
        "politician": 100,
        "influencer": 100,
    }


def test_generated_values_are_well_formed():
    snapshot = generate_snapshot(seed=5, config=GeneratorConfig().scaled(0.1), now=NOW)
    ids = {e.id for e in snapshot.entities}
    assert len(ids) == len(snapshot.entities)
    for e in snapshot.entities:
        for value in (e.transparency, e.audit_history, e.suspicious_activity, e.manipulation_score):
            assert 0.0 <= value <= 1.0
        assert e.created_at <= NOW
    for r in snapshot.relationships:
        assert r.source in ids and r.target in ids
    for t in snapshot.transactions:
        assert t.sender in ids and t.receiver in ids
        assert t.amount > 0
        assert t.timestamp <= NOW


def test_politicians_influence_shell_companies():
    snapshot = generate_snapshot(seed=1, config=GeneratorConfig().scaled(0.05), now=NOW)
    by_id = snapshot.entity_map()
    influences = [r for r in snapshot.relationships if r.type_value == "influences"]
    assert influences
    for r in influences:
        assert by_id[r.source].type_value == "politician"
        assert by_id[r.target].type_value == "shell_company"


def test_scaled_keeps_at_least_one_of_each():
    cfg = GeneratorConfig().scaled(0.001)
    assert cfg.shell_companies == 1
    assert cfg.politicians == 1
