"""
Pytest fixtures for ShadowLedger tests. Fixed reference time and small builders
for entities, relationships and transactions so detector tests stay readable.
"""

from __future__ import annotations

import os

import pytest

from shadowledger.snapshot.models import Entity, Relationship, Transaction

NOW = 1_700_000_000.0
DAY = 86400.0
HOUR = 3600.0


@pytest.fixture
def now() -> float:
    return NOW


@pytest.fixture
def make_entity():
    """Entity builder; created_at is given in days before NOW (None = unknown)."""

    def _make(entity_id: str, entity_type: str = "wallet", *, age_days: float | None = 365.0, **fields):
        created_at = None if age_days is None else NOW - age_days * DAY
        return Entity(id=entity_id, type=entity_type, created_at=created_at, **fields)

    return _make


@pytest.fixture
def make_tx():
    """Transaction builder; timestamp is given in days before NOW."""
    counter = {"n": 0}

    def _make(sender: str, receiver: str, amount: float = 100.0, *, days_ago: float = 1.0):
        counter["n"] += 1
        return Transaction(
            id=f"tx_{counter['n']}",
            sender=sender,
            receiver=receiver,
            amount=amount,
            timestamp=NOW - days_ago * DAY,
        )

    return _make


@pytest.fixture
def chain():
    """Relationships a-b-c-... as one undirected path."""

    def _make(*ids: str, rel_type: str = "linked"):
        return [Relationship(a, b, rel_type) for a, b in zip(ids, ids[1:])]

    return _make


@pytest.fixture(autouse=True)
def _clean_shadowledger_env(monkeypatch, tmp_path):
    """No developer .env or SHADOWLEDGER_* variables leak into tests."""
    for key in list(os.environ):
        if key.startswith("SHADOWLEDGER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("SHADOWLEDGER_ENV_FILE", str(tmp_path / "missing.env"))
