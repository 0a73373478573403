"""
Cascading risk: politician -> shell company -> wallet.

A politician linked to a shell company through an `influences` relationship
raises the suspicious_activity of every wallet connected to that shell company
(any relationship type, either direction) by a fixed increment, clamped at 1.

Pure: takes a snapshot and returns a new one with adjusted entities; shared
records are never mutated. Not idempotent: each call applies the increment
again, so the pipeline calls it exactly once per snapshot, before any scoring.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from shadowledger.analysis_engine.graph import GraphIndex
from shadowledger.ledger_logging import get_logger
from shadowledger.snapshot.models import (
    EntityType,
    RelationshipType,
    Snapshot,
    clamp01,
)

logger = get_logger(__name__)

CASCADE_INCREMENT = 0.15
"""suspicious_activity added to a wallet per influenced shell-company link."""


@dataclass
class CascadeHit:
    """One increment applied to a wallet."""

    politician_id: str
    shell_company_id: str
    wallet_id: str
    increment: float


@dataclass
class CascadeResult:
    snapshot: Snapshot
    hits: list[CascadeHit] = field(default_factory=list)

    @property
    def affected_wallets(self) -> set[str]:
        return {h.wallet_id for h in self.hits}


def propagate_cascading_risk(
    snapshot: Snapshot,
    *,
    increment: float = CASCADE_INCREMENT,
    graph: GraphIndex | None = None,
) -> CascadeResult:
    """
    Apply the politician -> shell company -> wallet increment once.

    Every qualifying (politician, shell company) influences-link applies on its
    own, and every relationship between that shell company and a wallet counts,
    so a wallet reached through several links or duplicate edges is raised once
    per path. Values are clamped to 1.0 after each increment.

    Args:
        snapshot: Raw snapshot; left untouched.
        increment: Amount added per path (default 0.15).
        graph: Prebuilt index over snapshot.relationships; built here if None.

    Returns:
        CascadeResult with a new snapshot and the list of applied increments.
    """
    entities = snapshot.entity_map()
    index = graph or GraphIndex(snapshot.relationships)

    def type_of(entity_id: str) -> str | None:
        e = entities.get(entity_id)
        return e.type_value if e is not None else None

    activity: dict[str, float] = {}
    hits: list[CascadeHit] = []
    for rel in snapshot.relationships:
        if rel.type_value != RelationshipType.INFLUENCES.value:
            continue
        if type_of(rel.source) != EntityType.POLITICIAN.value:
            continue
        if type_of(rel.target) != EntityType.SHELL_COMPANY.value:
            continue
        shell_id = rel.target
        for edge in index.relationships_of(shell_id):
            wallet_id = edge.other(shell_id)
            if wallet_id == shell_id or type_of(wallet_id) != EntityType.WALLET.value:
                continue
            current = activity.get(wallet_id, entities[wallet_id].suspicious_activity or 0.0)
            activity[wallet_id] = clamp01(current + increment)
            hits.append(CascadeHit(rel.source, shell_id, wallet_id, increment))

    if not activity:
        return CascadeResult(snapshot=snapshot, hits=hits)

    adjusted = tuple(
        replace(e, suspicious_activity=activity[e.id]) if e.id in activity else e
        for e in snapshot.entities
    )
    logger.info(
        "cascade_applied",
        links=len(hits),
        wallets_affected=len(activity),
        increment=increment,
    )
    return CascadeResult(snapshot=replace(snapshot, entities=adjusted), hits=hits)
