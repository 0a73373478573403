"""
Network proximity risk: closeness to high-risk entities.

High-risk entities are those whose trust before this run (prior updated trust,
else base trust) is below 30 or whose prior suspicion score is above
high_risk_threshold. A queue-based BFS (at most max_hops) from the scored
entity finds the nearest one; the score is 1 - distance / (max_hops + 1), so
a direct neighbour outranks a two-hop connection and anything farther
scores 0. The scored entity itself counts at distance 0.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from shadowledger.analysis_engine.graph import GraphIndex
from shadowledger.analysis_engine.models import ModuleResult
from shadowledger.config.settings import DetectionConfig
from shadowledger.snapshot.models import Entity

HIGH_RISK_TRUST_BELOW = 30.0


def current_trust(entity: Entity) -> float:
    """Trust as known before this run: prior updated trust, then base trust, then 50."""
    if entity.prior_trust_score is not None:
        return entity.prior_trust_score
    return entity.base_trust_score if entity.base_trust_score is not None else 50.0


def is_high_risk(entity: Entity, config: DetectionConfig | None = None) -> bool:
    cfg = config or DetectionConfig()
    suspicion = entity.prior_suspicion_score or 0.0
    return current_trust(entity) < HIGH_RISK_TRUST_BELOW or suspicion > cfg.high_risk_threshold


def high_risk_ids(
    entities: Iterable[Entity],
    config: DetectionConfig | None = None,
) -> frozenset[str]:
    return frozenset(e.id for e in entities if is_high_risk(e, config))


def bfs_distance(
    start_id: str,
    targets: frozenset[str] | set[str],
    graph: GraphIndex,
    max_depth: int,
) -> int | None:
    """Hop distance from start_id to the nearest target within max_depth, else None."""
    queue: deque[tuple[str, int]] = deque([(start_id, 0)])
    visited = {start_id}
    while queue:
        node, depth = queue.popleft()
        if node in targets:
            return depth
        if depth >= max_depth:
            continue
        for neighbor in graph.neighbors(node):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append((neighbor, depth + 1))
    return None


def detect_network_proximity_risk(
    entity_id: str,
    graph: GraphIndex,
    high_risk: frozenset[str] | set[str],
    config: DetectionConfig | None = None,
) -> ModuleResult:
    """Score how close entity_id sits to any high-risk entity (0 beyond max_hops)."""
    cfg = config or DetectionConfig()
    if not high_risk:
        return ModuleResult.not_applicable("No high-risk entities in network")

    min_distance = bfs_distance(entity_id, high_risk, graph, cfg.max_hops)
    if min_distance is None:
        return ModuleResult.not_applicable("Not within proximity of high-risk entities")

    score = 1.0 - min_distance / (cfg.max_hops + 1)
    return ModuleResult(
        score=round(max(0.0, min(1.0, score)), 4),
        flags=[f"Within {min_distance} hop(s) of high-risk entity"],
        details={
            "min_distance": min_distance,
            "high_risk_neighbors": min_distance <= cfg.max_hops,
        },
    )
