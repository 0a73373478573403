"""
Corruption proximity: hop distance from an entity to the nearest corrupt node.

An entity is corrupt when its suspicious_activity is at or above the corrupt
threshold (0.7). Distance is found by a depth-bounded breadth-first traversal
over the undirected graph with one visited set per start entity; nodes are
expanded while their depth is within the ceiling (5), so a corrupt node up to
six hops away is still found. No corrupt node in reach gives the UNREACHABLE
sentinel, displayed as "∞".

The normalized proximity score is 1.0 when unreachable, else
max(0, 1 - distance * 0.2). An isolated entity is therefore always scored 1.0;
baseline trust depends on that value, so it is kept as is.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Union

from shadowledger.analysis_engine.graph import GraphIndex
from shadowledger.snapshot.models import Entity

CORRUPT_THRESHOLD = 0.7
MAX_DEPTH = 5
DISTANCE_STEP = 0.2
"""Proximity score lost per hop of distance."""


class _Unreachable:
    """Singleton distance for 'no corrupt node within the depth ceiling'."""

    _instance: "_Unreachable | None" = None

    def __new__(cls) -> "_Unreachable":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNREACHABLE"

    def __str__(self) -> str:
        return "∞"

    def __reduce__(self) -> str:
        return "UNREACHABLE"


UNREACHABLE = _Unreachable()

Distance = Union[int, _Unreachable]


def is_reachable(distance: Distance) -> bool:
    return distance is not UNREACHABLE


def display_distance(distance: Distance) -> Any:
    """int distance, or "∞" for the sentinel (as shown by the UI)."""
    return distance if is_reachable(distance) else str(UNREACHABLE)


def corrupt_ids(entities: Iterable[Entity], threshold: float = CORRUPT_THRESHOLD) -> frozenset[str]:
    return frozenset(e.id for e in entities if (e.suspicious_activity or 0.0) >= threshold)


def corruption_distance(
    entity_id: str,
    graph: GraphIndex,
    corrupt: frozenset[str] | set[str],
    *,
    max_depth: int = MAX_DEPTH,
) -> Distance:
    """Minimum hop count from entity_id to any corrupt node, or UNREACHABLE."""
    if entity_id in corrupt:
        return 0
    visited = {entity_id}
    queue: deque[tuple[str, int]] = deque([(entity_id, 0)])
    while queue:
        node, depth = queue.popleft()
        if depth > max_depth:
            continue
        for neighbor in graph.neighbors(node):
            if neighbor in visited:
                continue
            if neighbor in corrupt:
                return depth + 1
            visited.add(neighbor)
            queue.append((neighbor, depth + 1))
    return UNREACHABLE


def proximity_score(distance: Distance) -> float:
    if not is_reachable(distance):
        return 1.0
    return max(0.0, 1.0 - distance * DISTANCE_STEP)


@dataclass(frozen=True)
class CorruptionProximity:
    entity_id: str
    distance: Distance
    score: float

    @property
    def display(self) -> Any:
        return display_distance(self.distance)

    def to_dict(self) -> dict[str, Any]:
        return {"network_distance": self.display, "proximity_score": self.score}


def compute_proximity(
    entity_id: str,
    graph: GraphIndex,
    corrupt: frozenset[str] | set[str],
    *,
    max_depth: int = MAX_DEPTH,
) -> CorruptionProximity:
    distance = corruption_distance(entity_id, graph, corrupt, max_depth=max_depth)
    return CorruptionProximity(entity_id, distance, proximity_score(distance))
