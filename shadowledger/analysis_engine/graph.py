"""
Entity relationship graph: undirected adjacency built once per snapshot.

Relationships are directed for labelling only; every traversal (corruption
distance, network proximity BFS, cascade lookups) uses the undirected
neighbour sets kept here. Read-only after construction, so one index can be
shared by every worker thread.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from shadowledger.ledger_logging import get_logger
from shadowledger.snapshot.models import Relationship

logger = get_logger(__name__)

_EMPTY: frozenset[str] = frozenset()


class GraphIndex:
    """
    Undirected neighbour lookup over a relationship list.

    neighbors(id) is O(1); an id with no relationships (or unknown) yields an
    empty set. Relationships are also indexed per endpoint so callers can
    inspect the typed edges touching an entity.
    """

    def __init__(self, relationships: Iterable[Relationship]) -> None:
        adjacency: dict[str, set[str]] = defaultdict(set)
        incident: dict[str, list[Relationship]] = defaultdict(list)
        count = 0
        for rel in relationships:
            count += 1
            incident[rel.source].append(rel)
            if rel.target != rel.source:
                incident[rel.target].append(rel)
                adjacency[rel.source].add(rel.target)
                adjacency[rel.target].add(rel.source)
        self._adjacency: dict[str, frozenset[str]] = {
            node: frozenset(peers) for node, peers in adjacency.items()
        }
        self._incident: dict[str, tuple[Relationship, ...]] = {
            node: tuple(rels) for node, rels in incident.items()
        }
        logger.debug(
            "graph_index_built",
            nodes=len(self._adjacency),
            relationships=count,
        )

    def neighbors(self, entity_id: str) -> frozenset[str]:
        return self._adjacency.get(entity_id, _EMPTY)

    def relationships_of(self, entity_id: str) -> tuple[Relationship, ...]:
        """Every relationship with entity_id as source or target (duplicates kept)."""
        return self._incident.get(entity_id, ())
