"""
Read-only lookups shared by the pattern detectors.

Built once per run so that each detector call touches only the transactions
and entities that concern one entity, instead of re-scanning the full
collections per entity.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from shadowledger.snapshot.models import Entity, Transaction


class TransactionIndex:
    """
    Transactions grouped by sender, receiver and involvement, each list sorted
    by timestamp. A self-transfer appears once in involving().
    """

    def __init__(self, transactions: Iterable[Transaction]) -> None:
        outgoing: dict[str, list[Transaction]] = defaultdict(list)
        incoming: dict[str, list[Transaction]] = defaultdict(list)
        involving: dict[str, list[Transaction]] = defaultdict(list)
        for tx in transactions:
            outgoing[tx.sender].append(tx)
            incoming[tx.receiver].append(tx)
            involving[tx.sender].append(tx)
            if tx.receiver != tx.sender:
                involving[tx.receiver].append(tx)
        self._outgoing = _sorted_tuples(outgoing)
        self._incoming = _sorted_tuples(incoming)
        self._involving = _sorted_tuples(involving)

    def outgoing(self, entity_id: str) -> tuple[Transaction, ...]:
        return self._outgoing.get(entity_id, ())

    def incoming(self, entity_id: str) -> tuple[Transaction, ...]:
        return self._incoming.get(entity_id, ())

    def involving(self, entity_id: str) -> tuple[Transaction, ...]:
        return self._involving.get(entity_id, ())


def _sorted_tuples(groups: dict[str, list[Transaction]]) -> dict[str, tuple[Transaction, ...]]:
    return {
        key: tuple(sorted(txs, key=lambda t: t.timestamp))
        for key, txs in groups.items()
    }


class DirectorIndex:
    """Company-type entity ids keyed by director name."""

    def __init__(self, entities: Iterable[Entity]) -> None:
        by_director: dict[str, set[str]] = defaultdict(set)
        for e in entities:
            if e.director_name and e.is_company:
                by_director[e.director_name].add(e.id)
        self._by_director = {name: frozenset(ids) for name, ids in by_director.items()}

    def companies_of(self, director_name: str | None) -> frozenset[str]:
        if not director_name:
            return frozenset()
        return self._by_director.get(director_name, frozenset())

    def shared_count(self, entity: Entity) -> int:
        """Number of *other* company entities controlled by the same director."""
        return len(self.companies_of(entity.director_name) - {entity.id})
