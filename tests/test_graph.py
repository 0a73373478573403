"""
Tests for the undirected relationship graph and the per-entity transaction / director indexes.
"""

from __future__ import annotations

from shadowledger.analysis_engine.graph import GraphIndex
from shadowledger.analysis_engine.indexes import DirectorIndex, TransactionIndex
from shadowledger.snapshot.models import Relationship


def test_neighbors_are_undirected():
    """A relationship a->b makes each endpoint a neighbour of the other."""
    g = GraphIndex([Relationship("a", "b", "owns"), Relationship("c", "b", "pays")])
    assert g.neighbors("a") == {"b"}
    assert g.neighbors("b") == {"a", "c"}
    assert g.neighbors("c") == {"b"}


def test_unknown_entity_has_no_neighbors():
    g = GraphIndex([Relationship("a", "b")])
    assert g.neighbors("zzz") == frozenset()


def test_duplicate_relationships_keep_one_neighbor_but_all_edges():
    """Duplicates collapse in the neighbour set; relationships_of keeps every typed edge."""
    rels = [Relationship("s", "w", "owns"), Relationship("w", "s", "pays"), Relationship("s", "w", "owns")]
    g = GraphIndex(rels)
    assert g.neighbors("s") == {"w"}
    assert len(g.relationships_of("s")) == 3
    assert len(g.relationships_of("w")) == 3


def test_self_loop_is_not_a_neighbor():
    g = GraphIndex([Relationship("a", "a", "linked")])
    assert g.neighbors("a") == frozenset()
    assert len(g.relationships_of("a")) == 1


def test_transaction_index_groups_and_sorts(make_tx):
    """outgoing / incoming / involving come back sorted oldest first."""
    t1 = make_tx("a", "b", days_ago=1)
    t2 = make_tx("a", "c", days_ago=5)
    t3 = make_tx("c", "a", days_ago=3)
    idx = TransactionIndex([t1, t2, t3])
    assert idx.outgoing("a") == (t2, t1)
    assert idx.incoming("a") == (t3,)
    assert idx.involving("a") == (t2, t3, t1)
    assert idx.outgoing("b") == ()


def test_self_transfer_counted_once_in_involving(make_tx):
    t = make_tx("a", "a")
    idx = TransactionIndex([t])
    assert idx.involving("a") == (t,)
    assert idx.outgoing("a") == (t,)
    assert idx.incoming("a") == (t,)


def test_director_index_counts_other_companies_only(make_entity):
    """Wallets with the same director name are not companies and are not counted."""
    entities = [
        make_entity("sc1", "shell_company", director_name="Director 7"),
        make_entity("sc2", "shell_company", director_name="Director 7"),
        make_entity("v1", "vendor", director_name="Director 7"),
        make_entity("w1", "wallet", director_name="Director 7"),
        make_entity("sc3", "shell_company", director_name="Director 8"),
    ]
    idx = DirectorIndex(entities)
    assert idx.companies_of("Director 7") == {"sc1", "sc2", "v1"}
    assert idx.shared_count(entities[0]) == 2
    assert idx.shared_count(entities[4]) == 0
    assert idx.companies_of(None) == frozenset()
