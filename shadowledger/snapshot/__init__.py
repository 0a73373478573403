"""
Snapshot package: immutable engine input (entities, relationships, transactions).

Models, loaders from plain records / JSON, and a seeded synthetic generator.
"""

from shadowledger.snapshot.generator import GeneratorConfig, generate_snapshot
from shadowledger.snapshot.loader import (
    load_snapshot,
    parse_timestamp,
    snapshot_from_records,
    snapshot_to_records,
)
from shadowledger.snapshot.models import (
    COMPANY_TYPES,
    DEFAULT_BASE_TRUST_SCORE,
    Entity,
    EntityType,
    Relationship,
    RelationshipType,
    Sector,
    Snapshot,
    Transaction,
    clamp01,
    clamp_trust,
    sector_for_type,
)

__all__ = [
    "COMPANY_TYPES",
    "DEFAULT_BASE_TRUST_SCORE",
    "Entity",
    "EntityType",
    "GeneratorConfig",
    "Relationship",
    "RelationshipType",
    "Sector",
    "Snapshot",
    "Transaction",
    "clamp01",
    "clamp_trust",
    "generate_snapshot",
    "load_snapshot",
    "parse_timestamp",
    "sector_for_type",
    "snapshot_from_records",
    "snapshot_to_records",
]
