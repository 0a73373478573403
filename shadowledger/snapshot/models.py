"""
Data models for one static graph snapshot.

Entities, relationships and transactions are immutable once loaded. The only
value that changes during a run is an entity's suspicious_activity, and that
happens by building a new Entity (dataclasses.replace) in the cascade step,
never by mutating a shared record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

DEFAULT_BASE_TRUST_SCORE = 50.0


class EntityType(str, Enum):
    SHELL_COMPANY = "shell_company"
    DIRECTOR = "director"
    WALLET = "wallet"
    VENDOR = "vendor"
    POLITICIAN = "politician"
    INFLUENCER = "influencer"


class RelationshipType(str, Enum):
    CONTROLS = "controls"
    OWNS = "owns"
    PAYS = "pays"
    CONTRACTS = "contracts"
    INFLUENCES = "influences"
    PROMOTES = "promotes"
    LINKED = "linked"
    CONNECTED = "connected"


class Sector(str, Enum):
    GOVERNMENT = "government"
    CORPORATE = "corporate"
    FINANCIAL = "financial"
    MEDIA = "media"


SECTOR_BY_TYPE: dict[str, Sector] = {
    EntityType.POLITICIAN.value: Sector.GOVERNMENT,
    EntityType.SHELL_COMPANY.value: Sector.CORPORATE,
    EntityType.VENDOR.value: Sector.CORPORATE,
    EntityType.DIRECTOR.value: Sector.CORPORATE,
    EntityType.WALLET.value: Sector.FINANCIAL,
    EntityType.INFLUENCER.value: Sector.MEDIA,
}

COMPANY_TYPES = frozenset({EntityType.SHELL_COMPANY.value, EntityType.VENDOR.value})
"""Entity types the compliance module applies to and counts for shared directors."""


def sector_for_type(entity_type: str) -> Sector:
    """Sector derived from entity type; unknown types fall back to corporate."""
    return SECTOR_BY_TYPE.get(str(_enum_value(entity_type)), Sector.CORPORATE)


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def clamp_trust(value: float) -> float:
    return max(0.0, min(100.0, value))


@dataclass(frozen=True)
class Entity:
    """
    One node of the relationship graph.

    Activity fields are fractions clamped to [0, 1] and default to 0 when the
    source record does not carry them. Trust values are clamped to [0, 100].
    created_at is a Unix timestamp in seconds;
    None means unknown and is treated as "created now" by age-based rules.
    """

    id: str
    type: str
    transparency: float = 0.0
    audit_history: float = 0.0
    suspicious_activity: float = 0.0
    manipulation_score: float = 0.0
    created_at: float | None = None
    base_trust_score: float = DEFAULT_BASE_TRUST_SCORE
    director_name: str | None = None
    name: str | None = None
    """Display name used in explanations; defaults to id."""
    prior_trust_score: float | None = None
    """Updated trust carried over from an earlier run, if the record has one."""
    prior_suspicion_score: float | None = None
    """Suspicion score carried over from an earlier run, if the record has one."""

    def __post_init__(self) -> None:
        for name in ("transparency", "audit_history", "suspicious_activity", "manipulation_score"):
            value = getattr(self, name)
            object.__setattr__(self, name, clamp01(float(value)) if value is not None else 0.0)
        base = self.base_trust_score
        object.__setattr__(
            self,
            "base_trust_score",
            clamp_trust(float(base)) if base is not None else DEFAULT_BASE_TRUST_SCORE,
        )
        if self.prior_trust_score is not None:
            object.__setattr__(self, "prior_trust_score", clamp_trust(float(self.prior_trust_score)))
        if self.prior_suspicion_score is not None:
            object.__setattr__(self, "prior_suspicion_score", clamp01(float(self.prior_suspicion_score)))

    @property
    def sector(self) -> Sector:
        return sector_for_type(self.type)

    @property
    def type_value(self) -> str:
        return str(_enum_value(self.type))

    @property
    def display_name(self) -> str:
        return self.name or self.id

    @property
    def is_company(self) -> bool:
        return self.type_value in COMPANY_TYPES

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type_value,
            "sector": self.sector.value,
            "name": self.display_name,
            "transparency": self.transparency,
            "audit_history": self.audit_history,
            "suspicious_activity": self.suspicious_activity,
            "manipulation_score": self.manipulation_score,
            "created_at": self.created_at,
            "base_trust_score": self.base_trust_score,
            "director_name": self.director_name,
            "prior_trust_score": self.prior_trust_score,
            "prior_suspicion_score": self.prior_suspicion_score,
        }


@dataclass(frozen=True)
class Relationship:
    """Typed edge; directed for labelling, undirected for every traversal."""

    source: str
    target: str
    type: str = RelationshipType.LINKED.value

    @property
    def type_value(self) -> str:
        return str(_enum_value(self.type))

    def other(self, entity_id: str) -> str:
        """Endpoint opposite to entity_id (source when entity_id is neither)."""
        return self.target if self.source == entity_id else self.source


@dataclass(frozen=True)
class Transaction:
    """Value transfer between two entities; independent of relationship records."""

    id: str
    sender: str
    receiver: str
    amount: float
    timestamp: float
    """Unix timestamp in seconds."""


@dataclass(frozen=True)
class Snapshot:
    """Complete, static input of one engine run."""

    entities: tuple[Entity, ...] = field(default_factory=tuple)
    relationships: tuple[Relationship, ...] = field(default_factory=tuple)
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)

    @classmethod
    def of(
        cls,
        entities: Iterable[Entity],
        relationships: Iterable[Relationship] = (),
        transactions: Iterable[Transaction] = (),
    ) -> "Snapshot":
        return cls(tuple(entities), tuple(relationships), tuple(transactions))

    def entity_map(self) -> dict[str, Entity]:
        return {e.id: e for e in self.entities}
