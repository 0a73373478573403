"""
Synthetic snapshot generator for demos and load tests.

Deterministic with a seed. Produces entities of every type, the typed
relationship wiring of the city model (shell companies controlled by
directors, directors owning wallets, wallets paying vendors, politicians
influencing shell companies, influencers promoting wallets, plus random
linked/connected cross edges) and a transaction history driven by those
relationships with extra random transfers on top.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass

from shadowledger.ledger_logging import get_logger
from shadowledger.snapshot.models import (
    Entity,
    EntityType,
    Relationship,
    RelationshipType,
    Snapshot,
    Transaction,
)

logger = get_logger(__name__)

SECONDS_PER_DAY = 86400
HISTORY_DAYS = 365
DIRECTOR_POOL = 50


@dataclass(frozen=True)
class GeneratorConfig:
    """Entity counts per type and volume of random cross edges / transfers."""

    shell_companies: int = 200
    directors: int = 150
    wallets: int = 300
    vendors: int = 150
    politicians: int = 100
    influencers: int = 100
    cross_links: int = 200
    random_transactions: int = 500

    def scaled(self, factor: float) -> "GeneratorConfig":
        """Same proportions, every count multiplied by factor (at least 1 per type)."""

        def s(n: int) -> int:
            return max(1, int(round(n * factor)))

        return GeneratorConfig(
            shell_companies=s(self.shell_companies),
            directors=s(self.directors),
            wallets=s(self.wallets),
            vendors=s(self.vendors),
            politicians=s(self.politicians),
            influencers=s(self.influencers),
            cross_links=s(self.cross_links),
            random_transactions=s(self.random_transactions),
        )


def _created_at(rng: random.Random, now: float) -> float:
    return now - rng.random() * HISTORY_DAYS * SECONDS_PER_DAY


def _occasional(rng: random.Random, above: float, scale: float) -> float:
    """Nonzero (rng * scale) only when a draw exceeds `above`."""
    return rng.random() * scale if rng.random() > above else 0.0


def _generate_entities(rng: random.Random, cfg: GeneratorConfig, now: float) -> list[Entity]:
    entities: list[Entity] = []
    counter = 1
    director_names: list[str] = []

    for i in range(cfg.shell_companies):
        suspicious = rng.random() * 0.5 + 0.5 if rng.random() > 0.3 else rng.random() * 0.3
        director_name = f"Director {rng.randint(1, DIRECTOR_POOL)}"
        director_names.append(director_name)
        entities.append(Entity(
            id=f"sc{counter}",
            name=f"Shell Co {i + 1}",
            type=EntityType.SHELL_COMPANY.value,
            transparency=rng.random() * 0.3,
            audit_history=rng.random() * 0.2,
            suspicious_activity=suspicious,
            manipulation_score=_occasional(rng, 0.7, 0.4),
            created_at=_created_at(rng, now),
            director_name=director_name,
        ))
        counter += 1

    for i in range(cfg.directors):
        entities.append(Entity(
            id=f"d{counter}",
            name=f"Director {i + 1}",
            type=EntityType.DIRECTOR.value,
            transparency=rng.random() * 0.5,
            audit_history=rng.random() * 0.4,
            suspicious_activity=rng.random() * 0.6,
            manipulation_score=_occasional(rng, 0.75, 0.3),
            created_at=_created_at(rng, now),
        ))
        counter += 1

    for _ in range(cfg.wallets):
        entities.append(Entity(
            id=f"w{counter}",
            name=f"0x{rng.getrandbits(32):08x}...",
            type=EntityType.WALLET.value,
            transparency=rng.random() * 0.3,
            audit_history=rng.random() * 0.2,
            suspicious_activity=rng.random() * 0.8,
            manipulation_score=_occasional(rng, 0.8, 0.5),
            created_at=_created_at(rng, now),
        ))
        counter += 1

    for i in range(cfg.vendors):
        shared = rng.choice(director_names) if director_names and rng.random() > 0.7 else None
        entities.append(Entity(
            id=f"v{counter}",
            name=f"Vendor {i + 1}",
            type=EntityType.VENDOR.value,
            transparency=rng.random() * 0.6 + 0.2,
            audit_history=rng.random() * 0.5,
            suspicious_activity=rng.random() * 0.5,
            manipulation_score=_occasional(rng, 0.85, 0.2),
            created_at=_created_at(rng, now),
            director_name=shared,
        ))
        counter += 1

    for i in range(cfg.politicians):
        entities.append(Entity(
            id=f"p{counter}",
            name=f"Politician {i + 1}",
            type=EntityType.POLITICIAN.value,
            transparency=rng.random() * 0.5 + 0.3,
            audit_history=rng.random() * 0.6,
            suspicious_activity=rng.random() * 0.5,
            manipulation_score=_occasional(rng, 0.7, 0.4),
            created_at=_created_at(rng, now),
        ))
        counter += 1

    for i in range(cfg.influencers):
        entities.append(Entity(
            id=f"i{counter}",
            name=f"@influencer{i + 1}",
            type=EntityType.INFLUENCER.value,
            transparency=rng.random() * 0.4,
            audit_history=rng.random() * 0.3,
            suspicious_activity=rng.random() * 0.7,
            manipulation_score=_occasional(rng, 0.8, 0.5),
            created_at=_created_at(rng, now),
        ))
        counter += 1

    return entities


def _generate_relationships(
    rng: random.Random,
    entities: list[Entity],
    cfg: GeneratorConfig,
) -> list[Relationship]:
    by_type: dict[str, list[Entity]] = {t.value: [] for t in EntityType}
    for e in entities:
        by_type[e.type_value].append(e)
    shells = by_type[EntityType.SHELL_COMPANY.value]
    directors = by_type[EntityType.DIRECTOR.value]
    wallets = by_type[EntityType.WALLET.value]
    vendors = by_type[EntityType.VENDOR.value]
    politicians = by_type[EntityType.POLITICIAN.value]
    influencers = by_type[EntityType.INFLUENCER.value]

    rels: list[Relationship] = []

    def link(source: Entity, target: Entity, rel_type: RelationshipType) -> None:
        rels.append(Relationship(source.id, target.id, rel_type.value))

    if directors:
        for i, sc in enumerate(shells):
            n = rng.randint(1, 3)
            for j in range(min(n, len(directors))):
                link(sc, directors[(i * n + j) % len(directors)], RelationshipType.CONTROLS)
    if wallets:
        for i, d in enumerate(directors):
            n = rng.randint(1, 4)
            for j in range(min(n, len(wallets))):
                link(d, wallets[(i * n + j) % len(wallets)], RelationshipType.OWNS)
    if vendors:
        for i, w in enumerate(wallets):
            if rng.random() > 0.6:
                link(w, vendors[i % len(vendors)], RelationshipType.PAYS)
        for i, sc in enumerate(shells):
            if rng.random() > 0.5:
                link(sc, vendors[i % len(vendors)], RelationshipType.CONTRACTS)
    if shells:
        for i, p in enumerate(politicians):
            n = rng.randint(1, 3)
            for j in range(n):
                link(p, shells[(i * n + j) % len(shells)], RelationshipType.INFLUENCES)
    if wallets:
        for i, inf in enumerate(influencers):
            n = rng.randint(1, 5)
            for j in range(n):
                link(inf, wallets[(i * n + j) % len(wallets)], RelationshipType.PROMOTES)

    for _ in range(cfg.cross_links):
        source = rng.choice(entities)
        target = rng.choice(entities)
        if source.id != target.id:
            kind = RelationshipType.LINKED if rng.random() > 0.5 else RelationshipType.CONNECTED
            link(source, target, kind)
    return rels


def _amount_for(rng: random.Random, rel_type: str) -> float:
    if rel_type in (RelationshipType.PAYS.value, RelationshipType.CONTRACTS.value):
        amount = rng.random() * 50_000 + 1_000
    elif rel_type in (RelationshipType.OWNS.value, RelationshipType.CONTROLS.value):
        amount = rng.random() * 100_000 + 10_000
    else:
        amount = rng.random() * 20_000 + 500
    return round(amount, 2)


def _recent_weighted_ts(rng: random.Random, now: float) -> float:
    # Squared draw skews history towards recent days.
    days_ago = rng.random() ** 2 * HISTORY_DAYS
    return now - days_ago * SECONDS_PER_DAY


def _generate_transactions(
    rng: random.Random,
    entities: list[Entity],
    relationships: list[Relationship],
    cfg: GeneratorConfig,
    now: float,
) -> list[Transaction]:
    txs: list[Transaction] = []
    for idx, rel in enumerate(relationships):
        for i in range(rng.randint(1, 10)):
            txs.append(Transaction(
                id=f"tx_{idx}_{i}",
                sender=rel.source,
                receiver=rel.target,
                amount=_amount_for(rng, rel.type_value),
                timestamp=_recent_weighted_ts(rng, now),
            ))
    for i in range(cfg.random_transactions):
        sender = rng.choice(entities)
        receiver = rng.choice(entities)
        if sender.id == receiver.id:
            continue
        txs.append(Transaction(
            id=f"tx_random_{i}",
            sender=sender.id,
            receiver=receiver.id,
            amount=round(rng.random() * 30_000 + 100, 2),
            timestamp=_recent_weighted_ts(rng, now),
        ))
    return txs


def generate_snapshot(
    seed: int = 42,
    config: GeneratorConfig | None = None,
    *,
    now: float | None = None,
) -> Snapshot:
    """
    Generate a synthetic snapshot.

    Args:
        seed: RNG seed; the same seed and now always give the same snapshot.
        config: Entity counts; defaults to the 1000-entity city model.
        now: Reference Unix time in seconds (defaults to time.time()).
    """
    cfg = config or GeneratorConfig()
    ref = time.time() if now is None else float(now)
    rng = random.Random(seed)
    entities = _generate_entities(rng, cfg, ref)
    relationships = _generate_relationships(rng, entities, cfg)
    transactions = _generate_transactions(rng, entities, relationships, cfg, ref)
    logger.info(
        "snapshot_generated",
        seed=seed,
        entities=len(entities),
        relationships=len(relationships),
        transactions=len(transactions),
    )
    return Snapshot.of(entities, relationships, transactions)
