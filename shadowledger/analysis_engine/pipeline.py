"""
Detection engine pipeline: snapshot in, one DetectionResult per entity out.

Phases:
  1. Cascade (single-threaded): politician -> shell company -> wallet increment,
     producing an adjusted snapshot. Runs exactly once per call.
  2. Build read-only indexes (graph, transactions, directors, corrupt set) and
     the high-risk set from each entity's prior or base trust.
  3. Per entity, in a thread pool: corruption distance, baseline trust, four
     detectors -> composite -> explanations.

Workers only read the shared indexes; nothing is mutated after phase 1.
Results come back in input order. A failure while scoring one entity is
logged with the entity id and re-raised.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TypeVar

from shadowledger.analysis_engine.baseline_trust import BaselineTrust, compute_baseline_trust
from shadowledger.analysis_engine.cascade import CascadeResult, propagate_cascading_risk
from shadowledger.analysis_engine.compliance import detect_compliance_irregularity
from shadowledger.analysis_engine.explanations import generate_explanations
from shadowledger.analysis_engine.graph import GraphIndex
from shadowledger.analysis_engine.indexes import DirectorIndex, TransactionIndex
from shadowledger.analysis_engine.models import DetectionResult
from shadowledger.analysis_engine.network_risk import detect_network_proximity_risk, high_risk_ids
from shadowledger.analysis_engine.proximity import CorruptionProximity, compute_proximity, corrupt_ids
from shadowledger.analysis_engine.scorer import composite_suspicion, updated_trust_score
from shadowledger.analysis_engine.structural import detect_structural_fragmentation
from shadowledger.analysis_engine.temporal import detect_temporal_burst
from shadowledger.config.settings import DetectionConfig, EngineSettings
from shadowledger.ledger_logging import bind_entity, get_logger
from shadowledger.snapshot.models import Entity, Relationship, Snapshot, Transaction

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class EngineContext:
    """Read-only state shared by every worker during one run."""

    snapshot: Snapshot
    graph: GraphIndex
    transactions: TransactionIndex
    directors: DirectorIndex
    corrupt: frozenset[str]
    config: DetectionConfig
    settings: EngineSettings
    now: float


def build_context(
    snapshot: Snapshot,
    config: DetectionConfig | None = None,
    *,
    settings: EngineSettings | None = None,
    now: float | None = None,
    graph: GraphIndex | None = None,
) -> EngineContext:
    """Indexes over an already-cascaded snapshot."""
    cfg_settings = settings or EngineSettings()
    return EngineContext(
        snapshot=snapshot,
        graph=graph or GraphIndex(snapshot.relationships),
        transactions=TransactionIndex(snapshot.transactions),
        directors=DirectorIndex(snapshot.entities),
        corrupt=corrupt_ids(snapshot.entities, cfg_settings.corrupt_threshold),
        config=config or DetectionConfig(),
        settings=cfg_settings,
        now=time.time() if now is None else float(now),
    )


def _run_parallel(
    fn: Callable[[Entity], T],
    entities: Sequence[Entity],
    concurrency: int,
    stage: str,
) -> list[T]:
    def guarded(entity: Entity) -> T:
        try:
            return fn(entity)
        except Exception as e:
            bind_entity(entity.id).exception("entity_scoring_failed", stage=stage, error=str(e))
            raise

    if not entities:
        return []
    with ThreadPoolExecutor(max_workers=min(concurrency, len(entities))) as executor:
        futures = [executor.submit(guarded, e) for e in entities]
        return [f.result() for f in futures]


def baseline_for(entity: Entity, ctx: EngineContext) -> tuple[CorruptionProximity, BaselineTrust]:
    proximity = compute_proximity(
        entity.id,
        ctx.graph,
        ctx.corrupt,
        max_depth=ctx.settings.proximity_max_depth,
    )
    return proximity, compute_baseline_trust(entity, proximity)


def score_entity(
    entity: Entity,
    ctx: EngineContext,
    proximity: CorruptionProximity,
    baseline: BaselineTrust,
    high_risk: frozenset[str],
) -> DetectionResult:
    """Four detectors, composite suspicion, updated trust and explanations for one entity."""
    cfg = ctx.config
    structural = detect_structural_fragmentation(entity.id, ctx.transactions.outgoing(entity.id), cfg)
    temporal = detect_temporal_burst(entity.id, ctx.transactions.involving(entity.id), cfg, now=ctx.now)
    network = detect_network_proximity_risk(entity.id, ctx.graph, high_risk, cfg)
    compliance = detect_compliance_irregularity(
        entity,
        ctx.transactions.incoming(entity.id),
        ctx.directors,
        cfg,
        now=ctx.now,
    )
    suspicion = composite_suspicion(
        structural.score, temporal.score, network.score, compliance.score, cfg
    )
    return DetectionResult(
        entity=entity,
        proximity=proximity,
        baseline=baseline,
        structural=structural,
        temporal=temporal,
        network=network,
        compliance=compliance,
        suspicion_score=suspicion,
        updated_trust_score=updated_trust_score(entity.base_trust_score, suspicion, cfg),
        explanations=generate_explanations(
            entity, structural, temporal, network, compliance, suspicion
        ),
    )


def score_context(ctx: EngineContext) -> list[DetectionResult]:
    """High-risk set and per-entity scoring over a prepared context (no cascade)."""
    entities = list(ctx.snapshot.entities)
    high_risk = high_risk_ids(entities, ctx.config)

    def run_one(entity: Entity) -> DetectionResult:
        proximity, baseline = baseline_for(entity, ctx)
        return score_entity(entity, ctx, proximity, baseline, high_risk)

    return _run_parallel(run_one, entities, ctx.settings.concurrency, "detection")


def run_snapshot(
    snapshot: Snapshot,
    config: DetectionConfig | None = None,
    *,
    settings: EngineSettings | None = None,
    now: float | None = None,
) -> list[DetectionResult]:
    """
    Full engine run over a raw snapshot.

    The cascade is applied here, once; pass the raw (un-cascaded) snapshot.

    Args:
        snapshot: Raw entities, relationships and transactions.
        config: Detector thresholds and composite weights; defaults if None.
        settings: Worker pool size and cascade/proximity constants; defaults if None.
        now: Reference Unix time in seconds for age and recency rules.

    Returns:
        One DetectionResult per entity, in input order.
    """
    started = time.monotonic()
    run_settings = settings or EngineSettings()
    graph = GraphIndex(snapshot.relationships)
    cascade: CascadeResult = propagate_cascading_risk(
        snapshot,
        increment=run_settings.cascade_increment,
        graph=graph,
    )
    ctx = build_context(cascade.snapshot, config, settings=run_settings, now=now, graph=graph)
    results = score_context(ctx)

    flagged = sum(1 for r in results if r.suspicion_score > 0.3)
    logger.info(
        "detection_engine_done",
        entities=len(results),
        relationships=len(snapshot.relationships),
        transactions=len(snapshot.transactions),
        cascade_hits=len(cascade.hits),
        corrupt=len(ctx.corrupt),
        flagged=flagged,
        concurrency=run_settings.concurrency,
        duration_sec=round(time.monotonic() - started, 3),
    )
    return results


def run_detection_engine(
    entities: Iterable[Entity],
    relationships: Iterable[Relationship],
    transactions: Iterable[Transaction],
    config: DetectionConfig | None = None,
    *,
    settings: EngineSettings | None = None,
    now: float | None = None,
) -> list[DetectionResult]:
    """(entities, relationships, transactions, config) -> per-entity detection results."""
    return run_snapshot(
        Snapshot.of(entities, relationships, transactions),
        config,
        settings=settings,
        now=now,
    )
