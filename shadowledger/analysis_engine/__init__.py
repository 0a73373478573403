"""
Analysis engine package: suspicion scoring and trust decay.

Consumes a static snapshot of entities, relationships and transactions,
applies the politician -> shell company -> wallet cascade once, then scores
every entity: corruption proximity and baseline trust, four pattern detectors,
composite suspicion, updated trust and narrative explanations.
"""

from shadowledger.analysis_engine.baseline_trust import (
    BaselineTrust,
    access_level_for,
    compute_baseline_trust,
)
from shadowledger.analysis_engine.cascade import (
    CascadeHit,
    CascadeResult,
    propagate_cascading_risk,
)
from shadowledger.analysis_engine.compliance import detect_compliance_irregularity
from shadowledger.analysis_engine.explanations import generate_explanations
from shadowledger.analysis_engine.graph import GraphIndex
from shadowledger.analysis_engine.indexes import DirectorIndex, TransactionIndex
from shadowledger.analysis_engine.models import DetectionModule, DetectionResult, ModuleResult
from shadowledger.analysis_engine.network_risk import (
    detect_network_proximity_risk,
    high_risk_ids,
)
from shadowledger.analysis_engine.pipeline import (
    EngineContext,
    build_context,
    run_detection_engine,
    run_snapshot,
    score_context,
)
from shadowledger.analysis_engine.proximity import (
    UNREACHABLE,
    CorruptionProximity,
    compute_proximity,
    corruption_distance,
    proximity_score,
)
from shadowledger.analysis_engine.scorer import composite_suspicion, updated_trust_score
from shadowledger.analysis_engine.structural import detect_structural_fragmentation
from shadowledger.analysis_engine.temporal import detect_temporal_burst

__all__ = [
    "BaselineTrust",
    "access_level_for",
    "compute_baseline_trust",
    "CascadeHit",
    "CascadeResult",
    "propagate_cascading_risk",
    "detect_compliance_irregularity",
    "generate_explanations",
    "GraphIndex",
    "DirectorIndex",
    "TransactionIndex",
    "DetectionModule",
    "DetectionResult",
    "ModuleResult",
    "detect_network_proximity_risk",
    "high_risk_ids",
    "EngineContext",
    "build_context",
    "run_detection_engine",
    "run_snapshot",
    "score_context",
    "UNREACHABLE",
    "CorruptionProximity",
    "compute_proximity",
    "corruption_distance",
    "proximity_score",
    "composite_suspicion",
    "updated_trust_score",
    "detect_structural_fragmentation",
    "detect_temporal_burst",
]
