"""
Composite suspicion and updated trust.

suspicion = clamp01(structural*w1 + temporal*w2 + network*w3 + compliance*w4)
updated_trust = clamp(base - base * suspicion * trust_penalty_factor, 0, 100)

The updated trust is a second trust value layered on the baseline
(corruption-distance) trust; both are reported.
"""

from __future__ import annotations

from shadowledger.config.settings import DetectionConfig
from shadowledger.snapshot.models import DEFAULT_BASE_TRUST_SCORE, clamp01, clamp_trust


def composite_suspicion(
    structural: float,
    temporal: float,
    network: float,
    compliance: float,
    config: DetectionConfig | None = None,
) -> float:
    cfg = config or DetectionConfig()
    total = (
        structural * cfg.structural_weight
        + temporal * cfg.temporal_weight
        + network * cfg.network_weight
        + compliance * cfg.compliance_weight
    )
    return clamp01(round(total, 6))


def updated_trust_score(
    base_trust: float | None,
    suspicion: float,
    config: DetectionConfig | None = None,
) -> float:
    """Decay base trust by suspicion; a missing base trust counts as 50."""
    cfg = config or DetectionConfig()
    base = DEFAULT_BASE_TRUST_SCORE if base_trust is None else base_trust
    penalty = suspicion * cfg.trust_penalty_factor
    return clamp_trust(base - base * penalty)
