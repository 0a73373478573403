"""
Baseline trust: the initial 0-100 trust score from profile and graph position.

Formula (per entity, after the cascade):
    real_suspicion = suspicious_activity + manipulation_score
    trust = clamp(transparency*30 + audit_history*30 + proximity*30 - real_suspicion*40, 0, 100)
    if manipulation_score > 0: trust = min(100, trust + manipulation_score*20)

manipulation_score models deliberate score-faking: it counts against the entity
in the real suspicion and is then added back as a visible boost.
real_trust_score strips that boost out again. This baseline score is kept
separate from the updated (suspicion-decayed) trust of the composite scorer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from shadowledger.analysis_engine.proximity import CorruptionProximity
from shadowledger.snapshot.models import Entity, clamp_trust

TRANSPARENCY_WEIGHT = 30.0
AUDIT_WEIGHT = 30.0
PROXIMITY_WEIGHT = 30.0
SUSPICION_WEIGHT = 40.0
MANIPULATION_BOOST = 20.0
MANIPULATION_DETECTED_ABOVE = 0.2

ACCESS_FAST = "Fast Approvals"
ACCESS_STANDARD = "Standard Review"
ACCESS_RESTRICTED = "Restricted Access"
ACCESS_VENDOR_RESTRICTED = "Vendor Access Restricted"


@dataclass(frozen=True)
class BaselineTrust:
    trust_score: float
    """Displayed trust, rounded to one decimal."""
    real_trust_score: float
    """Trust without the manipulation boost (may be negative, as reported)."""
    access_level: str
    manipulation_detected: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "trust_score": self.trust_score,
            "real_trust_score": self.real_trust_score,
            "access_level": self.access_level,
            "manipulation_detected": self.manipulation_detected,
        }


def access_level_for(trust_score: float) -> str:
    if trust_score >= 70:
        return ACCESS_FAST
    if trust_score >= 40:
        return ACCESS_STANDARD
    if trust_score >= 5:
        return ACCESS_RESTRICTED
    return ACCESS_VENDOR_RESTRICTED


def compute_baseline_trust(entity: Entity, proximity: CorruptionProximity) -> BaselineTrust:
    transparency = entity.transparency or 0.0
    audit = entity.audit_history or 0.0
    manipulation = entity.manipulation_score or 0.0
    real_suspicion = (entity.suspicious_activity or 0.0) + manipulation

    trust = clamp_trust(
        transparency * TRANSPARENCY_WEIGHT
        + audit * AUDIT_WEIGHT
        + proximity.score * PROXIMITY_WEIGHT
        - real_suspicion * SUSPICION_WEIGHT
    )
    if manipulation > 0:
        trust = min(100.0, trust + manipulation * MANIPULATION_BOOST)

    return BaselineTrust(
        trust_score=round(trust, 1),
        real_trust_score=trust - manipulation * MANIPULATION_BOOST,
        access_level=access_level_for(trust),
        manipulation_detected=manipulation > MANIPULATION_DETECTED_ABOVE,
    )
