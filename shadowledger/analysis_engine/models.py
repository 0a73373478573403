"""
Data models for analysis engine output.

ModuleResult is what every pattern detector returns; DetectionResult is the
full per-entity record of one engine run. Both are rebuilt from scratch on
every run and never updated incrementally.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from shadowledger.analysis_engine.baseline_trust import BaselineTrust
from shadowledger.analysis_engine.proximity import CorruptionProximity
from shadowledger.snapshot.models import Entity


class DetectionModule(str, Enum):
    STRUCTURAL = "structural"
    TEMPORAL = "temporal"
    NETWORK = "network"
    COMPLIANCE = "compliance"


@dataclass
class ModuleResult:
    """
    Output of one pattern detector for one entity.

    score is in [0, 1]. flags are the human-readable thresholds that were
    crossed (e.g. "High out-degree: 63"); details carries the measured values
    for auditing. reason is set when the module did not apply at all.
    """

    score: float
    flags: list[str] = field(default_factory=list)
    details: dict[str, Any] = field(default_factory=dict)
    reason: str | None = None

    @classmethod
    def not_applicable(cls, reason: str, **details: Any) -> "ModuleResult":
        return cls(score=0.0, reason=reason, details=dict(details))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"score": self.score, "flags": list(self.flags), **self.details}
        if self.reason is not None:
            out["reason"] = self.reason
        return out


@dataclass
class DetectionResult:
    """
    Per-entity result of one engine run.

    Two trust values are kept side by side: baseline.trust_score (profile and
    corruption-distance formula) and updated_trust_score (base trust decayed
    by composite suspicion). Consumers read either, so neither replaces the other.
    """

    entity: Entity
    """Entity as scored, i.e. after the cascade adjustment."""
    proximity: CorruptionProximity
    baseline: BaselineTrust
    structural: ModuleResult
    temporal: ModuleResult
    network: ModuleResult
    compliance: ModuleResult
    suspicion_score: float
    updated_trust_score: float
    explanations: list[str] = field(default_factory=list)

    @property
    def entity_id(self) -> str:
        return self.entity.id

    def module(self, name: DetectionModule | str) -> ModuleResult:
        return getattr(self, DetectionModule(name).value)

    def module_scores(self) -> dict[str, float]:
        return {m.value: self.module(m).score for m in DetectionModule}

    def to_dict(self) -> dict[str, Any]:
        """The entity record merged with every score, flag and explanation."""
        out = self.entity.to_dict()
        out.update(self.proximity.to_dict())
        out.update(self.baseline.to_dict())
        out.update({
            "structural_score": self.structural.score,
            "temporal_score": self.temporal.score,
            "network_proximity_score": self.network.score,
            "compliance_irregularity_score": self.compliance.score,
            "suspicion_score": self.suspicion_score,
            "updated_trust_score": self.updated_trust_score,
            "details": {m.value: self.module(m).to_dict() for m in DetectionModule},
            "explanation": list(self.explanations),
        })
        return out
