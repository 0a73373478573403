"""
Sector analytics over detection results.

Risk level per entity (High / Medium / Low) and per-sector aggregates:
average trust and suspicion, risk counts and a trust trend that compares
recently created entities with the sector average. Sector views read the
updated trust score.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from shadowledger.analysis_engine.models import DetectionResult
from shadowledger.snapshot.models import Sector

SECONDS_PER_DAY = 86400
RECENT_DAYS = 30
TREND_DELTA = 5.0

RISK_HIGH = "High"
RISK_MEDIUM = "Medium"
RISK_LOW = "Low"

TREND_IMPROVING = "improving"
TREND_STABLE = "stable"
TREND_DECLINING = "declining"


def risk_level(trust_score: float | None, suspicion_score: float | None) -> str:
    """High: trust < 30 or suspicion > 0.7; Medium: trust < 60 or suspicion > 0.3; else Low."""
    trust = 50.0 if trust_score is None else trust_score
    suspicion = 0.0 if suspicion_score is None else suspicion_score
    if trust < 30 or suspicion > 0.7:
        return RISK_HIGH
    if trust < 60 or suspicion > 0.3:
        return RISK_MEDIUM
    return RISK_LOW


@dataclass
class SectorMetrics:
    sector: str
    average_trust_score: float = 0.0
    average_suspicion_score: float = 0.0
    high_risk_count: int = 0
    medium_risk_count: int = 0
    low_risk_count: int = 0
    trust_trend: str = TREND_STABLE
    total_entities: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "sector": self.sector,
            "average_trust_score": self.average_trust_score,
            "average_suspicion_score": self.average_suspicion_score,
            "high_risk_count": self.high_risk_count,
            "medium_risk_count": self.medium_risk_count,
            "low_risk_count": self.low_risk_count,
            "trust_trend": self.trust_trend,
            "total_entities": self.total_entities,
        }


def sector_metrics(
    results: Sequence[DetectionResult],
    sector: Sector | str,
    *,
    now: float | None = None,
) -> SectorMetrics:
    """
    Aggregate one sector.

    Each entity lands in exactly one risk bucket (see risk_level), so the
    three counts always add up to total_entities.
    """
    sector_value = sector.value if isinstance(sector, Sector) else str(sector)
    members = [r for r in results if r.entity.sector.value == sector_value]
    if not members:
        return SectorMetrics(sector=sector_value)

    ref = time.time() if now is None else now
    trusts = [r.updated_trust_score for r in members]
    suspicions = [r.suspicion_score for r in members]
    avg_trust = sum(trusts) / len(trusts)
    avg_suspicion = sum(suspicions) / len(suspicions)

    levels = [risk_level(t, s) for t, s in zip(trusts, suspicions)]
    high = levels.count(RISK_HIGH)
    medium = levels.count(RISK_MEDIUM)
    low = levels.count(RISK_LOW)

    recent = [
        r.updated_trust_score
        for r in members
        if (ref - (r.entity.created_at if r.entity.created_at is not None else ref)) / SECONDS_PER_DAY
        < RECENT_DAYS
    ]
    recent_avg = sum(recent) / len(recent) if recent else avg_trust
    if recent_avg > avg_trust + TREND_DELTA:
        trend = TREND_IMPROVING
    elif recent_avg < avg_trust - TREND_DELTA:
        trend = TREND_DECLINING
    else:
        trend = TREND_STABLE

    return SectorMetrics(
        sector=sector_value,
        average_trust_score=round(avg_trust, 1),
        average_suspicion_score=round(avg_suspicion, 2),
        high_risk_count=high,
        medium_risk_count=medium,
        low_risk_count=low,
        trust_trend=trend,
        total_entities=len(members),
    )


def all_sector_metrics(
    results: Sequence[DetectionResult],
    *,
    now: float | None = None,
) -> dict[str, SectorMetrics]:
    return {s.value: sector_metrics(results, s, now=now) for s in Sector}
