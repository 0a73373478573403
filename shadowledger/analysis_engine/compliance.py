"""
Compliance irregularity: fake-startup signals for young companies.

Applies only to shell_company and vendor entities younger than
new_company_age_days; everything else scores 0. Signals:
  +0.4  total incoming value above large_capital_threshold
  +0.3  partner diversity (unique senders / incoming count) below low_entropy_threshold
  +0.3  at least shared_director_threshold other companies share the director
Capped at 1.0. A company with no incoming transactions has diversity 0 and
so always collects the diversity signal.
"""

from __future__ import annotations

import time
from collections.abc import Sequence

from shadowledger.analysis_engine.indexes import DirectorIndex
from shadowledger.analysis_engine.models import ModuleResult
from shadowledger.config.settings import DetectionConfig
from shadowledger.snapshot.models import Entity, Transaction

SECONDS_PER_DAY = 86400
LARGE_CAPITAL_POINTS = 0.4
LOW_ENTROPY_POINTS = 0.3
SHARED_DIRECTOR_POINTS = 0.3


def entity_age_days(entity: Entity, now: float) -> float:
    """Age in days; unknown created_at counts as created now."""
    created = entity.created_at if entity.created_at is not None else now
    return (now - created) / SECONDS_PER_DAY


def detect_compliance_irregularity(
    entity: Entity,
    incoming: Sequence[Transaction],
    directors: DirectorIndex,
    config: DetectionConfig | None = None,
    *,
    now: float | None = None,
) -> ModuleResult:
    """
    Score fake-startup irregularities for one company entity.

    Args:
        entity: Entity being scored.
        incoming: Transactions received by the entity.
        directors: Company ids by director name for the whole snapshot.
        config: Thresholds; defaults if None.
        now: Reference Unix time in seconds; time.time() if None.
    """
    cfg = config or DetectionConfig()
    if not entity.is_company:
        return ModuleResult.not_applicable("Not a company entity")

    ref = time.time() if now is None else now
    age_days = entity_age_days(entity, ref)
    if age_days >= cfg.new_company_age_days:
        return ModuleResult.not_applicable("Company is not new", age_days=round(age_days, 1))

    received = [t for t in incoming if t.receiver == entity.id]
    total_capital = sum(t.amount for t in received)
    unique_partners = len({t.sender for t in received})
    partner_entropy = unique_partners / max(1, len(received))
    shared_director_count = directors.shared_count(entity)

    score = 0.0
    flags: list[str] = []
    if total_capital > cfg.large_capital_threshold:
        score += LARGE_CAPITAL_POINTS
        flags.append(f"Large capital inflow: ${total_capital:.2f}")
    if partner_entropy < cfg.low_entropy_threshold:
        score += LOW_ENTROPY_POINTS
        flags.append(f"Low partner diversity: {partner_entropy * 100:.1f}%")
    if shared_director_count >= cfg.shared_director_threshold:
        score += SHARED_DIRECTOR_POINTS
        flags.append(f"Shared director across {shared_director_count + 1} companies")

    return ModuleResult(
        score=round(min(1.0, score), 4),
        flags=flags,
        details={
            "age_days": round(age_days, 1),
            "total_capital": total_capital,
            "partner_entropy": partner_entropy,
            "shared_director_count": shared_director_count,
        },
    )
