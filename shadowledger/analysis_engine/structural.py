"""
Structural fragmentation: micro-transaction splitting on the outgoing side.

Looks only at transactions the entity sends. Four additive signals:
  +0.3  out-degree (unique recipients) above out_degree_threshold
  +0.3  mean amount below low_value_threshold
  +0.2  population variance of amounts below low_variance_threshold
  +0.2  at least min_burst_count transactions inside one burst window
Capped at 1.0.
"""

from __future__ import annotations

import statistics
from bisect import bisect_right
from collections.abc import Sequence

from shadowledger.analysis_engine.models import ModuleResult
from shadowledger.config.settings import DetectionConfig
from shadowledger.snapshot.models import Transaction

OUT_DEGREE_POINTS = 0.3
LOW_VALUE_POINTS = 0.3
LOW_VARIANCE_POINTS = 0.2
BURST_POINTS = 0.2


def max_window_count(timestamps: Sequence[float], window_seconds: float) -> int:
    """
    Largest number of timestamps inside any [start, start + window] interval,
    where each timestamp is tried as the start. Input must be sorted.
    """
    best = 0
    for i, start in enumerate(timestamps):
        count = bisect_right(timestamps, start + window_seconds, lo=i) - i
        if count > best:
            best = count
    return best


def detect_structural_fragmentation(
    entity_id: str,
    outgoing: Sequence[Transaction],
    config: DetectionConfig | None = None,
) -> ModuleResult:
    """
    Score outgoing-transaction fragmentation for one entity.

    Args:
        entity_id: Entity being scored; transactions from other senders are ignored.
        outgoing: Transactions sent by the entity (any order).
        config: Thresholds; defaults if None.

    Returns:
        ModuleResult with score in [0, 1], flags and measured values.
    """
    cfg = config or DetectionConfig()
    sent = sorted((t for t in outgoing if t.sender == entity_id), key=lambda t: t.timestamp)
    if not sent:
        return ModuleResult.not_applicable("No outgoing transactions")

    out_degree = len({t.receiver for t in sent})
    amounts = [t.amount for t in sent]
    avg_value = statistics.fmean(amounts)
    variance = statistics.pvariance(amounts, mu=avg_value)
    window_seconds = cfg.burst_window_hours * 3600
    max_burst = max_window_count([t.timestamp for t in sent], window_seconds)
    burst_detected = max_burst >= cfg.min_burst_count

    score = 0.0
    flags: list[str] = []
    if out_degree > cfg.out_degree_threshold:
        score += OUT_DEGREE_POINTS
        flags.append(f"High out-degree: {out_degree}")
    if avg_value < cfg.low_value_threshold:
        score += LOW_VALUE_POINTS
        flags.append(f"Low average value: ${avg_value:.2f}")
    if variance < cfg.low_variance_threshold:
        score += LOW_VARIANCE_POINTS
        flags.append(f"Very low variance: {variance:.2f}")
    if burst_detected:
        score += BURST_POINTS
        flags.append(f"Burst detected: {max_burst} transactions in {cfg.burst_window_hours:g}h")

    return ModuleResult(
        score=round(min(1.0, score), 4),
        flags=flags,
        details={
            "out_degree": out_degree,
            "avg_value": avg_value,
            "variance": variance,
            "max_burst": max_burst,
            "burst_detected": burst_detected,
        },
    )
