"""
Temporal burst: sudden spikes and acceleration in transaction frequency.

Uses every transaction the entity sends or receives. History older than
min_historical_days is the baseline; the last acceleration_window_days are
"recent". An entity without baseline history is scored only on its overall
daily rate. Otherwise:
  +0.5  recent daily frequency >= spike_multiplier x historical frequency
  +0.5  second half of the recent window >= 2x the first half
Capped at 1.0. Denominators in days are floored at 1 where a span can be zero.
"""

from __future__ import annotations

import time
from collections.abc import Sequence

from shadowledger.analysis_engine.models import ModuleResult
from shadowledger.config.settings import DetectionConfig
from shadowledger.snapshot.models import Transaction

SECONDS_PER_DAY = 86400
NEW_ENTITY_RATE_PER_DAY = 10.0
NEW_ENTITY_SCORE = 0.6
SPIKE_POINTS = 0.5
ACCELERATION_POINTS = 0.5
ACCELERATION_RATIO = 2.0


def detect_temporal_burst(
    entity_id: str,
    transactions: Sequence[Transaction],
    config: DetectionConfig | None = None,
    *,
    now: float | None = None,
) -> ModuleResult:
    """
    Score frequency spikes for one entity.

    Args:
        entity_id: Entity being scored.
        transactions: Transactions involving the entity (others are ignored).
        config: Thresholds; defaults if None.
        now: Reference Unix time in seconds; time.time() if None.
    """
    cfg = config or DetectionConfig()
    ref = time.time() if now is None else now
    txs = sorted(
        (t for t in transactions if t.sender == entity_id or t.receiver == entity_id),
        key=lambda t: t.timestamp,
    )
    if not txs:
        return ModuleResult.not_applicable("No transactions")

    historical_cutoff = ref - cfg.min_historical_days * SECONDS_PER_DAY
    recent_cutoff = ref - cfg.acceleration_window_days * SECONDS_PER_DAY
    historical = [t for t in txs if t.timestamp < historical_cutoff]
    recent = [t for t in txs if t.timestamp >= recent_cutoff]
    first_ts = txs[0].timestamp

    if not historical:
        days_since_first = (ref - first_ts) / SECONDS_PER_DAY
        daily_rate = len(txs) / max(1.0, days_since_first)
        if daily_rate > NEW_ENTITY_RATE_PER_DAY:
            return ModuleResult(
                score=NEW_ENTITY_SCORE,
                flags=[f"New entity with high activity rate: {daily_rate:.2f} transactions/day"],
                details={"daily_rate": round(daily_rate, 2)},
                reason="New entity with high activity rate",
            )
        return ModuleResult.not_applicable(
            "New entity, insufficient history",
            daily_rate=round(daily_rate, 2),
        )

    historical_days = (historical_cutoff - first_ts) / SECONDS_PER_DAY
    historical_freq = len(historical) / max(1.0, historical_days)
    recent_freq = len(recent) / max(1.0, cfg.acceleration_window_days)
    spike_ratio = recent_freq / historical_freq if historical_freq > 0 else 0.0
    spike_detected = spike_ratio >= cfg.spike_multiplier

    window = cfg.acceleration_window_days
    half = window / 2
    first_half = 0
    second_half = 0
    for t in txs:
        days_ago = (ref - t.timestamp) / SECONDS_PER_DAY
        if days_ago <= half:
            second_half += 1
        elif days_ago <= window:
            first_half += 1
    if half > 0:
        first_half_freq = first_half / half
        second_half_freq = second_half / half
    else:
        first_half_freq = second_half_freq = 0.0
    acceleration_ratio = second_half_freq / first_half_freq if first_half_freq > 0 else 0.0
    acceleration_detected = acceleration_ratio >= ACCELERATION_RATIO

    score = 0.0
    flags: list[str] = []
    if spike_detected:
        score += SPIKE_POINTS
        flags.append(f"Spike detected: {spike_ratio:.2f}x increase")
    if acceleration_detected:
        score += ACCELERATION_POINTS
        flags.append(f"Acceleration detected: {acceleration_ratio:.2f}x increase")

    return ModuleResult(
        score=round(min(1.0, score), 4),
        flags=flags,
        details={
            "historical_freq": round(historical_freq, 2),
            "recent_freq": round(recent_freq, 2),
            "spike_ratio": round(spike_ratio, 2),
            "acceleration_ratio": round(acceleration_ratio, 2),
        },
    )
