"""
Sector analytics over detection results.

Risk level per entity and per-sector aggregates (averages, risk counts, trend).
"""

from shadowledger.analytics.sectors import (
    SectorMetrics,
    all_sector_metrics,
    risk_level,
    sector_metrics,
)

__all__ = [
    "SectorMetrics",
    "all_sector_metrics",
    "risk_level",
    "sector_metrics",
]
