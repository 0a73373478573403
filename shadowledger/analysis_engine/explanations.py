"""
Narrative explanations for one detection result.

Deterministic: one sentence per module scoring above 0.5, built from that
module's flags; otherwise a "moderate" sentence when composite suspicion is
above 0.3; otherwise a single "no significant patterns" sentence. The list
is never empty.
"""

from __future__ import annotations

from shadowledger.analysis_engine.models import ModuleResult
from shadowledger.snapshot.models import Entity

MODULE_EXPLAIN_ABOVE = 0.5
MODERATE_SUSPICION_ABOVE = 0.3


def generate_explanations(
    entity: Entity,
    structural: ModuleResult,
    temporal: ModuleResult,
    network: ModuleResult,
    compliance: ModuleResult,
    suspicion_score: float,
) -> list[str]:
    name = entity.display_name
    sentences: list[str] = []

    if structural.score > MODULE_EXPLAIN_ABOVE and structural.flags:
        sentences.append(f"{name} shows transaction fragmentation: {', '.join(structural.flags)}.")
    if temporal.score > MODULE_EXPLAIN_ABOVE and temporal.flags:
        sentences.append(f"Unusual activity pattern detected: {', '.join(temporal.flags)}.")
    if network.score > MODULE_EXPLAIN_ABOVE and network.flags:
        sentences.append(f"Proximity risk: {', '.join(network.flags)}.")
    if compliance.score > MODULE_EXPLAIN_ABOVE and compliance.flags:
        sentences.append(f"Compliance irregularities: {', '.join(compliance.flags)}.")

    if not sentences and suspicion_score > MODERATE_SUSPICION_ABOVE:
        sentences.append(f"{name} shows moderate suspicious activity patterns.")
    if not sentences:
        sentences.append(f"{name} shows no significant suspicious patterns.")
    return sentences
