"""
Tests for narrative explanations.
"""

from __future__ import annotations

from shadowledger.analysis_engine.explanations import generate_explanations
from shadowledger.analysis_engine.models import ModuleResult

ZERO = ModuleResult(score=0.0)


def test_clean_entity_gets_single_sentence(make_entity):
    e = make_entity("v1", "vendor", name="Vendor 1")
    assert generate_explanations(e, ZERO, ZERO, ZERO, ZERO, 0.0) == [
        "Vendor 1 shows no significant suspicious patterns."
    ]


def test_moderate_sentence_without_strong_module(make_entity):
    e = make_entity("w1")
    half = ModuleResult(score=0.5, flags=["something"])
    assert generate_explanations(e, half, half, ZERO, ZERO, 0.4) == [
        "w1 shows moderate suspicious activity patterns."
    ]


def test_one_sentence_per_strong_module_in_order(make_entity):
    e = make_entity("sc1", "shell_company", name="Shell Co 1")
    structural = ModuleResult(score=0.8, flags=["High out-degree: 63", "Low average value: $412.10"])
    temporal = ModuleResult(score=0.6, flags=["New entity with high activity rate: 12.00 transactions/day"])
    network = ModuleResult(score=0.67, flags=["Within 1 hop(s) of high-risk entity"])
    compliance = ModuleResult(score=0.7, flags=["Large capital inflow: $150000.00"])
    assert generate_explanations(e, structural, temporal, network, compliance, 0.9) == [
        "Shell Co 1 shows transaction fragmentation: High out-degree: 63, Low average value: $412.10.",
        "Unusual activity pattern detected: New entity with high activity rate: 12.00 transactions/day.",
        "Proximity risk: Within 1 hop(s) of high-risk entity.",
        "Compliance irregularities: Large capital inflow: $150000.00.",
    ]


def test_strong_score_without_flags_is_skipped(make_entity):
    e = make_entity("w1")
    silent = ModuleResult(score=0.9)
    out = generate_explanations(e, silent, ZERO, ZERO, ZERO, 0.2)
    assert out == ["w1 shows no significant suspicious patterns."]
