"""
Engine settings and detection configuration.

DetectionConfig is the single structured configuration object for every
detector threshold and composite weight; each option is independently
overridable (keyword argument, dict of overrides, or SHADOWLEDGER_* env var)
with the documented defaults as fallback. EngineSettings holds the runtime
knobs of the batch run itself (worker pool size, cascade and proximity
constants, logging).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from shadowledger.config.env import get_env_option, load_shadowledger_env
from shadowledger.core.exceptions import ConfigError

DEFAULT_CONCURRENCY = 8
MIN_CONCURRENCY = 1


@dataclass(frozen=True)
class DetectionConfig:
    """
    Thresholds and weights for the four pattern detectors and composite scorer.

    Weights need not sum to 1; the composite suspicion is clamped to [0, 1].
    """

    # Structural fragmentation
    out_degree_threshold: int = 50
    low_value_threshold: float = 1000.0
    low_variance_threshold: float = 100.0
    burst_window_hours: float = 24.0
    min_burst_count: int = 10

    # Temporal burst
    spike_multiplier: float = 3.0
    acceleration_window_days: float = 7.0
    min_historical_days: float = 30.0

    # Network proximity risk
    max_hops: int = 2
    high_risk_threshold: float = 0.7

    # Compliance irregularity
    new_company_age_days: float = 90.0
    large_capital_threshold: float = 100_000.0
    low_entropy_threshold: float = 0.3
    shared_director_threshold: int = 3

    # Composite
    structural_weight: float = 0.3
    temporal_weight: float = 0.25
    network_weight: float = 0.25
    compliance_weight: float = 0.2
    trust_penalty_factor: float = 0.8

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f.name, value)
            if value < 0:
                raise ConfigError(f.name, value)

    @classmethod
    def option_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_overrides(cls, overrides: Mapping[str, Any] | None = None) -> "DetectionConfig":
        """Build a config from defaults plus any subset of options."""
        return cls().with_overrides(overrides or {})

    def with_overrides(self, overrides: Mapping[str, Any]) -> "DetectionConfig":
        """Return a copy with the given options replaced (values coerced to the field type)."""
        known = {f.name: f for f in fields(self)}
        changes: dict[str, Any] = {}
        for name, value in overrides.items():
            if name not in known:
                raise ConfigError(name, value)
            changes[name] = _coerce(name, value, type(getattr(self, name)))
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.option_names()}


@dataclass(frozen=True)
class EngineSettings:
    """
    Runtime settings for one engine run.

    concurrency: Worker threads for the per-entity pipeline.
    corrupt_threshold: suspicious_activity at or above which an entity is corrupt.
    cascade_increment: Added to wallets behind a politician-influenced shell company.
    proximity_max_depth: Depth ceiling for the corruption-distance traversal.
    """

    concurrency: int = DEFAULT_CONCURRENCY
    corrupt_threshold: float = 0.7
    cascade_increment: float = 0.15
    proximity_max_depth: int = 5
    log_level: str = "INFO"
    log_format: str = "json"

    def __post_init__(self) -> None:
        object.__setattr__(self, "concurrency", max(MIN_CONCURRENCY, int(self.concurrency)))


def _coerce(name: str, value: Any, target: type) -> Any:
    if isinstance(value, bool):
        raise ConfigError(name, value)
    try:
        if target is int:
            as_float = float(value)
            if not as_float.is_integer():
                raise ConfigError(name, value)
            return int(as_float)
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(name, value) from None


def load_detection_config_from_env(base: DetectionConfig | None = None) -> DetectionConfig:
    """Apply SHADOWLEDGER_<OPTION> env overrides on top of base (defaults if None)."""
    load_shadowledger_env()
    cfg = base or DetectionConfig()
    overrides: dict[str, Any] = {}
    for name in DetectionConfig.option_names():
        raw = get_env_option(name)
        if raw is not None:
            overrides[name] = raw
    return cfg.with_overrides(overrides) if overrides else cfg


def get_settings() -> EngineSettings:
    """
    Return engine settings from the environment with defaults.

    SHADOWLEDGER_CONCURRENCY, SHADOWLEDGER_CORRUPT_THRESHOLD,
    SHADOWLEDGER_CASCADE_INCREMENT, SHADOWLEDGER_PROXIMITY_MAX_DEPTH,
    LOG_LEVEL and LOG_FORMAT.
    """
    load_shadowledger_env()
    defaults = EngineSettings()
    values: dict[str, Any] = {}
    for name, target in (
        ("concurrency", int),
        ("corrupt_threshold", float),
        ("cascade_increment", float),
        ("proximity_max_depth", int),
    ):
        raw = get_env_option(name)
        values[name] = _coerce(name, raw, target) if raw is not None else getattr(defaults, name)
    return EngineSettings(
        log_level=(get_env_option("log_level") or _plain_env("LOG_LEVEL") or defaults.log_level).upper(),
        log_format=(get_env_option("log_format") or _plain_env("LOG_FORMAT") or defaults.log_format).lower(),
        **values,
    )


def _plain_env(name: str) -> str | None:
    raw = (os.getenv(name) or "").strip()
    return raw or None
