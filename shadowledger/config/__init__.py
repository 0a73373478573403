"""
Configuration management for the ShadowLedger engine.

Loads settings from environment variables and an optional .env file and
exposes the detection thresholds as one structured object.
"""

from shadowledger.config.settings import (  # noqa: F401
    DetectionConfig,
    EngineSettings,
    get_settings,
    load_detection_config_from_env,
)

__all__ = [
    "DetectionConfig",
    "EngineSettings",
    "get_settings",
    "load_detection_config_from_env",
]
