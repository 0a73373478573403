"""
Engine logging: one structured line per engine event on stderr.

Events are snake_case names such as snapshot_loaded, cascade_applied,
graph_index_built, entity_scoring_failed and detection_engine_done. The
event name lands in event_type; counts, entity ids and scores travel as
keyword fields, with float score and trust fields rounded to 4 decimals.
LOG_FORMAT=json (default) renders JSON lines, anything else the structlog
console renderer.

This module imports nothing from shadowledger so every package can log.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# JSON output for batch runs (LOG_FORMAT=json); human-readable for local
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Move the event name to event_type and mirror it in message."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def _round_scores(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Round float *_score and *_trust fields to 4 decimals."""
    for key, value in event_dict.items():
        if isinstance(value, float) and (key.endswith("_score") or key.endswith("_trust")):
            event_dict[key] = round(value, 4)
    return event_dict


def configure_structlog(level: str | None = None, fmt: str | None = None) -> None:
    """
    Install the engine processors and the JSON or console renderer.

    Called once at import with the environment defaults; the CLI calls it again
    when EngineSettings override level or format.
    """
    level_value = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    render = (fmt or LOG_FORMAT).strip().lower()
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
        _round_scores,
    ]
    if render == "json":
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Module logger with the module name bound as logger.

        logger = get_logger(__name__)
        logger.info("cascade_applied", links=3, wallets_affected=2, increment=0.15)

    renders as {"event_type": "cascade_applied", "links": 3, "wallets_affected": 2,
    "increment": 0.15, "logger": "shadowledger.analysis_engine.cascade", ...}.
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_entity(entity_id: str) -> structlog.BoundLogger:
    """Engine logger carrying entity_id, for events about one scored entity."""
    return get_logger("shadowledger").bind(entity_id=entity_id)
