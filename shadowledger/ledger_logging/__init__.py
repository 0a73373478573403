"""
Structured logging for ShadowLedger.

JSON logs with timestamp, entity_id, event_type and scoring fields.
Use get_logger() in all engine modules for aggregation-friendly output.
"""

from shadowledger.ledger_logging.logger import bind_entity, configure_structlog, get_logger

__all__ = ["bind_entity", "configure_structlog", "get_logger"]
