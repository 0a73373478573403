"""
Core utilities: shared exceptions and cross-cutting concerns.
"""

from shadowledger.core.exceptions import ConfigError, ShadowLedgerError, SnapshotError

__all__ = ["ConfigError", "ShadowLedgerError", "SnapshotError"]
