"""
Application-level exceptions.

Scoring itself never raises on well-formed data; these cover the edges where
input is structurally unusable (snapshot loading) or configuration overrides
cannot be interpreted.
"""

from __future__ import annotations


class ShadowLedgerError(Exception):
    """Base class for all ShadowLedger errors."""


class SnapshotError(ShadowLedgerError):
    """A snapshot document or record cannot be turned into engine input."""

    def __init__(self, message: str, *, record: object | None = None) -> None:
        super().__init__(message)
        self.record = record


class ConfigError(ShadowLedgerError):
    """A configuration override is unknown or not numeric."""

    def __init__(self, option: str, value: object) -> None:
        super().__init__(f"Invalid configuration value for {option!r}: {value!r}")
        self.option = option
        self.value = value
