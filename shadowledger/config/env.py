"""
Environment variable loading for ShadowLedger.

- Loads .env from the project root (or SHADOWLEDGER_ENV_FILE) when available.
- All engine options are read with the SHADOWLEDGER_ prefix, e.g.
  SHADOWLEDGER_OUT_DEGREE_THRESHOLD=40 or SHADOWLEDGER_CONCURRENCY=4.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is shadowledger/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

ENV_PREFIX = "SHADOWLEDGER_"


def load_shadowledger_env() -> None:
    """Load .env without overriding variables already set. Safe to call multiple times."""
    path = (os.getenv("SHADOWLEDGER_ENV_FILE") or "").strip() or str(_ENV_PATH)
    load_dotenv(path, override=False)


def env_name(option: str) -> str:
    """SHADOWLEDGER_ variable name for a config field name."""
    return ENV_PREFIX + option.upper()


def get_env_option(option: str) -> str | None:
    """Return the raw env value for an option, or None when unset or blank."""
    raw = (os.getenv(env_name(option)) or "").strip()
    return raw or None
