"""
Environment-driven configuration for sunlark.

Values are read once at import time. Thread() accepts per-instance
overrides for the ones that affect evaluation.

    SUNLARK_MAP_ERRORS      raise | stop   (default: raise)
    SUNLARK_MAX_CALL_DEPTH  int            (default: 1000)
    SUNLARK_LOG_LEVEL       logging level  (default: WARNING)
"""

from __future__ import annotations

import os
from enum import Enum


class MapErrorPolicy(Enum):
    """What map does when its callable fails."""
    RAISE = "raise"   # surface EvalError from next()
    STOP = "stop"     # log a warning and report end-of-sequence


def _policy_from_env(raw: str) -> MapErrorPolicy:
    try:
        return MapErrorPolicy(raw.strip().lower())
    except ValueError:
        raise ValueError(
            f"SUNLARK_MAP_ERRORS must be one of "
            f"{[p.value for p in MapErrorPolicy]}, got {raw!r}"
        ) from None


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


MAP_ERROR_POLICY = _policy_from_env(os.environ.get("SUNLARK_MAP_ERRORS", "raise"))
MAX_CALL_DEPTH = _int_from_env("SUNLARK_MAX_CALL_DEPTH", 1000)
LOG_LEVEL = os.environ.get("SUNLARK_LOG_LEVEL", "WARNING").upper()
