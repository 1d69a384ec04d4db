"""
Logging setup for sunlark.

Everything logs under the "sunlark" namespace. configure_logging() is safe
to call more than once; it never stacks handlers.
"""

from __future__ import annotations

import logging
import sys

from sunlark import config

_ROOT_NAME = "sunlark"


class _SunlarkHandler(logging.StreamHandler):
    """Marker subclass so configure_logging() can find its own handler."""
    pass


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Attach a stderr handler to the "sunlark" logger and set its level.

    Args:
        level: DEBUG, INFO, WARNING, ... Defaults to SUNLARK_LOG_LEVEL.
    """
    level_name = (level or config.LOG_LEVEL).upper()
    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(getattr(logging, level_name, logging.WARNING))

    if not any(isinstance(h, _SunlarkHandler) for h in root.handlers):
        handler = _SunlarkHandler(sys.stderr)
        handler.setFormatter(_build_formatter())
        root.addHandler(handler)
    return root


def get_logger(name: str = _ROOT_NAME) -> logging.Logger:
    """Return a logger inside the sunlark namespace."""
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + "."):
        name = f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)
