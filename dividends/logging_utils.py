"""Logging configuration helpers for the dividend forecaster."""
from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "DIVIDENDS_LOG_LEVEL"


def _coerce_level(level: str | int) -> int:
    """Translate a user provided level into a numeric log level."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Configure the root logger for console output.

    The level defaults to the ``DIVIDENDS_LOG_LEVEL`` environment variable and
    falls back to INFO when neither is usable. ``force`` is handed to
    :func:`logging.basicConfig` so an already configured root logger (as under
    Streamlit) can be replaced.
    """

    candidate = level if level is not None else os.getenv(LOG_LEVEL_ENV, "INFO")
    try:
        resolved_level = _coerce_level(candidate)
    except ValueError:
        resolved_level = logging.INFO

    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        root_logger.setLevel(resolved_level)
        return

    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        force=force,
    )


__all__ = ["configure_logging"]
