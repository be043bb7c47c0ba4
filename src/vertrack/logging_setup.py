"""Loguru configuration for the vertrack CLI."""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"


def configure_logging(level: str = "WARNING") -> None:
    """Route diagnostics to stderr at ``level``, replacing any existing sinks.

    User-facing output (summaries, prompts, error messages) is printed
    directly and does not go through the logger.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
