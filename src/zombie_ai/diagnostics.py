"""Logging setup for the simulation core."""

from __future__ import annotations

import sys
from typing import Any

from loguru import logger

_LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <7}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO", *, sink: Any = None) -> int:
    """Replace loguru's default handler with a single sink at *level*.

    Returns the handler id so callers (tests, embedding engines) can remove it.
    """
    logger.remove()
    return logger.add(
        sys.stderr if sink is None else sink,
        level=str(level).upper(),
        format=_LOG_FORMAT,
    )


def configure_logging_from_config(config: dict[str, Any]) -> int:
    debug = config.get("debug", {})
    return configure_logging(debug.get("log_level", "INFO"))


__all__ = ["configure_logging", "configure_logging_from_config"]
