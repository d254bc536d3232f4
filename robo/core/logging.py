"""Structured logging foundation for the predictor.

Provides JSON logging (prod) or colored console (dev) via structlog.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import cast

import structlog


def _configure_structlog() -> None:
    """Configure structlog based on ROBO_ENV and ROBO_LOG_LEVEL."""
    env = os.environ.get("ROBO_ENV", "development")
    log_level_name = os.environ.get("ROBO_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(log_level_name)
    if not isinstance(level, int):
        level = logging.INFO

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if env == "production":
        renderer: structlog.typing.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


_CONFIGURED = False


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    """Get a named logger instance.

    Args:
        name: Logger name (typically module __name__).

    Returns:
        Configured structlog bound logger, filtered at ROBO_LOG_LEVEL.
    """
    global _CONFIGURED
    if not _CONFIGURED:
        _configure_structlog()
        _CONFIGURED = True

    return cast(structlog.typing.FilteringBoundLogger, structlog.get_logger(name))
