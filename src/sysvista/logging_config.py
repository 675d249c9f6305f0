"""structlog configuration for the sysvista CLI."""

from __future__ import annotations

import logging
import os
import sys

import structlog

from sysvista.config import ENV_DEBUG


def is_debug_enabled() -> bool:
    """Return True when SYSVISTA_DEBUG is set to a truthy value."""
    return os.environ.get(ENV_DEBUG, "").lower() in ("1", "true", "yes")


def configure_logging(level: int | None = None) -> None:
    """Configure structlog to render to stderr.

    Defaults to WARNING, or DEBUG when SYSVISTA_DEBUG is set.
    """
    if level is None:
        level = logging.DEBUG if is_debug_enabled() else logging.WARNING

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
