"""structlog setup shared by the CLI and library consumers."""

from __future__ import annotations

import logging
import os
import sys

import structlog

from magicsniff.config import ENV_DEBUG, ENV_LOG_FORMAT, env_flag


def configure_logging(
    debug: bool | None = None,
    log_format: str | None = None,
) -> None:
    """Configure structlog to render to stderr.

    Args:
        debug: Enable debug output. None = read MAGICSNIFF_DEBUG.
        log_format: "console" or "json". None = read MAGICSNIFF_LOG_FORMAT.
    """
    if debug is None:
        debug = env_flag(ENV_DEBUG)
    if log_format is None:
        log_format = os.environ.get(ENV_LOG_FORMAT, "console")

    level = logging.DEBUG if debug else logging.WARNING

    renderer: structlog.typing.Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    """Get a logger namespaced under magicsniff."""
    return structlog.get_logger(f"magicsniff.{name}")
