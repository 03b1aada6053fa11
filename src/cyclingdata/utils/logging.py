"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any

import structlog

_SHARED_PROCESSORS: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
)


def _processors(json_output: bool) -> list[structlog.types.Processor]:
    """Shared processors followed by a JSON or console renderer."""
    if json_output:
        return [
            *_SHARED_PROCESSORS,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        *_SHARED_PROCESSORS,
        structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
    ]


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    """Logger factory resolving sys.stderr at call time (it may be swapped)."""
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """
    Route loader, fetcher and CLI diagnostics to stderr.

    Reports printed on stdout are never interleaved with log lines.

    Args:
        level: Log level name; unknown names fall back to WARNING.
        json_output: If True, render each event as a JSON object.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)

    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind key-value pairs to every log event emitted inside the block.

    Example:
        with log_context(file="workouts.json"):
            log.info("Validation passed")  # includes file=workouts.json
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
