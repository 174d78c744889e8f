"""Structured logging configuration for gitquery.

Decoders log through structlog so skipped lines and decode summaries can be
inspected without changing return values:

- Pretty console output by default
- JSON output when ``GITQUERY_LOG_FORMAT=json``
- Level taken from ``GITQUERY_LOG_LEVEL`` (default ``WARNING``, so the
  library stays quiet inside host applications)

Usage:
    from gitquery.logging import configure_logging, get_logger

    configure_logging(level="DEBUG")

    log = get_logger(__name__)
    log.debug("status_line_skipped", line="XX")
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import Processor

__all__ = [
    "get_logger",
    "configure_logging",
    "bind_context",
    "clear_context",
]

# Environment variable for log format
LOG_FORMAT_ENV_VAR = "GITQUERY_LOG_FORMAT"

# Environment variable for log level
LOG_LEVEL_ENV_VAR = "GITQUERY_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"


def _resolve_level(level: int | str | None) -> int:
    """Turn an explicit level, the environment, or the default into an int."""
    if isinstance(level, int):
        return level
    name = level or os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)
    return getattr(logging, name.upper(), logging.WARNING)


def _is_json_output() -> bool:
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _shared_processors() -> list[Processor]:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(use_json: bool) -> Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(
    *,
    force_json: bool = False,
    level: int | str | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Safe to call repeatedly; each call replaces the previous handler.

    Args:
        force_json: Emit JSON regardless of ``GITQUERY_LOG_FORMAT``.
        level: Log level as an int or name. Falls back to ``GITQUERY_LOG_LEVEL``.

    Example:
        configure_logging()
        configure_logging(force_json=True, level="DEBUG")
    """
    use_json = force_json or _is_json_output()
    log_level = _resolve_level(level)

    exc_processor: Processor = (
        structlog.processors.dict_tracebacks
        if use_json
        else structlog.processors.format_exc_info
    )

    structlog.configure(
        processors=[
            *_shared_processors(),
            exc_processor,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(use_json),
            ],
            foreign_pre_chain=_shared_processors(),
        )
    )

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to ``name``.

    Args:
        name: Logger name, usually ``__name__``.

    Returns:
        A bound structlog logger.
    """
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log


def bind_context(**context: Any) -> None:
    """Bind key-value pairs that appear in every subsequent log event.

    Example:
        bind_context(repo="/srv/project")
        log.debug("log_parsed", commits=12)  # includes repo
    """
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    """Clear all context bound with :func:`bind_context`."""
    structlog.contextvars.clear_contextvars()
