"""Structured logging configuration for the gamebook companion.

Uses structlog for context-rich logging. Unless told otherwise,
``configure_logging`` takes its level from the settings and renders JSON
outside debug mode, colored console lines in debug mode.

Example:
    >>> from gamebook_companion.core.logging import configure_logging, get_logger
    >>> configure_logging()
    >>> logger = get_logger(__name__)
    >>> logger.info("Combat round resolved", round_number=3, hit=True)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from gamebook_companion.core.config import get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


APP_NAME = "gamebook_companion"


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every entry with the application name."""
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def _renderer(json_format: bool) -> list[Processor]:
    if json_format:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(
    *,
    level: str | None = None,
    json_format: bool | None = None,
    log_file: str | Path | None = None,
) -> None:
    """Configure application-wide logging.

    Args:
        level: Logging level name. Defaults to ``Settings.log_level``.
        json_format: Render JSON lines. Defaults to True unless
            ``Settings.debug`` is set.
        log_file: Append structured entries to this file instead of stdout.
    """
    settings = get_settings()
    level = level or settings.log_level
    if json_format is None:
        json_format = settings.is_production
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    stream = Path(log_file).open("a", encoding="utf-8") if log_file else sys.stdout

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            add_app_context,
            structlog.processors.StackInfoRenderer(),
            *_renderer(json_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    # sqlite3 and other stdlib users
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=numeric_level,
        stream=sys.stderr,
        force=True,
    )
    get_logger(__name__).info(
        "Logging configured",
        app_name=settings.app_name,
        app_version=settings.app_version,
        level=level.upper(),
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically named after the calling module."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach key/value pairs to every later entry on this context.

    Example:
        >>> bind_context(character_id="3f2c...", book=2)
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
