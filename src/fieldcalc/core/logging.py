"""Structured logging for fieldcalc.

Reducers and the display resolver log through structlog. Level and format
come from ``FIELDCALC_LOG_LEVEL`` and ``FIELDCALC_LOG_FORMAT`` unless
``configure_logging`` is called with explicit values.

Usage:
    from fieldcalc.core.logging import get_logger, log_context

    logger = get_logger(__name__)
    logger.debug("reducer_dispatch", field_index=1, reducers=["mean"])

    with log_context(panel="cpu", dashboard="hosts"):
        logger.info("field_display_resolved", values=4)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, cast

import structlog
from structlog.typing import FilteringBoundLogger

_scoped_fields: ContextVar[dict[str, Any]] = ContextVar("fieldcalc_log_fields", default={})


def _add_scoped_fields(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Processor merging the fields bound by ``log_context``."""
    for key, value in _scoped_fields.get().items():
        event_dict.setdefault(key, value)
    return event_dict


def configure_logging(
    log_level: str | None = None,
    log_format: str | None = None,
    color: bool = True,
) -> None:
    """Configure structlog and route stdlib logging to stderr.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR (settings when None)
        log_format: "console" or "json" (settings when None)
        color: Colored console output
    """
    if log_level is None or log_format is None:
        from fieldcalc.core.config import get_settings

        settings = get_settings()
        log_level = log_level or settings.log_level
        log_format = log_format or settings.log_format

    level = getattr(logging, log_level.upper())

    processors: list[structlog.types.Processor] = [
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_scoped_fields,
        structlog.processors.add_log_level,
    ]
    if log_format == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=color))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, stream=sys.stderr, force=True)


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Get a structured logger, typically with ``__name__``."""
    return cast(FilteringBoundLogger, structlog.get_logger(name))


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Add fields to every log event emitted inside the block.

    Nested blocks see the outer fields too; inner values win.
    """
    token = _scoped_fields.set({**_scoped_fields.get(), **fields})
    try:
        yield
    finally:
        _scoped_fields.reset(token)


configure_logging()
