"""Structured logging for the Tunnel Fight simulator.

Log output happens at batch boundaries only (encounter loaded, batch
started, batch finished), never per battle. Entries from one batch share
the fields bound by ``batch_context``.

Example:
    >>> from tunnel_fight.core.logging import batch_context, get_logger
    >>> logger = get_logger(__name__)
    >>> with batch_context(seed=7, encounter="Goblin Ambush"):
    ...     logger.info("Simulation started", iterations=10000)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from tunnel_fight.core.config import Settings


APP_NAME = "tunnel_fight"


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag log entries with the application name."""
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def configure_logging(
    settings: Settings | None = None,
    *,
    level: str | None = None,
    json_format: bool | None = None,
) -> None:
    """Configure structlog and the stdlib loggers uvicorn writes to.

    Explicit keyword arguments win over the values in settings.

    Args:
        settings: Source of ``log_level`` and ``log_json``.
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render JSON lines instead of console output.
    """
    if level is None:
        level = settings.log_level if settings is not None else "INFO"
    if json_format is None:
        json_format = settings.log_json if settings is not None else False

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
    ]
    if json_format:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=numeric_level,
        stream=sys.stdout,
        force=True,
    )
    # One access line per simulate request is noise next to the batch logs
    logging.getLogger("uvicorn.access").setLevel(max(numeric_level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


@contextmanager
def batch_context(**fields: Any) -> Iterator[None]:
    """Bind fields to every log entry emitted inside the block.

    Fields bound by an enclosing block are restored on exit.

    Args:
        **fields: Key-value pairs such as ``seed`` or ``encounter``.
    """
    with structlog.contextvars.bound_contextvars(**fields):
        yield


__all__ = [
    "add_app_context",
    "configure_logging",
    "get_logger",
    "batch_context",
]
