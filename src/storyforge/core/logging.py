"""Structured logging for the StoryForge engines.

Engine modules log through structlog. Every entry is tagged with the engine
that emitted it (``progression`` or ``combat``), and combat resolution binds
the encounter id for the duration of an action, so a host can follow one
encounter through a busy log.

Logging is never configured on import. Hosts call ``configure_logging()``
once; without it structlog's defaults apply.

Example:
    >>> from storyforge.core.logging import get_logger, log_context
    >>> logger = get_logger(__name__)
    >>> with log_context(combat_id="c-1"):
    ...     logger.info("Turn advanced", round=2)
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


_PACKAGE = "storyforge"
_LOGGER_NAME_KEY = "logger_name"
_STDLIB_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# =============================================================================
# Processors
# =============================================================================


def add_engine_name(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Replace the module name with the engine it belongs to.

    ``storyforge.combat.engine`` becomes ``engine="combat"``; names outside
    the package are left as ``logger``.

    Args:
        logger: The wrapped logger instance.
        method_name: Name of the logging method called.
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with an ``engine`` or ``logger`` key.
    """
    name = event_dict.pop(_LOGGER_NAME_KEY, None)
    if not name:
        return event_dict

    package, _, rest = name.partition(".")
    if package == _PACKAGE and rest:
        event_dict["engine"] = rest.split(".", 1)[0]
    else:
        event_dict["logger"] = name
    return event_dict


# =============================================================================
# Configuration
# =============================================================================


def configure_logging(
    *,
    level: str | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: Logging level name; defaults to ``STORYFORGE_LOG_LEVEL``, or
            DEBUG when ``STORYFORGE_DEBUG`` is set.
        json_format: JSON lines instead of console output; defaults to
            ``STORYFORGE_LOG_JSON``.
        log_file: Optional file that also receives standard library records.

    Example:
        >>> configure_logging(level="DEBUG", json_format=False)
    """
    if level is None or json_format is None:
        from storyforge.core.config import get_settings

        settings = get_settings()
        if level is None:
            level = "DEBUG" if settings.debug else settings.log_level
        json_format = settings.log_json if json_format is None else json_format

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_engine_name,
        structlog.processors.StackInfoRenderer(),
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format=_STDLIB_FORMAT,
        level=numeric_level,
        stream=sys.stdout,
        force=True,
    )
    if log_file:
        handler = logging.FileHandler(log_file)
        handler.setLevel(numeric_level)
        handler.setFormatter(logging.Formatter(_STDLIB_FORMAT))
        logging.getLogger().addHandler(handler)


# =============================================================================
# Loggers and Context
# =============================================================================


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger whose entries carry the module they came from.

    Args:
        name: Module name, normally ``__name__``.

    Returns:
        A lazily configured structlog logger.
    """
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name, **{_LOGGER_NAME_KEY: name})


def bind_context(**kwargs: Any) -> None:
    """Bind values into every subsequent entry on this thread or task.

    Example:
        >>> bind_context(session_id="s-42")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind values for the duration of a block, restoring previous ones after."""
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


__all__ = [
    "add_engine_name",
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "log_context",
]
