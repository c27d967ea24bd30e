"""
Structured logging for the recommendation engine using structlog.

Console output in development, JSON lines in production. Every engine
module logs through ``get_logger(__name__)`` with key/value context so a
single recommendation can be traced from comfort temperature to the
overrides that fired.

Usage:
    from core.logging import configure_logging, get_logger

    configure_logging(json_logs=False, log_level="DEBUG")

    logger = get_logger(__name__)
    logger.debug("comfort_computed", activity="running", comfort_c=11.0)
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import Processor

from config.settings import Settings


def configure_logging(
    json_logs: bool = False,
    log_level: str = "INFO",
    include_timestamp: bool = True,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        json_logs: Render JSON lines instead of the coloured console format.
        log_level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        include_timestamp: Prefix every event with an ISO timestamp.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        ))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    logging.getLogger().setLevel(level)


def configure_logging_from_settings(settings: Settings) -> None:
    """
    Configure logging from application settings.

    JSON lines when ``json_logs`` is set or the environment is
    production; ``debug`` forces the DEBUG level.
    """
    configure_logging(
        json_logs=settings.json_logs or settings.is_production,
        log_level="DEBUG" if settings.debug else settings.log_level,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, typically ``get_logger(__name__)``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """
    Bind key/values to every subsequent log event in the current context.

    Callers wrapping the engine (a UI action, a batch re-score) bind
    their own identifiers, e.g. ``bind_context(session_id="abc")``.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all bound context variables."""
    structlog.contextvars.clear_contextvars()


def unbind_context(*keys: str) -> None:
    """Drop specific context variables."""
    structlog.contextvars.unbind_contextvars(*keys)


class LoggerMixin:
    """
    Gives a class a ``logger`` property named after the class.

    Usage:
        class SafetyOverrideEngine(LoggerMixin):
            def apply(self, ...):
                self.logger.debug("override_fired", rule="darkness")
    """

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        return get_logger(self.__class__.__name__)
