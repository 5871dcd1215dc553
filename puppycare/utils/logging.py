"""
Structured logging for the care engine using structlog.

Engine modules log snake_case debug events through get_logger(__name__).
An application embedding the engine calls configure_logging() once at
startup; until then structlog's defaults apply. evaluation_context() binds
the evaluation clock so every event logged while one computation runs
carries the same `evaluated_at`.
"""

import logging
import sys
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, Optional

import structlog
from structlog.types import EventDict, Processor

from puppycare.config import Settings, get_settings

ENGINE_LOGGER_PREFIX = "puppycare.engine."


def add_component(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag events from engine modules with the short module name."""
    name = event_dict.get("logger")
    if isinstance(name, str) and name.startswith(ENGINE_LOGGER_PREFIX):
        event_dict["component"] = name[len(ENGINE_LOGGER_PREFIX):]
    return event_dict


def add_severity(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add severity level for structured logging."""
    event_dict["severity"] = method_name.upper()
    return event_dict


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Route structlog through the stdlib root logger.

    JSON lines unless dev_mode or log_format=console asks for the console
    renderer.
    """
    settings = settings or get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    if settings.log_format == "json" and not settings.dev_mode:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            add_component,
            add_severity,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.BoundLogger:
    """Logger named after the calling module (pass __name__)."""
    return structlog.get_logger(name)


@contextmanager
def evaluation_context(now: datetime, **context: Any) -> Iterator[None]:
    """
    Bind the evaluation time (and any extra fields) for the duration of a
    computation. Nested contexts restore the outer values on exit.
    """
    with structlog.contextvars.bound_contextvars(evaluated_at=now.isoformat(), **context):
        yield
