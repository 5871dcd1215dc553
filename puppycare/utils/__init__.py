"""Utility modules for logging and date arithmetic."""

from puppycare.utils.dates import at_time, minutes_between, resolve_now, same_day
from puppycare.utils.logging import configure_logging, evaluation_context, get_logger

__all__ = [
    "at_time",
    "configure_logging",
    "evaluation_context",
    "get_logger",
    "minutes_between",
    "resolve_now",
    "same_day",
]
