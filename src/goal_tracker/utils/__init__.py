"""Utility helpers for the Goal Tracker."""

from .dates import to_date, parse_optional_datetime
from .log_sanitizer import (
    LogSanitizationFilter,
    configure_logging,
    install_log_sanitizer,
    sanitize_string,
)

__all__ = [
    "to_date",
    "parse_optional_datetime",
    "LogSanitizationFilter",
    "configure_logging",
    "install_log_sanitizer",
    "sanitize_string",
]
