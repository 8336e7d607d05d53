"""Utility modules."""

from .logger_setup import get_logger, LoggerManager

__all__ = [
    # Logging utilities
    "get_logger",
    "LoggerManager",
]
