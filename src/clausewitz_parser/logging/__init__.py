"""
Logging package for ``clausewitz_parser``.

Modules call ``get_logger("<module>")``; the shared handlers are attached to
the ``clausewitz_parser`` base logger the first time a logger is requested.
"""

from .logger import BASE_LOGGER_NAME, LogSettings, active_loggers, get_logger

__all__ = [
    "BASE_LOGGER_NAME",
    "LogSettings",
    "active_loggers",
    "get_logger",
]
