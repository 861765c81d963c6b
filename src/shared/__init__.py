"""
Shared module - Cross-cutting concerns / Shared Layer

Constants, enums and logging helpers used across every layer. It must not
depend on infrastructure or frameworks beyond the logging library.
"""

from .consts import API_PREFIX, EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "API_PREFIX",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
