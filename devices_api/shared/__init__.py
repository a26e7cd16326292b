"""
Shared Layer

Enums, formatting constants and the structlog setup used by every other
layer. Nothing here imports from the domain or the outer layers.
"""

from .consts import ERROR_TIMESTAMP_FORMAT, EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "ERROR_TIMESTAMP_FORMAT",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
