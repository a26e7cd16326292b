"""Application-level models that are neither DTOs nor domain entities."""

from .result import ServiceResult
from .system_info import SystemInfo

__all__ = ["ServiceResult", "SystemInfo"]
