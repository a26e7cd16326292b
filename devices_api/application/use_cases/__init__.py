"""
Use Cases Package - Application Layer

Use cases backing the system endpoints. Device operations live in the
DeviceService (application.services).
"""

from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase

__all__ = ["GetHealthStatusUseCase", "GetApplicationInfoUseCase"]
