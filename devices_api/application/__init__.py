"""
Application Layer Package

This package contains the device service, the mapper between entities and
DTOs, and the use cases behind the system endpoints. It orchestrates the
domain entities and the repository contract to serve API requests.
"""

# Re-export submodules
from devices_api.application import dtos, mappers, models, services, use_cases

__all__ = ["dtos", "mappers", "models", "services", "use_cases"]
