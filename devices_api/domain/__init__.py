"""
Domain Layer Package

This package contains the core business rules of the devices API.
It defines the device entity, its errors and the repository contract
without dependencies on external frameworks or infrastructure concerns.
"""

# Re-export submodules
from devices_api.domain import entities, ports, repositories

__all__ = ["entities", "repositories", "ports"]
