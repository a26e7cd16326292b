"""
Repositories Package - Infrastructure Layer

This package contains concrete implementations of the repository
interfaces defined in the domain layer.
"""

from .device_repository import DeviceRepository

__all__ = ["DeviceRepository"]
