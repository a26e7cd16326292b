"""Mappers between domain entities and DTOs."""

from . import device_mapper

__all__ = ["device_mapper"]
