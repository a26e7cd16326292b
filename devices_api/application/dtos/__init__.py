"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .device_dto import (
    DeviceCreateDTO,
    DevicePatchDTO,
    DeviceResponseDTO,
    DeviceStatisticsDTO,
    DeviceUpdateDTO,
)
from .error_dto import ErrorResponseDTO, ValidationErrorResponseDTO
from .health_dto import ApplicationInfoDTO, DependencyStatusDTO, SystemHealthDTO

__all__ = [
    "DeviceCreateDTO",
    "DeviceUpdateDTO",
    "DevicePatchDTO",
    "DeviceResponseDTO",
    "DeviceStatisticsDTO",
    "ErrorResponseDTO",
    "ValidationErrorResponseDTO",
    "SystemHealthDTO",
    "DependencyStatusDTO",
    "ApplicationInfoDTO",
]
