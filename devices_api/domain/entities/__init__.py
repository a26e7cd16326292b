"""
Domain Entities Package

This package contains the device entity, its errors and the health
value objects.
"""

from .device import BRAND_MAX_LENGTH, NAME_MAX_LENGTH, Device, DeviceState
from .errors import (
    BusinessRule,
    BusinessRuleViolationError,
    ConcurrentModificationError,
    DeviceNotFoundError,
    DeviceValidationError,
    DomainError,
    DuplicateDeviceError,
    InvalidDeviceStateError,
)
from .health import ApplicationInfo, DependencyStatus, ServiceStatus, SystemHealth

__all__ = [
    "Device",
    "DeviceState",
    "NAME_MAX_LENGTH",
    "BRAND_MAX_LENGTH",
    "BusinessRule",
    "DomainError",
    "DeviceNotFoundError",
    "DuplicateDeviceError",
    "BusinessRuleViolationError",
    "InvalidDeviceStateError",
    "DeviceValidationError",
    "ConcurrentModificationError",
    "SystemHealth",
    "DependencyStatus",
    "ServiceStatus",
    "ApplicationInfo",
]
