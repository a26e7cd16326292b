"""
Domain Errors

This module defines the error kinds of the device domain. Each error carries
a machine-readable ``code`` that the presentation layer surfaces verbatim.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class BusinessRule(str, Enum):
    """Tags of the business rules a write can violate."""

    UPDATE_IN_USE_DEVICE = "UPDATE_IN_USE_DEVICE"
    DELETE_IN_USE_DEVICE = "DELETE_IN_USE_DEVICE"
    OPTIMISTIC_LOCK_FAILURE = "OPTIMISTIC_LOCK_FAILURE"


class DomainError(Exception):
    """Base class for domain errors."""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DeviceNotFoundError(DomainError):
    """Raised when a device cannot be found."""

    code = "DEVICE_NOT_FOUND"

    def __init__(self, device_id: int):
        self.device_id = device_id
        super().__init__(
            f"Device not found with id: {device_id}", {"device_id": device_id}
        )


class DuplicateDeviceError(DomainError):
    """Raised when a device with the same name and brand already exists."""

    code = "DUPLICATE_DEVICE"

    def __init__(self, name: str, brand: str):
        super().__init__(
            f"Device with name '{name}' and brand '{brand}' already exists",
            {"name": name, "brand": brand},
        )


class BusinessRuleViolationError(DomainError):
    """Raised when a write would break a state-dependent business rule."""

    def __init__(self, message: str, rule: BusinessRule, device_id: int):
        self.rule = rule
        self.device_id = device_id
        super().__init__(message, {"rule": rule.value, "device_id": device_id})

    @property
    def code(self) -> str:  # type: ignore[override]
        return self.rule.value

    @classmethod
    def cannot_update_in_use_device(cls, device_id: int) -> "BusinessRuleViolationError":
        return cls(
            "Cannot update name or brand of device that is currently in use",
            BusinessRule.UPDATE_IN_USE_DEVICE,
            device_id,
        )

    @classmethod
    def cannot_delete_in_use_device(cls, device_id: int) -> "BusinessRuleViolationError":
        return cls(
            "Cannot delete device that is currently in use",
            BusinessRule.DELETE_IN_USE_DEVICE,
            device_id,
        )

    @classmethod
    def optimistic_lock_failure(cls, device_id: int) -> "BusinessRuleViolationError":
        return cls(
            "Device was modified by another user. Please refresh and try again.",
            BusinessRule.OPTIMISTIC_LOCK_FAILURE,
            device_id,
        )


class InvalidDeviceStateError(DomainError):
    """Raised when a token does not name a device state."""

    code = "INVALID_STATE"

    def __init__(self, token: str, valid_tokens: List[str]):
        self.token = token
        self.valid_tokens = list(valid_tokens)
        super().__init__(
            f"Invalid device state: {token}. "
            f"Valid states are: {', '.join(self.valid_tokens)}",
            {"token": token, "valid_states": self.valid_tokens},
        )


class DeviceValidationError(DomainError):
    """Raised when request fields are missing, malformed or out of bounds."""

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        field_errors: Dict[str, str],
        global_errors: Optional[List[str]] = None,
    ):
        self.field_errors = dict(field_errors)
        self.global_errors = list(global_errors or [])
        super().__init__(
            "Validation failed",
            {"field_errors": self.field_errors, "global_errors": self.global_errors},
        )


class ConcurrentModificationError(DomainError):
    """Raised by a repository when the stored version differs from the expected one."""

    code = "OPTIMISTIC_LOCK_FAILURE"

    def __init__(
        self,
        device_id: int,
        expected_version: Optional[int],
        actual_version: Optional[int] = None,
    ):
        self.device_id = device_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Device {device_id} was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})",
            {
                "device_id": device_id,
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )
