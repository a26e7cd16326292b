"""
Device DTOs - Application Layer

This module defines the request and response shapes of the device API.
Field checks are plain functions so the same rules apply to every request
type; pydantic validators call them at the request boundary.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devices_api.domain.entities.device import (
    BRAND_MAX_LENGTH,
    NAME_MAX_LENGTH,
    DeviceState,
)
from devices_api.domain.entities.errors import InvalidDeviceStateError

NAME_REQUIRED = "Device name is required"
NAME_LENGTH = f"Device name must be between 1 and {NAME_MAX_LENGTH} characters"
BRAND_REQUIRED = "Device brand is required"
BRAND_LENGTH = f"Device brand must be between 1 and {BRAND_MAX_LENGTH} characters"
STATE_REQUIRED = "Device state is required"

# Messages used when a required field is missing from the payload altogether
REQUIRED_MESSAGES: Dict[str, str] = {
    "name": NAME_REQUIRED,
    "brand": BRAND_REQUIRED,
    "state": STATE_REQUIRED,
}


def check_name(value: Optional[str]) -> str:
    """Validate a device name: not blank, 1 to 100 characters."""
    if value is None or not value.strip():
        raise ValueError(NAME_REQUIRED)
    if len(value) > NAME_MAX_LENGTH:
        raise ValueError(NAME_LENGTH)
    return value


def check_brand(value: Optional[str]) -> str:
    """Validate a device brand: not blank, 1 to 50 characters."""
    if value is None or not value.strip():
        raise ValueError(BRAND_REQUIRED)
    if len(value) > BRAND_MAX_LENGTH:
        raise ValueError(BRAND_LENGTH)
    return value


def parse_state(value: Any) -> Optional[DeviceState]:
    """Parse a state token from a request body, keeping ``None`` as is."""
    if value is None:
        return None
    try:
        return DeviceState.from_value(value)
    except InvalidDeviceStateError as e:
        raise ValueError(e.message) from e


class DeviceCreateDTO(BaseModel):
    """DTO for creating a new device."""

    name: str = Field(..., description="Name of the device", examples=["iPhone 15 Pro"])
    brand: str = Field(..., description="Brand of the device", examples=["Apple"])
    state: Optional[DeviceState] = Field(
        None, description="Initial state, defaults to 'available'"
    )

    @field_validator("name")
    @classmethod
    def _check_name(cls, v):
        return check_name(v)

    @field_validator("brand")
    @classmethod
    def _check_brand(cls, v):
        return check_brand(v)

    @field_validator("state", mode="before")
    @classmethod
    def _parse_state(cls, v):
        return parse_state(v)

    model_config = {
        "json_schema_extra": {
            "example": {"name": "iPhone 15 Pro", "brand": "Apple", "state": "available"}
        }
    }


class DeviceUpdateDTO(BaseModel):
    """DTO for fully replacing the mutable fields of a device (PUT)."""

    name: str = Field(..., description="Name of the device")
    brand: str = Field(..., description="Brand of the device")
    state: DeviceState = Field(..., description="State of the device")
    version: Optional[int] = Field(
        None, ge=0, description="Version the client last read, for optimistic locking"
    )

    @field_validator("name")
    @classmethod
    def _check_name(cls, v):
        return check_name(v)

    @field_validator("brand")
    @classmethod
    def _check_brand(cls, v):
        return check_brand(v)

    @field_validator("state", mode="before")
    @classmethod
    def _parse_state(cls, v):
        state = parse_state(v)
        if state is None:
            raise ValueError(STATE_REQUIRED)
        return state

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "iPhone 15 Pro Max",
                "brand": "Apple",
                "state": "in-use",
                "version": 1,
            }
        }
    }


class DevicePatchDTO(BaseModel):
    """
    DTO for partially updating a device (PATCH).

    Only the fields present in the payload are applied. Presence is taken
    from ``model_fields_set``, so a field is present iff the client sent it.
    """

    name: Optional[str] = Field(None, description="New name of the device")
    brand: Optional[str] = Field(None, description="New brand of the device")
    state: Optional[DeviceState] = Field(None, description="New state of the device")
    version: Optional[int] = Field(
        None, ge=0, description="Version the client last read, for optimistic locking"
    )

    # Validators only run on supplied values, so an explicit null lands here.
    @field_validator("name")
    @classmethod
    def _check_name(cls, v):
        if v is None:
            raise ValueError("Device name must not be null")
        if len(v) < 1 or len(v) > NAME_MAX_LENGTH:
            raise ValueError(NAME_LENGTH)
        return v

    @field_validator("brand")
    @classmethod
    def _check_brand(cls, v):
        if v is None:
            raise ValueError("Device brand must not be null")
        if len(v) < 1 or len(v) > BRAND_MAX_LENGTH:
            raise ValueError(BRAND_LENGTH)
        return v

    @field_validator("state", mode="before")
    @classmethod
    def _parse_state(cls, v):
        state = parse_state(v)
        if state is None:
            raise ValueError("Device state must not be null")
        return state

    def has_name(self) -> bool:
        return "name" in self.model_fields_set

    def has_brand(self) -> bool:
        return "brand" in self.model_fields_set

    def has_state(self) -> bool:
        return "state" in self.model_fields_set

    def has_version(self) -> bool:
        return "version" in self.model_fields_set and self.version is not None

    model_config = {
        "json_schema_extra": {"example": {"state": "inactive", "version": 2}}
    }


class DeviceResponseDTO(BaseModel):
    """DTO for device responses."""

    id: int = Field(description="Identifier assigned on creation")
    name: str = Field(description="Name of the device")
    brand: str = Field(description="Brand of the device")
    state: DeviceState = Field(description="Current state of the device")
    creation_time: datetime = Field(
        alias="creationTime", description="When the device was first persisted"
    )
    version: int = Field(description="Optimistic locking version")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "iPhone 15 Pro",
                "brand": "Apple",
                "state": "available",
                "creationTime": "2024-09-09T12:00:00Z",
                "version": 1,
            }
        },
    )


class DeviceStatisticsDTO(BaseModel):
    """DTO for device counts per state."""

    total: int = Field(description="Number of devices")
    by_state: Dict[DeviceState, int] = Field(
        alias="byState", description="Number of devices in each state"
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "total": 3,
                "byState": {"available": 1, "in-use": 1, "inactive": 1},
            }
        },
    )
