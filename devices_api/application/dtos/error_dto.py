"""
Error DTOs - Application Layer

Payloads returned by the API when a request fails.
"""

from datetime import datetime, timezone
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from devices_api.shared.consts import ERROR_TIMESTAMP_FORMAT


def error_timestamp() -> str:
    """Current UTC time in the format used by error payloads."""
    return datetime.now(timezone.utc).strftime(ERROR_TIMESTAMP_FORMAT)


class ErrorResponseDTO(BaseModel):
    """DTO for error responses."""

    message: str = Field(description="Human readable error message")
    code: str = Field(description="Machine readable error code")
    timestamp: str = Field(
        default_factory=error_timestamp, description="When the error occurred (UTC)"
    )
    path: str = Field(description="Request path that produced the error")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "message": "Cannot delete device that is currently in use",
                "code": "DELETE_IN_USE_DEVICE",
                "timestamp": "2024-09-09T12:00:00Z",
                "path": "/api/v1/devices/1",
            }
        },
    )


class ValidationErrorResponseDTO(ErrorResponseDTO):
    """DTO for validation failures, with one message per offending field."""

    field_errors: Dict[str, str] = Field(
        default_factory=dict,
        alias="fieldErrors",
        description="Validation message per field",
    )
    global_errors: List[str] = Field(
        default_factory=list,
        alias="globalErrors",
        description="Validation messages not tied to a field",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "message": "Validation failed",
                "code": "VALIDATION_ERROR",
                "timestamp": "2024-09-09T12:00:00Z",
                "path": "/api/v1/devices",
                "fieldErrors": {"name": "Device name is required"},
                "globalErrors": [],
            }
        },
    )
