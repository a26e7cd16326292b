"""
HTTP Error Translation - Presentation Layer

Maps domain errors to status codes and error payloads, and registers the
FastAPI exception handlers that keep every failure in the same JSON shape.
"""

from typing import Any, Dict, List, Sequence, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from devices_api.application.dtos.device_dto import REQUIRED_MESSAGES
from devices_api.application.dtos.error_dto import (
    ErrorResponseDTO,
    ValidationErrorResponseDTO,
)
from devices_api.domain.entities.errors import (
    BusinessRuleViolationError,
    ConcurrentModificationError,
    DeviceNotFoundError,
    DeviceValidationError,
    DomainError,
    DuplicateDeviceError,
    InvalidDeviceStateError,
)
from devices_api.shared import get_logger

logger = get_logger(__name__)

INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
INTERNAL_SERVER_ERROR_MESSAGE = "An unexpected error occurred"
MALFORMED_BODY_MESSAGE = "Malformed JSON request body"

_STATUS_CODES: Sequence[Tuple[type, int]] = (
    (DeviceNotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateDeviceError, status.HTTP_409_CONFLICT),
    (BusinessRuleViolationError, status.HTTP_409_CONFLICT),
    (ConcurrentModificationError, status.HTTP_409_CONFLICT),
    (InvalidDeviceStateError, status.HTTP_400_BAD_REQUEST),
    (DeviceValidationError, status.HTTP_400_BAD_REQUEST),
)

# Leading loc segments naming where a parameter came from, not the field
_LOCATIONS = ("body", "path", "query", "header", "cookie")


def status_code_for(error: DomainError) -> int:
    """HTTP status code for a domain error, 500 for unclassified ones."""
    for error_type, status_code in _STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(request: Request, error: DomainError) -> JSONResponse:
    """Render a domain error as a JSON error payload for ``request``."""
    status_code = status_code_for(error)
    path = request.url.path

    if isinstance(error, DeviceValidationError):
        payload: ErrorResponseDTO = ValidationErrorResponseDTO(
            message=error.message,
            code=error.code,
            path=path,
            field_errors=error.field_errors,
            global_errors=error.global_errors,
        )
    else:
        payload = ErrorResponseDTO(message=error.message, code=error.code, path=path)

    logger.info(
        "http.request.rejected", path=path, code=error.code, status_code=status_code
    )
    return JSONResponse(
        status_code=status_code, content=payload.model_dump(by_alias=True)
    )


def _clean_message(message: str) -> str:
    # pydantic prefixes messages raised from validators
    for prefix in ("Value error, ", "Assertion failed, "):
        if message.startswith(prefix):
            return message[len(prefix) :]
    return message


def field_errors_from(
    errors: Sequence[Dict[str, Any]],
) -> Tuple[Dict[str, str], List[str]]:
    """
    Convert pydantic error entries into (field -> message, global messages).

    Missing or null required fields get the same "is required" message as a
    blank value. The first message reported for a field wins.
    """
    field_errors: Dict[str, str] = {}
    global_errors: List[str] = []

    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _LOCATIONS:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc)
        error_type = error.get("type", "")

        if error_type == "json_invalid":
            global_errors.append(MALFORMED_BODY_MESSAGE)
            continue

        if not field:
            message = (
                "Request body is required"
                if error_type == "missing"
                else _clean_message(error.get("msg", "Invalid request"))
            )
            global_errors.append(message)
            continue

        if error_type == "missing" or (
            error_type != "value_error" and error.get("input", "") is None
        ):
            message = REQUIRED_MESSAGES.get(field, f"{field} is required")
        else:
            message = _clean_message(error.get("msg", "Invalid value"))

        field_errors.setdefault(field, message)

    return field_errors, global_errors


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    field_errors, global_errors = field_errors_from(exc.errors())
    logger.warning(
        "http.request.validation_failed",
        path=request.url.path,
        fields=sorted(field_errors),
    )
    return error_response(request, DeviceValidationError(field_errors, global_errors))


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return error_response(request, exc)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Hide unexpected failures behind a generic message; the detail is logged."""
    logger.error(
        "http.request.unhandled_error",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=exc,
    )
    payload = ErrorResponseDTO(
        message=INTERNAL_SERVER_ERROR_MESSAGE,
        code=INTERNAL_SERVER_ERROR,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=payload.model_dump(by_alias=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
