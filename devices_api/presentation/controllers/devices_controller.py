"""
Devices Router - Presentation Layer

This module defines the FastAPI router for the device endpoints. Every
handler delegates to the DeviceService and renders its ServiceResult:
the value as the response body, or the error as an error payload.
"""

from typing import List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Path, Request, Response, status

from devices_api.application.dtos.device_dto import (
    DeviceCreateDTO,
    DevicePatchDTO,
    DeviceResponseDTO,
    DeviceStatisticsDTO,
    DeviceUpdateDTO,
)
from devices_api.application.dtos.error_dto import (
    ErrorResponseDTO,
    ValidationErrorResponseDTO,
)
from devices_api.application.services.device_service import DeviceService
from devices_api.domain.entities.device import DeviceState
from devices_api.domain.entities.errors import InvalidDeviceStateError
from devices_api.presentation.errors import error_response
from devices_api.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/devices", tags=["Devices"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponseDTO}}
_INVALID = {status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponseDTO}}
_CONFLICT = {status.HTTP_409_CONFLICT: {"model": ErrorResponseDTO}}


@router.post(
    "",
    response_model=DeviceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={**_INVALID, **_CONFLICT},
)
@inject
async def create_device(
    request: Request,
    payload: DeviceCreateDTO,
    device_service: DeviceService = Depends(Provide["device_service"]),
):
    """
    Create a new device.

    The state defaults to 'available'. A device with the same name and brand,
    compared ignoring case, is rejected with 409 DUPLICATE_DEVICE.
    """
    result = await device_service.create(payload)
    if not result.ok:
        return error_response(request, result.error)
    return result.value


@router.get("", response_model=List[DeviceResponseDTO])
@inject
async def list_devices(
    device_service: DeviceService = Depends(Provide["device_service"]),
):
    """List all devices, newest first."""
    result = await device_service.list_all()
    return result.unwrap()


@router.get("/stats", response_model=DeviceStatisticsDTO)
@inject
async def device_statistics(
    device_service: DeviceService = Depends(Provide["device_service"]),
):
    """Count devices in each state."""
    result = await device_service.statistics()
    return result.unwrap()


@router.get("/brand/{brand}", response_model=List[DeviceResponseDTO])
@inject
async def list_devices_by_brand(
    brand: str = Path(..., description="Brand to match, ignoring case"),
    device_service: DeviceService = Depends(Provide["device_service"]),
):
    """List the devices of a brand, newest first."""
    result = await device_service.list_by_brand(brand)
    return result.unwrap()


@router.get(
    "/state/{state}",
    response_model=List[DeviceResponseDTO],
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponseDTO}},
)
@inject
async def list_devices_by_state(
    request: Request,
    state: str = Path(..., description="One of: available, in-use, inactive"),
    device_service: DeviceService = Depends(Provide["device_service"]),
):
    """List the devices in a state, newest first."""
    try:
        device_state = DeviceState.from_value(state)
    except InvalidDeviceStateError as e:
        return error_response(request, e)

    result = await device_service.list_by_state(device_state)
    return result.unwrap()


@router.get("/{device_id}", response_model=DeviceResponseDTO, responses=_NOT_FOUND)
@inject
async def get_device(
    request: Request,
    device_id: int = Path(..., description="Identifier of the device"),
    device_service: DeviceService = Depends(Provide["device_service"]),
):
    """Get a device by its ID."""
    result = await device_service.get(device_id)
    if not result.ok:
        return error_response(request, result.error)
    return result.value


@router.put(
    "/{device_id}",
    response_model=DeviceResponseDTO,
    responses={**_INVALID, **_NOT_FOUND, **_CONFLICT},
)
@inject
async def update_device(
    request: Request,
    payload: DeviceUpdateDTO,
    device_id: int = Path(..., description="Identifier of the device"),
    device_service: DeviceService = Depends(Provide["device_service"]),
):
    """
    Replace the name, brand and state of a device.

    Name and brand of a device in use cannot change (409
    UPDATE_IN_USE_DEVICE). Sending the version last read enables optimistic
    locking (409 OPTIMISTIC_LOCK_FAILURE on mismatch).
    """
    result = await device_service.update(device_id, payload)
    if not result.ok:
        return error_response(request, result.error)
    return result.value


@router.patch(
    "/{device_id}",
    response_model=DeviceResponseDTO,
    responses={**_INVALID, **_NOT_FOUND, **_CONFLICT},
)
@inject
async def patch_device(
    request: Request,
    payload: DevicePatchDTO,
    device_id: int = Path(..., description="Identifier of the device"),
    device_service: DeviceService = Depends(Provide["device_service"]),
):
    """Update only the fields present in the request body."""
    result = await device_service.patch(device_id, payload)
    if not result.ok:
        return error_response(request, result.error)
    return result.value


@router.delete(
    "/{device_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_CONFLICT},
)
@inject
async def delete_device(
    request: Request,
    device_id: int = Path(..., description="Identifier of the device"),
    device_service: DeviceService = Depends(Provide["device_service"]),
):
    """Delete a device. Devices in use cannot be deleted."""
    result = await device_service.delete(device_id)
    if not result.ok:
        return error_response(request, result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
