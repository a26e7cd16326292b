"""
Device Mapper - Application Layer

Pure functions translating between the Device entity and the device DTOs.
None of them touch persistence; the update helpers mutate the entity they
are given and nothing else.
"""

from typing import Dict, Iterable, List

from devices_api.application.dtos.device_dto import (
    DeviceCreateDTO,
    DevicePatchDTO,
    DeviceResponseDTO,
    DeviceStatisticsDTO,
    DeviceUpdateDTO,
)
from devices_api.domain.entities.device import Device, DeviceState


def to_response(device: Device) -> DeviceResponseDTO:
    """Convert a persisted device into its response DTO."""
    return DeviceResponseDTO(
        id=device.id,
        name=device.name,
        brand=device.brand,
        state=device.state,
        creation_time=device.creation_time,
        version=device.version,
    )


def to_response_list(devices: Iterable[Device]) -> List[DeviceResponseDTO]:
    return [to_response(device) for device in devices]


def to_entity(request: DeviceCreateDTO) -> Device:
    """Build a new, not yet persisted device from a create request."""
    return Device(
        name=request.name,
        brand=request.brand,
        state=request.state if request.state is not None else DeviceState.AVAILABLE,
    )


def update_entity(device: Device, request: DeviceUpdateDTO) -> None:
    """Replace every mutable field of ``device`` with the request values."""
    device.name = request.name
    device.brand = request.brand
    device.state = request.state
    if request.version is not None:
        device.version = request.version


def patch_entity(device: Device, request: DevicePatchDTO) -> None:
    """Apply only the fields present in the patch request."""
    if request.has_name():
        device.name = request.name
    if request.has_brand():
        device.brand = request.brand
    if request.has_state():
        device.state = request.state
    if request.has_version():
        device.version = request.version


def to_statistics(counts: Dict[DeviceState, int]) -> DeviceStatisticsDTO:
    """Build the statistics DTO, reporting zero for states with no devices."""
    by_state = {state: counts.get(state, 0) for state in DeviceState}
    return DeviceStatisticsDTO(total=sum(by_state.values()), by_state=by_state)
