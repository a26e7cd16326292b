from __future__ import annotations

import json

import pytest
from fastapi import Request, Response

from devices_api.application.dtos.device_dto import (
    DeviceCreateDTO,
    DevicePatchDTO,
    DeviceResponseDTO,
    DeviceUpdateDTO,
)
from devices_api.presentation.controllers.devices_controller import (
    create_device,
    delete_device,
    device_statistics,
    get_device,
    list_devices,
    list_devices_by_brand,
    list_devices_by_state,
    patch_device,
    update_device,
)


def _request(path: str) -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": path,
            "headers": [],
            "query_string": b"",
            "server": ("test", 80),
        }
    )


async def _create(device_service, **fields) -> DeviceResponseDTO:
    payload = DeviceCreateDTO(**{"name": "iPhone", "brand": "Apple", **fields})
    return await create_device(
        request=_request("/api/v1/devices"),
        payload=payload,
        device_service=device_service,
    )


@pytest.mark.asyncio
async def test_create_device_returns_dto(device_service) -> None:
    created = await _create(device_service)

    assert isinstance(created, DeviceResponseDTO)
    assert created.version == 1


@pytest.mark.asyncio
async def test_create_duplicate_returns_conflict(device_service) -> None:
    await _create(device_service)

    response = await _create(device_service, name="IPHONE")

    assert response.status_code == 409
    body = json.loads(response.body)
    assert body["code"] == "DUPLICATE_DEVICE"
    assert body["path"] == "/api/v1/devices"


@pytest.mark.asyncio
async def test_get_device_not_found(device_service) -> None:
    response = await get_device(
        request=_request("/api/v1/devices/7"), device_id=7, device_service=device_service
    )

    assert response.status_code == 404
    assert json.loads(response.body)["message"] == "Device not found with id: 7"


@pytest.mark.asyncio
async def test_list_endpoints(device_service) -> None:
    created = await _create(device_service, state="in-use")

    assert await list_devices(device_service=device_service) == [created]
    assert await list_devices_by_brand(brand="apple", device_service=device_service) == [
        created
    ]
    stats = await device_statistics(device_service=device_service)
    assert stats.total == 1


@pytest.mark.asyncio
async def test_list_by_state_parses_token(device_service) -> None:
    created = await _create(device_service, state="in-use")

    devices = await list_devices_by_state(
        request=_request("/api/v1/devices/state/IN-USE"),
        state="IN-USE",
        device_service=device_service,
    )

    assert devices == [created]


@pytest.mark.asyncio
async def test_list_by_state_rejects_unknown_token(device_service) -> None:
    response = await list_devices_by_state(
        request=_request("/api/v1/devices/state/unknown-token"),
        state="unknown-token",
        device_service=device_service,
    )

    body = json.loads(response.body)
    assert response.status_code == 400
    assert body["code"] == "INVALID_STATE"
    assert body["message"].endswith("Valid states are: available, in-use, inactive")


@pytest.mark.asyncio
async def test_update_in_use_device_conflicts(device_service) -> None:
    created = await _create(device_service, state="in-use")

    response = await update_device(
        request=_request(f"/api/v1/devices/{created.id}"),
        payload=DeviceUpdateDTO(name="Other", brand="Apple", state="in-use"),
        device_id=created.id,
        device_service=device_service,
    )

    assert response.status_code == 409
    assert json.loads(response.body)["code"] == "UPDATE_IN_USE_DEVICE"


@pytest.mark.asyncio
async def test_patch_device_applies_changes(device_service) -> None:
    created = await _create(device_service)

    patched = await patch_device(
        request=_request(f"/api/v1/devices/{created.id}"),
        payload=DevicePatchDTO.model_validate({"state": "inactive"}),
        device_id=created.id,
        device_service=device_service,
    )

    assert patched.state.value == "inactive"
    assert patched.version == 2


@pytest.mark.asyncio
async def test_delete_device(device_service) -> None:
    created = await _create(device_service)

    response = await delete_device(
        request=_request(f"/api/v1/devices/{created.id}"),
        device_id=created.id,
        device_service=device_service,
    )

    assert isinstance(response, Response)
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_delete_in_use_device_conflicts(device_service) -> None:
    created = await _create(device_service, state="in-use")

    response = await delete_device(
        request=_request(f"/api/v1/devices/{created.id}"),
        device_id=created.id,
        device_service=device_service,
    )

    assert response.status_code == 409
    assert json.loads(response.body)["code"] == "DELETE_IN_USE_DEVICE"
