from __future__ import annotations

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from devices_api.main.app import create_app
from devices_api.main.config import AppSettings
from devices_api.main.container import get_container

DEVICES = "/api/v1/devices"


@pytest.fixture()
def app(mongo_database):
    app = create_app(AppSettings())
    get_container().mongo_database.override(providers.Object(mongo_database))
    return app


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def _create(client, **fields):
    response = client.post(DEVICES, json={"name": "iPhone 15 Pro", "brand": "Apple", **fields})
    assert response.status_code == 201, response.text
    return response.json()


def test_create_defaults_to_available_with_version_one(client):
    body = _create(client)

    assert body["id"] == 1
    assert body["state"] == "available"
    assert body["version"] == 1
    assert body["creationTime"].endswith("Z")


def test_create_duplicate_ignoring_case_conflicts(client):
    _create(client)

    response = client.post(DEVICES, json={"name": "iPhone 15 Pro", "brand": "apple"})

    assert response.status_code == 409
    body = response.json()
    assert body["code"] == "DUPLICATE_DEVICE"
    assert body["path"] == DEVICES
    assert len(client.get(DEVICES).json()) == 1


def test_create_then_get_round_trips(client):
    created = _create(client, state="in-use")

    response = client.get(f"{DEVICES}/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_unknown_device_is_not_found(client):
    response = client.get(f"{DEVICES}/42")

    assert response.status_code == 404
    body = response.json()
    assert body["code"] == "DEVICE_NOT_FOUND"
    assert body["message"] == "Device not found with id: 42"
    assert body["path"] == f"{DEVICES}/42"


def test_list_is_newest_first(client):
    ids = [_create(client, name=name)["id"] for name in ("A", "B", "C")]

    response = client.get(DEVICES)

    assert response.status_code == 200
    assert [device["id"] for device in response.json()] == list(reversed(ids))


def test_list_by_brand_and_state(client):
    _create(client, name="iPhone", brand="Apple", state="in-use")
    _create(client, name="Pixel", brand="Google")

    by_brand = client.get(f"{DEVICES}/brand/APPLE").json()
    by_state = client.get(f"{DEVICES}/state/In-Use").json()

    assert [device["name"] for device in by_brand] == ["iPhone"]
    assert [device["name"] for device in by_state] == ["iPhone"]
    assert client.get(f"{DEVICES}/brand/Nokia").json() == []


def test_unknown_state_token_lists_valid_states(client):
    response = client.get(f"{DEVICES}/state/unknown-token")

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "INVALID_STATE"
    assert body["message"] == (
        "Invalid device state: unknown-token. "
        "Valid states are: available, in-use, inactive"
    )


def test_statistics(client):
    _create(client, name="A", state="in-use")
    _create(client, name="B")

    response = client.get(f"{DEVICES}/stats")

    assert response.status_code == 200
    assert response.json() == {
        "total": 2,
        "byState": {"available": 1, "in-use": 1, "inactive": 0},
    }


def test_put_replaces_fields(client):
    created = _create(client)

    response = client.put(
        f"{DEVICES}/{created['id']}",
        json={"name": "iPhone 16", "brand": "Apple", "state": "inactive"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "iPhone 16"
    assert body["state"] == "inactive"
    assert body["version"] == 2
    assert body["creationTime"] == created["creationTime"]


def test_put_with_stale_version_conflicts(client):
    created = _create(client)
    client.patch(f"{DEVICES}/{created['id']}", json={"state": "inactive"})

    response = client.put(
        f"{DEVICES}/{created['id']}",
        json={"name": "X", "brand": "Apple", "state": "available", "version": 1},
    )

    assert response.status_code == 409
    assert response.json()["code"] == "OPTIMISTIC_LOCK_FAILURE"


def test_patch_in_use_name_change_is_rejected(client):
    created = _create(client, state="in-use")

    response = client.patch(f"{DEVICES}/{created['id']}", json={"name": "X"})

    assert response.status_code == 409
    assert response.json()["code"] == "UPDATE_IN_USE_DEVICE"
    assert client.get(f"{DEVICES}/{created['id']}").json() == created


def test_patch_in_use_state_only_succeeds(client):
    created = _create(client, state="in-use")

    response = client.patch(f"{DEVICES}/{created['id']}", json={"state": "inactive"})

    assert response.status_code == 200
    assert response.json()["state"] == "inactive"
    assert response.json()["version"] == 2


def test_patch_in_use_brand_change_is_rejected(client):
    created = _create(client, state="in-use")

    response = client.patch(f"{DEVICES}/{created['id']}", json={"brand": "Samsung"})

    assert response.status_code == 409
    assert response.json()["code"] == "UPDATE_IN_USE_DEVICE"
    assert client.get(f"{DEVICES}/{created['id']}").json() == created


def test_patch_with_stale_version_conflicts(client):
    created = _create(client)
    client.patch(f"{DEVICES}/{created['id']}", json={"state": "inactive"})

    response = client.patch(
        f"{DEVICES}/{created['id']}", json={"name": "X", "version": 1}
    )

    assert response.status_code == 409
    assert response.json()["code"] == "OPTIMISTIC_LOCK_FAILURE"


def test_empty_patch_keeps_version(client):
    created = _create(client)

    response = client.patch(f"{DEVICES}/{created['id']}", json={})

    assert response.status_code == 200
    assert response.json() == created


def test_patch_explicit_null_is_a_validation_error(client):
    created = _create(client)

    response = client.patch(f"{DEVICES}/{created['id']}", json={"name": None})

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["fieldErrors"] == {"name": "Device name must not be null"}


def test_delete_available_device(client):
    created = _create(client)

    response = client.delete(f"{DEVICES}/{created['id']}")

    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"{DEVICES}/{created['id']}").status_code == 404
    assert client.delete(f"{DEVICES}/{created['id']}").status_code == 404


def test_delete_in_use_device_is_rejected_every_time(client):
    created = _create(client, state="in-use")

    for _ in range(2):
        response = client.delete(f"{DEVICES}/{created['id']}")
        assert response.status_code == 409
        assert response.json()["code"] == "DELETE_IN_USE_DEVICE"

    assert client.get(f"{DEVICES}/{created['id']}").json() == created


def test_create_validation_errors_are_reported_per_field(client):
    response = client.post(DEVICES, json={"brand": "", "state": "broken"})

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["message"] == "Validation failed"
    assert body["fieldErrors"]["name"] == "Device name is required"
    assert body["fieldErrors"]["brand"] == "Device brand is required"
    assert body["fieldErrors"]["state"].startswith("Invalid device state: broken")
    assert body["globalErrors"] == []


def test_name_too_long_is_rejected(client):
    response = client.post(DEVICES, json={"name": "n" * 101, "brand": "Apple"})

    assert response.status_code == 400
    assert response.json()["fieldErrors"] == {
        "name": "Device name must be between 1 and 100 characters"
    }


def test_malformed_json_is_a_validation_error(client):
    response = client.post(
        DEVICES, content="{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["globalErrors"] == ["Malformed JSON request body"]


def test_non_numeric_id_is_a_validation_error(client):
    response = client.get(f"{DEVICES}/abc")

    assert response.status_code == 400
    assert "device_id" in response.json()["fieldErrors"]


class _ExplodingService:
    async def list_all(self):
        raise RuntimeError("connection reset by peer")


def test_unexpected_errors_are_hidden(app):
    get_container().device_service.override(providers.Object(_ExplodingService()))

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get(DEVICES)

    assert response.status_code == 500
    body = response.json()
    assert body["code"] == "INTERNAL_SERVER_ERROR"
    assert "connection reset" not in body["message"]
