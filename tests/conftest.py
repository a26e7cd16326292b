from __future__ import annotations

import sys
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Optional, Sequence

import pymongo.errors
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from devices_api.application.services.device_service import DeviceService  # noqa: E402
from devices_api.domain.entities.device import Device, DeviceState  # noqa: E402
from devices_api.domain.entities.errors import (  # noqa: E402
    ConcurrentModificationError,
    DeviceNotFoundError,
)
from devices_api.domain.repositories.device_repository import (  # noqa: E402
    IDeviceRepository,
)
from devices_api.infrastructure.database.mongo_database import (  # noqa: E402
    MongoDatabase,
)


class FakeCursor:
    def __init__(self, documents: Sequence[Dict[str, Any]]):
        self._documents = [dict(document) for document in documents]
        self._skip = 0
        self._limit = 0

    def sort(self, key_or_list: Any, direction: Optional[int] = None) -> "FakeCursor":
        if isinstance(key_or_list, list):
            keys = key_or_list
        else:
            keys = [(key_or_list, direction or 1)]
        # Stable sorts applied from the least significant key
        for field, field_direction in reversed(keys):
            self._documents.sort(key=lambda doc: doc.get(field), reverse=field_direction < 0)
        return self

    def skip(self, amount: int) -> "FakeCursor":
        self._skip = amount
        return self

    def limit(self, amount: int) -> "FakeCursor":
        self._limit = amount
        return self

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        docs = self._documents[self._skip :]
        if self._limit:
            docs = docs[: self._limit]
        return iter(docs)


class FakeCollection:
    """In-memory stand-in for the subset of pymongo's Collection we use."""

    def __init__(self) -> None:
        self.documents: List[Dict[str, Any]] = []
        self.created_indexes: List[tuple] = []
        self.fail_create_index = False

    def _first(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for document in self.documents:
            if self._matches(document, query):
                return document
        return None

    def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        document = self._first(query)
        return dict(document) if document is not None else None

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        return FakeCursor([doc for doc in self.documents if self._matches(doc, query)])

    def count_documents(self, query: Dict[str, Any], limit: int = 0) -> int:
        matches = sum(1 for doc in self.documents if self._matches(doc, query))
        return min(matches, limit) if limit else matches

    def insert_one(self, document: Dict[str, Any]) -> Any:
        if "id" in document and self._first({"id": document["id"]}) is not None:
            raise pymongo.errors.DuplicateKeyError("duplicate id")
        self.documents.append(dict(document))
        return SimpleNamespace(acknowledged=True, inserted_id=document.get("id"))

    def find_one_and_update(
        self,
        query: Dict[str, Any],
        update: Dict[str, Any],
        upsert: bool = False,
        return_document: Any = None,
    ) -> Optional[Dict[str, Any]]:
        document = self._first(query)
        if document is None:
            if not upsert:
                return None
            document = dict(query)
            self.documents.append(document)
        self._apply(document, update)
        return dict(document)

    def delete_one(self, query: Dict[str, Any]) -> Any:
        document = self._first(query)
        if document is None:
            return SimpleNamespace(acknowledged=True, deleted_count=0)
        self.documents.remove(document)
        return SimpleNamespace(acknowledged=True, deleted_count=1)

    def create_index(self, keys: Any, name: Optional[str] = None, **kwargs: Any) -> Any:
        if self.fail_create_index:
            raise pymongo.errors.OperationFailure("index conflict")
        self.created_indexes.append((keys, name, kwargs))
        return name or keys

    @staticmethod
    def _apply(document: Dict[str, Any], update: Dict[str, Any]) -> None:
        document.update(update.get("$set", {}))
        for key, amount in update.get("$inc", {}).items():
            document[key] = document.get(key, 0) + amount

    @staticmethod
    def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
        for key, value in query.items():
            if document.get(key) != value:
                return False
        return True


class FakeDatabase:
    def __init__(self, name: str) -> None:
        self.name = name
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


class FakeMongoClient:
    """Replaces pymongo.MongoClient inside MongoDatabase."""

    def __init__(self, uri: str = "mongodb://fake", **kwargs: Any) -> None:
        self.uri = uri
        self.options = kwargs
        self.databases: Dict[str, FakeDatabase] = {}
        self.ping_error: Optional[Exception] = None
        self.closed = False
        self.admin = SimpleNamespace(command=self._command)

    def __getitem__(self, name: str) -> FakeDatabase:
        return self.databases.setdefault(name, FakeDatabase(name))

    def _command(self, name: str) -> Dict[str, Any]:
        if name != "ping":
            raise ValueError(f"Unexpected command {name}")
        if self.ping_error is not None:
            raise self.ping_error
        return {"ok": 1.0}

    def close(self) -> None:
        self.closed = True


class InMemoryDeviceRepository(IDeviceRepository):
    """Dictionary-backed device repository with the same locking rules."""

    def __init__(self) -> None:
        self.devices: Dict[int, Device] = {}
        self.writes = 0
        self._next_id = 1
        self._clock = datetime(2024, 9, 9, 12, 0, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _newest_first(self) -> List[Device]:
        return sorted(
            self.devices.values(),
            key=lambda device: (device.creation_time, device.id),
            reverse=True,
        )

    async def find_by_id(self, device_id: int) -> Optional[Device]:
        device = self.devices.get(device_id)
        return replace(device) if device is not None else None

    async def find_by_brand(self, brand: str) -> List[Device]:
        return [
            replace(device)
            for device in self._newest_first()
            if device.brand.lower() == brand.lower()
        ]

    async def find_by_state(self, state: DeviceState) -> List[Device]:
        return [replace(d) for d in self._newest_first() if d.state is state]

    async def exists_by_name_and_brand(self, name: str, brand: str) -> bool:
        return any(
            device.name.lower() == name.lower() and device.brand.lower() == brand.lower()
            for device in self.devices.values()
        )

    async def count_by_state(self, state: DeviceState) -> int:
        return sum(1 for device in self.devices.values() if device.state is state)

    async def list_all_by_creation_desc(self) -> List[Device]:
        return [replace(device) for device in self._newest_first()]

    async def save(self, device: Device) -> Device:
        self.writes += 1
        if device.id is None:
            created = replace(
                device,
                id=self._next_id,
                creation_time=self._tick(),
                version=self.INITIAL_VERSION,
            )
            self._next_id += 1
            self.devices[created.id] = created
            return replace(created)

        stored = self.devices.get(device.id)
        if stored is None:
            raise DeviceNotFoundError(device.id)
        if stored.version != device.version:
            raise ConcurrentModificationError(device.id, device.version, stored.version)

        updated = replace(
            device, creation_time=stored.creation_time, version=stored.version + 1
        )
        self.devices[device.id] = updated
        return replace(updated)

    async def delete(self, device: Device) -> None:
        stored = self.devices.get(device.id)
        if stored is None:
            raise DeviceNotFoundError(device.id)
        if stored.version != device.version:
            raise ConcurrentModificationError(device.id, device.version, stored.version)
        self.writes += 1
        del self.devices[device.id]


@pytest.fixture()
def device_repository() -> InMemoryDeviceRepository:
    return InMemoryDeviceRepository()


@pytest.fixture()
def device_service(device_repository: InMemoryDeviceRepository) -> DeviceService:
    return DeviceService(device_repository=device_repository)


@pytest.fixture()
def fake_mongo_client(monkeypatch) -> FakeMongoClient:
    client = FakeMongoClient()

    def _connect(uri: str, **kwargs: Any) -> FakeMongoClient:
        client.uri = uri
        client.options = kwargs
        return client

    monkeypatch.setattr(
        "devices_api.infrastructure.database.mongo_database.MongoClient", _connect
    )
    return client


@pytest.fixture()
def mongo_database(fake_mongo_client: FakeMongoClient) -> MongoDatabase:
    return MongoDatabase("mongodb://localhost:27017", "devices_test")


@pytest.fixture()
def sample_device() -> Device:
    return Device(name="iPhone 15 Pro", brand="Apple")
