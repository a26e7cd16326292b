"""
MongoDB Device Repository - Infrastructure Layer

This module implements the IDeviceRepository interface using MongoDB
as the underlying data store.

Documents keep lower-cased copies of name and brand so case-insensitive
lookups are plain indexed equality matches. Updates and deletes are
conditional on the stored version, which is how concurrent writers are
detected.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING

from devices_api.domain.entities.device import Device, DeviceState
from devices_api.domain.entities.errors import (
    ConcurrentModificationError,
    DeviceNotFoundError,
    DomainError,
)
from devices_api.domain.repositories.device_repository import IDeviceRepository
from devices_api.infrastructure.database.mongo_database import (
    DEVICES_COLLECTION,
    MongoDatabase,
)
from devices_api.shared import get_logger

logger = get_logger(__name__)

NEWEST_FIRST = [("creation_time", DESCENDING), ("id", DESCENDING)]


def _utc_now() -> datetime:
    """Current UTC time at the millisecond precision MongoDB stores."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class DeviceRepository(IDeviceRepository):
    """MongoDB implementation of the IDeviceRepository."""

    COLLECTION_NAME = DEVICES_COLLECTION
    SEQUENCE_NAME = "device_id"

    def __init__(self, mongo_database: MongoDatabase):
        """
        Initialize the MongoDB device repository.

        Args:
            mongo_database: MongoDB database client
        """
        self.db = mongo_database

    def _to_document(self, device: Device) -> Dict[str, Any]:
        """Convert a Device entity to a MongoDB document."""
        return {
            "id": device.id,
            "name": device.name,
            "name_lower": device.name.lower(),
            "brand": device.brand,
            "brand_lower": device.brand.lower(),
            "state": device.state.value,
            "creation_time": device.creation_time,
            "version": device.version,
        }

    def _to_entity(self, document: Dict[str, Any]) -> Device:
        """Convert a MongoDB document to a Device entity."""
        creation_time = document["creation_time"]
        if creation_time.tzinfo is None:
            creation_time = creation_time.replace(tzinfo=timezone.utc)

        return Device(
            id=int(document["id"]),
            name=document["name"],
            brand=document["brand"],
            state=DeviceState(document["state"]),
            creation_time=creation_time,
            version=int(document["version"]),
        )

    async def _find(
        self, query: Dict[str, Any], sort: Optional[list] = None
    ) -> List[Device]:
        documents = await self.db.find_many(
            self.COLLECTION_NAME, query, sort=sort or NEWEST_FIRST
        )
        return [self._to_entity(document) for document in documents]

    async def find_by_id(self, device_id: int) -> Optional[Device]:
        document = await self.db.find_one(self.COLLECTION_NAME, {"id": device_id})
        if document is None:
            return None
        return self._to_entity(document)

    async def find_by_brand(self, brand: str) -> List[Device]:
        return await self._find({"brand_lower": brand.lower()})

    async def find_by_state(self, state: DeviceState) -> List[Device]:
        return await self._find({"state": state.value})

    async def exists_by_name_and_brand(self, name: str, brand: str) -> bool:
        matches = await self.db.count(
            self.COLLECTION_NAME,
            {"name_lower": name.lower(), "brand_lower": brand.lower()},
            limit=1,
        )
        return matches > 0

    async def count_by_state(self, state: DeviceState) -> int:
        return await self.db.count(self.COLLECTION_NAME, {"state": state.value})

    async def list_all_by_creation_desc(self) -> List[Device]:
        return await self._find({}, sort=NEWEST_FIRST)

    async def save(self, device: Device) -> Device:
        """
        Insert or conditionally update a device.

        Raises:
            ConcurrentModificationError: If the stored version differs
            DeviceNotFoundError: If the device no longer exists
        """
        if not device.is_persisted():
            return await self._insert(device)
        return await self._update(device)

    async def _insert(self, device: Device) -> Device:
        device_id = await self.db.next_sequence(self.SEQUENCE_NAME)
        created = replace(
            device,
            id=device_id,
            creation_time=_utc_now(),
            version=self.INITIAL_VERSION,
        )
        await self.db.insert_one(self.COLLECTION_NAME, self._to_document(created))

        logger.debug("devices.repository.inserted", device_id=device_id)
        return created

    async def _update(self, device: Device) -> Device:
        expected_version = device.version
        # creation_time is never part of the update: it is immutable.
        stored = await self.db.find_one_and_update(
            self.COLLECTION_NAME,
            {"id": device.id, "version": expected_version},
            {
                "$set": {
                    "name": device.name,
                    "name_lower": device.name.lower(),
                    "brand": device.brand,
                    "brand_lower": device.brand.lower(),
                    "state": device.state.value,
                },
                "$inc": {"version": 1},
            },
        )
        if stored is None:
            raise await self._write_conflict(device)

        logger.debug(
            "devices.repository.updated",
            device_id=device.id,
            version=stored.get("version"),
        )
        return self._to_entity(stored)

    async def delete(self, device: Device) -> None:
        """
        Delete a device, provided it was not modified since it was read.

        Raises:
            ConcurrentModificationError: If the stored version differs
            DeviceNotFoundError: If the device does not exist
        """
        deleted = await self.db.delete_one(
            self.COLLECTION_NAME, {"id": device.id, "version": device.version}
        )
        if deleted == 0:
            raise await self._write_conflict(device)

        logger.debug("devices.repository.deleted", device_id=device.id)

    async def _write_conflict(self, device: Device) -> DomainError:
        """Explain why a version-guarded write matched nothing."""
        current = await self.db.find_one(self.COLLECTION_NAME, {"id": device.id})
        if current is None:
            return DeviceNotFoundError(device.id)
        return ConcurrentModificationError(
            device.id, device.version, current.get("version")
        )
