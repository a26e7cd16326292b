"""
Thin asynchronous facade over a synchronous pymongo client.

Holds the connection to the devices database, hands out integer ids from the
counters collection and creates the indexes the device queries rely on.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

import pymongo.errors
from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument
from pymongo.database import Database

from devices_api.shared import get_logger

logger = get_logger(__name__)

SortKeys = Sequence[Tuple[str, int]]

DEVICES_COLLECTION = "devices"
COUNTERS_COLLECTION = "counters"


class MongoDatabase:
    """Connection to the devices database."""

    def __init__(
        self,
        mongo_uri: str,
        db_name: str,
        server_selection_timeout_ms: int = 5000,
    ):
        """
        Args:
            mongo_uri: MongoDB connection URI
            db_name: Database holding the devices and counters collections
            server_selection_timeout_ms: How long an operation waits for a
                reachable server before failing
        """
        self.client: MongoClient = MongoClient(
            mongo_uri,
            tz_aware=True,
            serverSelectionTimeoutMS=server_selection_timeout_ms,
        )
        self.db: Database = self.client[db_name]

    async def find_one(
        self, collection_name: str, query: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Return the first document matching ``query``, or None."""
        return self.db[collection_name].find_one(query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort: Optional[SortKeys] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        Find the documents matching ``query``.

        Args:
            collection_name: Name of the collection
            query: Equality filter
            sort: (field, direction) pairs, most significant first
            skip: Number of documents to skip
            limit: Maximum number of documents to return, 0 for no limit
        """
        cursor = self.db[collection_name].find(query)
        if sort:
            cursor = cursor.sort(list(sort))
        return list(cursor.skip(skip).limit(limit))

    async def count(
        self, collection_name: str, query: Dict[str, Any], limit: int = 0
    ) -> int:
        """Count the documents matching ``query``, stopping at ``limit`` if set."""
        collection = self.db[collection_name]
        if limit:
            return collection.count_documents(query, limit=limit)
        return collection.count_documents(query)

    async def insert_one(
        self, collection_name: str, document: Dict[str, Any]
    ) -> Dict[str, Any]:
        result = self.db[collection_name].insert_one(document)
        if not result.acknowledged:
            raise Exception(f"Insert into {collection_name} was not acknowledged")
        return document

    async def find_one_and_update(
        self,
        collection_name: str,
        query: Dict[str, Any],
        update: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """
        Atomically update the first matching document and return it as
        stored after the update, or None when nothing matched.
        """
        return self.db[collection_name].find_one_and_update(
            query, update, return_document=ReturnDocument.AFTER
        )

    async def delete_one(self, collection_name: str, query: Dict[str, Any]) -> int:
        """Delete the first matching document and return how many were removed."""
        result = self.db[collection_name].delete_one(query)
        if not result.acknowledged:
            raise Exception(f"Delete from {collection_name} was not acknowledged")
        return result.deleted_count

    async def next_sequence(self, name: str) -> int:
        """Atomically allocate the next value of the integer sequence ``name``."""
        counter = self.db[COUNTERS_COLLECTION].find_one_and_update(
            {"_id": name},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(counter["seq"])

    def close(self) -> None:
        self.client.close()

    async def create_indexes(self) -> None:
        """
        Create the device indexes, called once on application startup.

        (name, brand) is indexed but not unique, since the duplicate rule is
        only enforced when a device is created.
        """
        devices = self.db[DEVICES_COLLECTION]
        try:
            devices.create_index("id", name="id_idx", unique=True)
            devices.create_index("brand_lower", name="brand_lower_idx")
            devices.create_index("state", name="state_idx")
            devices.create_index(
                [("name_lower", ASCENDING), ("brand_lower", ASCENDING)],
                name="name_brand_idx",
            )
            devices.create_index(
                [("creation_time", DESCENDING), ("id", DESCENDING)],
                name="creation_time_idx",
            )
        except pymongo.errors.OperationFailure as e:
            logger.warning("mongo.indexes.create_failed", error=str(e))
