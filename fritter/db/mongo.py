from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
import pymongo
import pymongo.errors
from bson import ObjectId
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple
from fritter.config import Config
from fritter.errors import BadValuesError
import logging

Filter = Dict[str, Any]
# (keys, create_index options), e.g. ([("pair", 1)], {"unique": True})
IndexSpec = Tuple[List[Tuple[str, int]], Dict[str, Any]]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_object_id(value: str) -> ObjectId:
    if not ObjectId.is_valid(value):
        raise BadValuesError(f"Invalid id '{value}'")
    return ObjectId(value)


class MongoDatabase:
    def __init__(self):
        self.mongo_client: AsyncIOMotorClient | None = None
        self.database: AsyncIOMotorDatabase | None = None
        self.collections: Dict[str, "DocCollection"] = {}

    async def initialize(self):
        try:
            self.mongo_client = AsyncIOMotorClient(Config.MONGO_URI)
            self.database = self.mongo_client[Config.MONGO_DB_NAME]
            await self.mongo_client.admin.command('ping')
            logging.info("Successfully connected to MongoDB")
        except pymongo.errors.ConnectionFailure as e:
            logging.error(f"MongoDB connection failed: {e}")
            raise
        await self.ensure_indexes()

    async def ensure_indexes(self):
        for collection in self.collections.values():
            await collection.create_indexes()

    def register(self, collection: "DocCollection") -> None:
        self.collections[collection.name] = collection

    def get_collection(self, name: str):
        if self.database is None:
            raise RuntimeError("MongoDB has not been initialized")
        return self.database[name]

    def close(self):
        if self.mongo_client is not None:
            self.mongo_client.close()
            logging.info("MongoDB connection closed")
        self.mongo_client = None
        self.database = None


class DocCollection:
    """One named collection plus the indexes it needs.

    Every document gets `dateCreated` and `dateUpdated` stamps. The motor
    collection is resolved on each call so the database can be swapped
    after the concepts are built.
    """

    def __init__(self, name: str, indexes: Iterable[IndexSpec] = (), database: Optional[MongoDatabase] = None):
        self.name = name
        self.indexes = list(indexes)
        self.db = database or mongo_db
        self.db.register(self)

    @property
    def collection(self):
        return self.db.get_collection(self.name)

    async def create_indexes(self):
        for keys, options in self.indexes:
            await self.collection.create_index(keys, **options)
            logging.info(f"Index {keys} ready on '{self.name}'")

    async def create_one(self, item: dict) -> ObjectId:
        now = utcnow()
        doc = {**item, "dateCreated": now, "dateUpdated": now}
        result = await self.collection.insert_one(doc)
        return result.inserted_id

    async def restore_one(self, doc: dict) -> ObjectId:
        """Put back a document exactly as it was read, keeping its id and stamps."""
        result = await self.collection.insert_one(dict(doc))
        return result.inserted_id

    async def read_one(self, filter: Filter) -> Optional[dict]:
        return await self.collection.find_one(filter)

    async def read_many(self, filter: Filter, sort: Optional[Tuple[str, int]] = ("dateUpdated", pymongo.DESCENDING)) -> List[dict]:
        cursor = self.collection.find(filter)
        if sort is not None:
            cursor = cursor.sort(*sort)
        return await cursor.to_list(length=None)

    async def update_one(self, filter: Filter, update: dict) -> int:
        result = await self.collection.update_one(filter, {"$set": {**update, "dateUpdated": utcnow()}})
        return result.matched_count

    async def delete_one(self, filter: Filter) -> int:
        result = await self.collection.delete_one(filter)
        return result.deleted_count

    async def delete_many(self, filter: Filter) -> int:
        result = await self.collection.delete_many(filter)
        return result.deleted_count

    async def pop_one(self, filter: Filter) -> Optional[dict]:
        # Conditional delete: of two concurrent pops on the same record only one gets it
        return await self.collection.find_one_and_delete(filter)


mongo_db = MongoDatabase()

async def initialize_database():
    await mongo_db.initialize()

def close_database():
    mongo_db.close()
