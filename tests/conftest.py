"""
Shared fixtures.

The concepts talk to MongoDB through motor. Tests swap the database for an
in-memory double that implements the handful of collection calls the
concepts make (insert, find, update, delete, find_one_and_delete and unique
indexes), so no MongoDB server is needed. Every call yields to the
event loop once, so calls started together with asyncio.gather interleave
the way they would against a real server.
"""

import asyncio
import copy
import os
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport
from pymongo.errors import DuplicateKeyError

os.environ.setdefault("SESSION_SECRET_KEY", "test-secret-not-real")
os.environ.setdefault("LOG_LEVEL", "WARNING")

MISSING = object()


def matches(doc: Dict[str, Any], filter: Dict[str, Any]) -> bool:
    for key, condition in filter.items():
        if key == "$or":
            if not any(matches(doc, sub) for sub in condition):
                return False
            continue
        if key == "$and":
            if not all(matches(doc, sub) for sub in condition):
                return False
            continue
        value = doc.get(key, MISSING)
        if isinstance(condition, dict) and condition and all(k.startswith("$") for k in condition):
            for op, operand in condition.items():
                if op == "$in" and value not in operand:
                    return False
                if op == "$ne" and value == operand:
                    return False
            continue
        if value is MISSING or value != condition:
            return False
    return True


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]):
        self.docs = docs

    def sort(self, key: str, direction: int = 1):
        self.docs = sorted(self.docs, key=lambda d: d[key], reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        await asyncio.sleep(0)
        return self.docs if length is None else self.docs[:length]


class FakeCollection:
    def __init__(self, name: str):
        self.name = name
        self.docs: List[Dict[str, Any]] = []
        self.unique_indexes: List[SimpleNamespace] = []

    async def create_index(self, keys, unique=False, sparse=False, **kwargs):
        if unique:
            self.unique_indexes.append(SimpleNamespace(fields=[k for k, _ in keys], sparse=sparse))
        return "_".join(f"{k}_{d}" for k, d in keys)

    def _check_unique(self, doc: Dict[str, Any]) -> None:
        if any(existing["_id"] == doc["_id"] for existing in self.docs):
            raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} index: _id_")
        for index in self.unique_indexes:
            if index.sparse and any(field not in doc for field in index.fields):
                continue
            key = [doc.get(field) for field in index.fields]
            for existing in self.docs:
                if index.sparse and any(field not in existing for field in index.fields):
                    continue
                if [existing.get(field) for field in index.fields] == key:
                    raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} index: {index.fields}")

    async def insert_one(self, doc: Dict[str, Any]):
        await asyncio.sleep(0)
        if "_id" not in doc:
            doc["_id"] = ObjectId()
        self._check_unique(doc)
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, filter: Dict[str, Any]):
        await asyncio.sleep(0)
        for doc in self.docs:
            if matches(doc, filter):
                return copy.deepcopy(doc)
        return None

    def find(self, filter: Dict[str, Any]):
        return FakeCursor([copy.deepcopy(doc) for doc in self.docs if matches(doc, filter)])

    async def update_one(self, filter: Dict[str, Any], update: Dict[str, Any]):
        await asyncio.sleep(0)
        for doc in self.docs:
            if matches(doc, filter):
                doc.update(copy.deepcopy(update.get("$set", {})))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, filter: Dict[str, Any]):
        await asyncio.sleep(0)
        for doc in self.docs:
            if matches(doc, filter):
                self.docs.remove(doc)
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def delete_many(self, filter: Dict[str, Any]):
        await asyncio.sleep(0)
        kept = [doc for doc in self.docs if not matches(doc, filter)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return SimpleNamespace(deleted_count=deleted)

    async def find_one_and_delete(self, filter: Dict[str, Any]):
        await asyncio.sleep(0)
        for doc in self.docs:
            if matches(doc, filter):
                self.docs.remove(doc)
                return doc
        return None


class FakeDatabase:
    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


@pytest_asyncio.fixture(autouse=True)
async def fake_db():
    """Points every concept at a fresh in-memory database with its indexes."""
    from fritter.db.mongo import mongo_db
    previous = mongo_db.database
    mongo_db.database = FakeDatabase()
    await mongo_db.ensure_indexes()
    yield mongo_db.database
    mongo_db.database = previous


@pytest.fixture
def alice():
    return ObjectId()


@pytest.fixture
def bob():
    return ObjectId()


@pytest.fixture
def carol():
    return ObjectId()


@pytest_asyncio.fixture
async def make_client():
    """Builds HTTP clients bound to the app; each keeps its own session cookie."""
    from fritter import app
    clients = []

    def factory() -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield factory
    for client in clients:
        await client.aclose()


@pytest.fixture
def signup_and_login():
    """Signs a client up and logs it in; the session cookie stays on the client."""

    async def signup_and_login(client: AsyncClient, username: str, password: str = "secret-password"):
        response = await client.post("/api/users", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        response = await client.post("/api/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return response

    return signup_and_login
