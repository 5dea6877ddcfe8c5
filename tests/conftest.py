"""Shared pytest fixtures.

MongoDB is replaced by a small in-memory fake of the async collection API,
covering only the queries and update operators the services use.
"""

import copy
from collections.abc import AsyncIterator
from types import SimpleNamespace
from typing import Any

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from pymongo.errors import AutoReconnect, DuplicateKeyError

from storefront.app import App
from storefront.config import Config
from storefront.core.core import Core
from storefront.web.server import create_fastapi_app


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, expected in query.items():
        value = doc.get(key)
        if isinstance(expected, dict) and "$gte" in expected:
            if value is None or value < expected["$gte"]:
                return False
        elif value != expected:
            return False
    return True


def _apply_update(doc: dict[str, Any], update: dict[str, Any]) -> bool:
    before = copy.deepcopy(doc)
    for key, value in update.get("$set", {}).items():
        doc[key] = copy.deepcopy(value)
    for key in update.get("$unset", {}):
        doc.pop(key, None)
    for key, value in update.get("$push", {}).items():
        doc.setdefault(key, []).append(copy.deepcopy(value))
    return doc != before


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def __aiter__(self) -> AsyncIterator[dict[str, Any]]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[dict[str, Any]]:
        for doc in self._docs:
            yield doc


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.unique_fields: set[str] = set()
        self.failing: set[str] = set()  # Method names that raise a connection error

    def _check(self, method: str) -> None:
        if method in self.failing:
            raise AutoReconnect(f"{self.name}.{method}: connection lost")

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False, **_: Any) -> str:
        if unique:
            self.unique_fields.update(field for field, _direction in keys)
        return "_".join(f"{field}_{direction}" for field, direction in keys)

    async def insert_one(self, doc: dict[str, Any]) -> SimpleNamespace:
        self._check("insert_one")
        for field in self.unique_fields | {"_id"}:
            if any(existing.get(field) == doc.get(field) for existing in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} index: {field}_1")
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._check("find_one")
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        self._check("find")
        return FakeCursor([copy.deepcopy(doc) for doc in self.docs if _matches(doc, query or {})])

    async def count_documents(self, query: dict[str, Any], limit: int | None = None) -> int:
        count = sum(1 for doc in self.docs if _matches(doc, query))
        return min(count, limit) if limit else count

    async def find_one_and_update(
        self, query: dict[str, Any], update: dict[str, Any], return_document: Any = None
    ) -> dict[str, Any] | None:
        self._check("find_one_and_update")
        for doc in self.docs:
            if _matches(doc, query):
                before = copy.deepcopy(doc)
                _apply_update(doc, update)
                return copy.deepcopy(doc) if return_document else before
        return None

    async def update_one(self, query: dict[str, Any], update: dict[str, Any]) -> SimpleNamespace:
        self._check("update_one")
        for doc in self.docs:
            if _matches(doc, query):
                return SimpleNamespace(matched_count=1, modified_count=int(_apply_update(doc, update)))
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def update_many(self, query: dict[str, Any], update: dict[str, Any]) -> SimpleNamespace:
        self._check("update_many")
        matched = [doc for doc in self.docs if _matches(doc, query)]
        modified = sum(int(_apply_update(doc, update)) for doc in matched)
        return SimpleNamespace(matched_count=len(matched), modified_count=modified)

    async def delete_one(self, query: dict[str, Any]) -> SimpleNamespace:
        self._check("delete_one")
        for index, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    def __init__(self, name: str) -> None:
        self.name = name
        self.reachable = True
        self._collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self._collections.setdefault(name, FakeCollection(name))

    async def command(self, name: str) -> dict[str, Any]:
        if not self.reachable:
            raise AutoReconnect("localhost:27017: [Errno 111] Connection refused")
        return {"ok": 1.0}


class FakeMongoClient:
    def __init__(self) -> None:
        self.databases: dict[str, FakeDatabase] = {}
        self.closed = False

    def get_database(self, name: str) -> FakeDatabase:
        return self.databases.setdefault(name, FakeDatabase(name))

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def config():
    """Test configuration with a cheap bcrypt work factor."""
    return Config(
        database_url="mongodb://localhost:27017/storefront_test",
        host="127.0.0.1",
        port=8080,
        debug=True,
        password_hash_rounds=4,
        cloudinary_cloud_name="demo",
        cloudinary_api_key="123456",
        cloudinary_api_secret="secret",
    )


@pytest.fixture
def mongo_client():
    return FakeMongoClient()


@pytest_asyncio.fixture
async def core(config, mongo_client):
    """Started Core backed by the fake database."""
    core = Core(config, mongo_client)
    async with core.lifespan():
        yield core


@pytest.fixture
def client(config, mongo_client):
    """HTTP client for the full FastAPI application."""
    fastapi_app = create_fastapi_app(App(config, mongo_client), config)
    with TestClient(fastapi_app) as test_client:
        yield test_client
