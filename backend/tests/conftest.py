"""
FWRCFN Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── mock_db: MagicMock database whose collections are AsyncMocks
    │            (service unit tests, no MongoDB needed)
    ├── memory_db: small in-memory stand-in for the collections the API uses
    │              (endpoint tests that need real read-after-write behaviour)
    ├── test_client: HTTPX AsyncClient with the database marked as down
    └── db_client: HTTPX AsyncClient wired to memory_db
"""

import copy
import os
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any application imports
os.environ["MONGODB_URI"] = "mongodb://localhost:27017/fwrcfn_test"
os.environ["JWT_SECRET"] = "test-secret-not-for-production-use-0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum cost keeps hashing fast in tests
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.errors import DuplicateKeyError


# ══════════════════════════════════════════════════════════════════════════
# In-memory collections
# ══════════════════════════════════════════════════════════════════════════

def _matches(document: Dict[str, Any], query: Optional[Dict[str, Any]]) -> bool:
    return all(document.get(key) == value for key, value in (query or {}).items())


class MemoryCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        documents = [copy.deepcopy(d) for d in self._documents]
        return documents if length is None else documents[:length]


class MemoryCollection:
    """Implements only the collection calls the services make."""

    def __init__(self, unique_fields=()):
        self.documents: List[Dict[str, Any]] = []
        self.unique_fields = tuple(unique_fields)

    def _check_unique(self, document: Dict[str, Any]) -> None:
        for field in self.unique_fields:
            if any(existing.get(field) == document.get(field) for existing in self.documents):
                raise DuplicateKeyError(f"E11000 duplicate key error: {field}", code=11000)

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for document in self.documents:
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    def find(self, query: Optional[Dict[str, Any]] = None) -> MemoryCursor:
        return MemoryCursor([d for d in self.documents if _matches(d, query)])

    async def insert_one(self, document: Dict[str, Any]):
        self._check_unique(document)
        stored = copy.deepcopy(document)
        stored["_id"] = ObjectId()
        self.documents.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def insert_many(self, documents: List[Dict[str, Any]]):
        inserted_ids = []
        for document in documents:
            result = await self.insert_one(document)
            inserted_ids.append(result.inserted_id)
        return SimpleNamespace(inserted_ids=inserted_ids)


class MemoryDatabase:
    name = "fwrcfn_test"

    def __init__(self):
        self.collections: Dict[str, MemoryCollection] = {
            "users": MemoryCollection(unique_fields=("email",)),
            "fridges": MemoryCollection(),
        }

    def __getitem__(self, name: str) -> MemoryCollection:
        return self.collections.setdefault(name, MemoryCollection())


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db():
    """
    Provides a mock database.

    `mock_db["users"]` and `mock_db["fridges"]` return the same AsyncMock
    collection for the duration of a test, so expectations can be set up
    front:

        mock_db["users"].find_one.return_value = None
    """
    collections: Dict[str, MagicMock] = {}

    def get_collection(name: str) -> MagicMock:
        if name not in collections:
            collection = MagicMock()
            collection.find_one = AsyncMock(return_value=None)
            collection.insert_one = AsyncMock()
            collection.insert_many = AsyncMock()
            collection.find = MagicMock()
            collections[name] = collection
        return collections[name]

    db = MagicMock()
    db.__getitem__.side_effect = get_collection
    return db


@pytest.fixture
def memory_db():
    return MemoryDatabase()


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient talking to the app with no database connection.

    The lifespan never runs under ASGITransport, so the process-wide
    connection stays in its initial "Disconnected" state.
    """
    from fwrcfn.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def db_client(memory_db):
    """HTTPX AsyncClient whose data routes use `memory_db`."""
    from fwrcfn.database import get_database
    from fwrcfn.main import app

    app.dependency_overrides[get_database] = lambda: memory_db
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_database, None)
