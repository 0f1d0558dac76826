"""
Global fixtures for all unit tests.

This conftest provides autouse fixtures that prevent real external service calls:
- MongoDB connection attempts (would wait for server selection timeout)
- Environment variable isolation (prevents credential leakage)

These fixtures apply automatically to ALL tests in tests/unit/.
"""

import pytest
from unittest.mock import patch, MagicMock, AsyncMock


def make_cursor(docs=None):
    """Build a mock cursor whose chained calls return itself."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(docs or []))
    return cursor


@pytest.fixture(autouse=True)
def mock_mongo_client():
    """
    Prevent MongoDB connection attempts in all unit tests.

    Setup chain: AsyncMongoClient(...)["blog"]["users"] with async
    collection methods.
    """
    with patch("blog_users.common.repositories.user_repository.AsyncMongoClient") as mock_client:
        mock_instance = MagicMock()
        mock_instance.close = AsyncMock()
        mock_db = MagicMock()
        mock_db.list_collection_names = AsyncMock(return_value=["users"])
        mock_collection = MagicMock()

        mock_collection.find = MagicMock(return_value=make_cursor())
        mock_collection.insert_one = AsyncMock()
        mock_collection.delete_one = AsyncMock()
        mock_collection.delete_many = AsyncMock()
        mock_collection.update_one = AsyncMock()
        mock_collection.count_documents = AsyncMock(return_value=0)
        mock_collection.create_index = AsyncMock(return_value="name_1")

        mock_instance.__getitem__.return_value = mock_db
        mock_db.__getitem__.return_value = mock_collection

        mock_client.return_value = mock_instance
        yield mock_client


@pytest.fixture
def mock_database(mock_mongo_client):
    """The mock database handle returned by client[...]."""
    return mock_mongo_client.return_value.__getitem__.return_value


@pytest.fixture
def mock_collection(mock_database):
    """The mock users collection handle returned by database[...]."""
    return mock_database.__getitem__.return_value


@pytest.fixture
def cursor_with():
    """Factory for mock cursors yielding the given documents."""
    return make_cursor


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """
    Isolate test environment from real credentials and configurations.
    """
    monkeypatch.setenv("MONGODB_URI", "mongodb://test")
    for name in (
        "BLOG_DATABASE",
        "USERS_COLLECTION",
        "MONGODB_SERVER_SELECTION_TIMEOUT_MS",
        "DEBUG_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
