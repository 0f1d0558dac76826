"""
MongoDB Users Repository

asyncio implementation of UserRepositoryInterface over the `blog.users`
collection, built on PyMongo's native async client.
"""

from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from ..config import DEFAULT_SERVER_SELECTION_TIMEOUT_MS
from ..logger import get_logger
from ..types import FieldValue, User, UserId, to_object_id
from .base import ConnectionStatus, UserRepositoryInterface


class MongoUserRepository(UserRepositoryInterface):
    """
    Repository for the users collection.

    Connection Management:
    - Construction resolves client, database and collection handles
      without any network round trip; the driver connects on first use
    - A client created from a URI is owned and closed by the repository
    - An injected client is shared by reference and left open on close()
    - Instances hold no per-call state and are safe to share across tasks

    Error Handling:
    - Fail-fast: driver errors propagate to the caller
    - check_connection() is the only operation that turns errors into False
    """

    def __init__(
        self,
        mongodb_uri: Optional[str] = None,
        database: str = "blog",
        collection: str = "users",
        client: Optional[AsyncMongoClient] = None,
        server_selection_timeout_ms: int = DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
    ):
        """
        Initialize the repository.

        Args:
            mongodb_uri: MongoDB connection string (ignored when client is given)
            database: Database name (default: "blog")
            collection: Collection name (default: "users")
            client: Existing AsyncMongoClient to share instead of creating one
            server_selection_timeout_ms: How long operations wait for a server

        Raises:
            ValueError: If neither mongodb_uri nor client is provided
        """
        if client is None and not mongodb_uri:
            raise ValueError("Either mongodb_uri or client is required")

        self._mongodb_uri = mongodb_uri
        self._database_name = database
        self._collection_name = collection
        self._log = get_logger(__name__, namespace=self.namespace)

        self._owns_client = client is None
        if client is None:
            client = AsyncMongoClient(
                mongodb_uri,
                serverSelectionTimeoutMS=server_selection_timeout_ms,
            )
            self._log.info(f"Created MongoDB client for {sanitize_mongodb_uri(mongodb_uri)}")

        self._client: AsyncMongoClient = client
        self._database: AsyncDatabase = client[database]
        self._collection: AsyncCollection = self._database[collection]
        self._closed = False

    @property
    def namespace(self) -> str:
        """Full collection namespace, e.g. "blog.users"."""
        return f"{self._database_name}.{self._collection_name}"

    async def close(self) -> None:
        """Release the client if this repository created it."""
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._client.close()
            self._log.info("MongoDB client closed")

    async def __aenter__(self) -> "MongoUserRepository":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def check_connection_status(self) -> ConnectionStatus:
        """
        Check the database with a collection listing.

        Never raises; the failure detail is returned instead.
        """
        try:
            await self._database.list_collection_names()
        except Exception as e:
            self._log.bind("check_connection").warning(
                f"Connection check failed: {type(e).__name__}: {e}"
            )
            return ConnectionStatus(ok=False, error=str(e), error_type=type(e).__name__)
        return ConnectionStatus(ok=True)

    async def check_connection(self) -> bool:
        """Check if the database is reachable. Any error yields False."""
        status = await self.check_connection_status()
        return status.ok

    def get_connection_info(self) -> Dict[str, Any]:
        """
        Get connection information with credentials masked.
        """
        return {
            "status": "closed" if self._closed else "open",
            "url": sanitize_mongodb_uri(self._mongodb_uri) if self._mongodb_uri else None,
            "database": self._database_name,
            "collection": self._collection_name,
            "owns_client": self._owns_client,
        }

    async def get_all_users(self) -> List[User]:
        """Return all users."""
        docs = await self._collection.find({}).to_list()
        self._log.debug(f"get_all_users returned {len(docs)} documents")
        return [User.from_document(doc) for doc in docs]

    async def get_users_by_field(self, field_name: str, field_value: FieldValue) -> List[User]:
        """Return users where field_name equals field_value."""
        docs = await self._collection.find({field_name: field_value}).to_list()
        self._log.debug(f"get_users_by_field {field_name}={field_value!r}: {len(docs)} match(es)")
        return [User.from_document(doc) for doc in docs]

    async def get_users(
        self,
        starting_from: int,
        count: int,
        sort: Optional[List[tuple]] = None,
    ) -> List[User]:
        """
        Return at most `count` users after skipping `starting_from`.

        MongoDB treats limit(0) as unlimited, so a non-positive count
        short-circuits to an empty page.
        """
        if count <= 0:
            return []

        cursor = self._collection.find({})
        if sort:
            cursor = cursor.sort(sort)
        cursor = cursor.skip(starting_from).limit(count)

        docs = await cursor.to_list()
        return [User.from_document(doc) for doc in docs]

    async def count_users(self) -> int:
        """Count documents in the collection."""
        return await self._collection.count_documents({})

    async def insert_user(self, user: User) -> None:
        """Insert a user, writing the store-assigned _id back onto it."""
        result = await self._collection.insert_one(user.to_document())
        user.id = result.inserted_id
        self._log.bind("insert_user").debug(f"Inserted user {user.id}")

    async def delete_user_by_id(self, user_id: UserId) -> bool:
        """Delete one user by _id."""
        result = await self._collection.delete_one({"_id": to_object_id(user_id)})
        return result.deleted_count != 0

    async def delete_all_users(self) -> int:
        """Delete every user."""
        result = await self._collection.delete_many({})
        self._log.bind("delete_all_users").warning(f"Deleted {result.deleted_count} users")
        return result.deleted_count

    async def update_user(self, user_id: UserId, field_name: str, field_value: FieldValue) -> bool:
        """
        $set a single field on one user.

        A no-op update matches but does not modify, and reports False.
        """
        result = await self._collection.update_one(
            {"_id": to_object_id(user_id)},
            {"$set": {field_name: field_value}},
        )
        return result.modified_count != 0

    async def create_index_on_name_field(self) -> str:
        """Create an ascending index on the name field."""
        return await self.create_index_on_collection(self._collection, "name")

    async def create_index_on_collection(self, collection: AsyncCollection, field_name: str) -> str:
        """
        Create an ascending index on field_name of the given collection.

        Creating an identical index again is a no-op on the server.

        Returns:
            Index name reported by the server (e.g., "name_1")
        """
        index_name = await collection.create_index([(field_name, ASCENDING)])
        self._log.bind("create_index").info(f"Index ready: {index_name}")
        return index_name


def sanitize_mongodb_uri(uri: str) -> str:
    """
    Hide password in MongoDB URI for safe logging.
    """
    if "@" not in uri or "://" not in uri:
        return uri

    protocol, rest = uri.split("://", 1)
    credentials, host = rest.rsplit("@", 1)
    if ":" in credentials:
        username = credentials.split(":", 1)[0]
        return f"{protocol}://{username}:***@{host}"
    return uri
