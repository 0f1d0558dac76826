"""
Repository Interface Definitions

Defines the abstract interface for users collection operations.
This enables swapping implementations (MongoDB, in-memory test doubles)
without changing consumer code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..types import FieldValue, User, UserId


@dataclass
class ConnectionStatus:
    """
    Result of a connection health check.

    Attributes:
        ok: Whether the metadata round trip succeeded
        error: Message of the swallowed exception (None when ok)
        error_type: Class name of the swallowed exception (None when ok)
    """
    ok: bool
    error: Optional[str] = None
    error_type: Optional[str] = None


class UserRepositoryInterface(ABC):
    """
    Abstract interface for users collection operations.

    Implementations:
    - MongoUserRepository: asyncio MongoDB driver

    Every operation except check_connection propagates driver errors
    to the caller. "Not found" outcomes are reported through return
    values, never through exceptions.
    """

    @property
    @abstractmethod
    def namespace(self) -> str:
        """Full collection namespace, e.g. "blog.users"."""
        pass

    @abstractmethod
    def get_connection_info(self) -> Dict[str, Any]:
        """
        Describe the connection target for logs and diagnostics.

        Returns:
            Dict with status, credential-masked url, database and collection
        """
        pass

    @abstractmethod
    async def check_connection_status(self) -> ConnectionStatus:
        """
        Check reachability and keep the failure detail.

        Returns:
            ConnectionStatus; never raises
        """
        pass

    @abstractmethod
    async def check_connection(self) -> bool:
        """
        Check whether the database is reachable.

        Returns:
            True if a lightweight metadata call succeeds, False on any error
        """
        pass

    @abstractmethod
    async def get_all_users(self) -> List[User]:
        """Return every user in the collection, in the store's natural order."""
        pass

    @abstractmethod
    async def get_users_by_field(self, field_name: str, field_value: FieldValue) -> List[User]:
        """
        Return users whose field equals the given value.

        Args:
            field_name: Stored field key (e.g., "name", "age", "_id")
            field_value: Value compared by equality, without type coercion

        Returns:
            List of matching users (empty if none)
        """
        pass

    @abstractmethod
    async def get_users(
        self,
        starting_from: int,
        count: int,
        sort: Optional[List[tuple]] = None,
    ) -> List[User]:
        """
        Return one page of users.

        Args:
            starting_from: Number of documents to skip
            count: Maximum number of users to return
            sort: Optional (field, direction) tuples; natural order when None

        Returns:
            At most `count` users
        """
        pass

    @abstractmethod
    async def count_users(self) -> int:
        """Return the number of documents in the collection."""
        pass

    @abstractmethod
    async def insert_user(self, user: User) -> None:
        """
        Insert a single user.

        When `user.id` is unset the store assigns one, and it is written
        back onto the passed-in object.
        """
        pass

    @abstractmethod
    async def delete_user_by_id(self, user_id: UserId) -> bool:
        """
        Delete the user with the given identifier.

        Returns:
            True if a document was removed, False if none matched
        """
        pass

    @abstractmethod
    async def delete_all_users(self) -> int:
        """
        Remove every document from the collection.

        Returns:
            Number of deleted documents
        """
        pass

    @abstractmethod
    async def update_user(self, user_id: UserId, field_name: str, field_value: FieldValue) -> bool:
        """
        Set a single field on the user with the given identifier.

        Other fields are preserved.

        Returns:
            True only if a document matched AND was actually modified
        """
        pass

    @abstractmethod
    async def create_index_on_name_field(self) -> str:
        """Create an ascending index on `name`. Idempotent."""
        pass

    @abstractmethod
    async def create_index_on_collection(self, collection: Any, field_name: str) -> str:
        """Create an ascending single-field index on any collection. Idempotent."""
        pass
