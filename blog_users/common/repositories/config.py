"""
Repository Configuration and Factory

Provides factory functions to get a shared users repository built from
environment configuration, and to release it at shutdown.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_SERVER_SELECTION_TIMEOUT_MS
from .base import UserRepositoryInterface

logger = logging.getLogger(__name__)


@dataclass
class RepositoryConfig:
    """
    Configuration for repository initialization.

    Loaded from environment variables with sensible defaults.
    """
    mongodb_uri: str

    # Database/collection names
    database: str = "blog"
    collection: str = "users"

    server_selection_timeout_ms: int = DEFAULT_SERVER_SELECTION_TIMEOUT_MS

    @classmethod
    def from_env(cls) -> "RepositoryConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - MONGODB_URI (required): MongoDB connection string
        - BLOG_DATABASE: Database name (default: blog)
        - USERS_COLLECTION: Collection name (default: users)
        - MONGODB_SERVER_SELECTION_TIMEOUT_MS: Server selection timeout

        Returns:
            RepositoryConfig instance

        Raises:
            ValueError: If MONGODB_URI is not set
        """
        mongodb_uri = os.getenv("MONGODB_URI")
        if not mongodb_uri:
            raise ValueError("MONGODB_URI environment variable is required")

        timeout_str = os.getenv("MONGODB_SERVER_SELECTION_TIMEOUT_MS")
        timeout_ms = DEFAULT_SERVER_SELECTION_TIMEOUT_MS
        if timeout_str:
            try:
                timeout_ms = int(timeout_str)
            except ValueError:
                logger.warning(
                    f"Invalid MONGODB_SERVER_SELECTION_TIMEOUT_MS '{timeout_str}', "
                    f"defaulting to {DEFAULT_SERVER_SELECTION_TIMEOUT_MS}"
                )

        return cls(
            mongodb_uri=mongodb_uri,
            database=os.getenv("BLOG_DATABASE") or "blog",
            collection=os.getenv("USERS_COLLECTION") or "users",
            server_selection_timeout_ms=timeout_ms,
        )


# Shared repository instance
_repository_instance: Optional[UserRepositoryInterface] = None


def get_user_repository() -> UserRepositoryInterface:
    """
    Get the shared users repository instance.

    Creates a MongoUserRepository on first call and reuses it afterwards,
    so all callers share one client connection pool. No network I/O
    happens here.

    Returns:
        UserRepositoryInterface implementation

    Raises:
        ValueError: If MongoDB URI is not configured
    """
    global _repository_instance

    if _repository_instance is None:
        config = RepositoryConfig.from_env()

        from .user_repository import MongoUserRepository
        _repository_instance = MongoUserRepository(
            mongodb_uri=config.mongodb_uri,
            database=config.database,
            collection=config.collection,
            server_selection_timeout_ms=config.server_selection_timeout_ms,
        )
        logger.info(f"Initialized users repository ({config.database}.{config.collection})")

    return _repository_instance


async def close_user_repository() -> None:
    """
    Close the shared repository's client and clear the instance.

    Call once at application shutdown.
    """
    global _repository_instance

    if _repository_instance is not None:
        from .user_repository import MongoUserRepository
        if isinstance(_repository_instance, MongoUserRepository):
            await _repository_instance.close()

    _repository_instance = None
    logger.info("Users repository closed")


def reset_user_repository() -> None:
    """
    Drop the shared instance without closing it.

    Used for testing or when configuration changes.
    """
    global _repository_instance
    _repository_instance = None
    logger.info("Users repository singleton reset")
