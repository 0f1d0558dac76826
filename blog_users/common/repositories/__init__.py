"""
Repository Pattern for the Users Collection

Provides an asyncio abstraction layer over the `blog.users` MongoDB
collection.

Public API:
- get_user_repository(): Factory to get the shared repository instance
- close_user_repository(): Release the shared instance at shutdown
- MongoUserRepository: MongoDB implementation (construct directly to own the lifecycle)
- UserRepositoryInterface: Abstract interface for the users collection
- ConnectionStatus: Result dataclass of a connection health check

Usage:
    from blog_users.common.repositories import MongoUserRepository
    from blog_users.common.types import User

    async with MongoUserRepository("mongodb://127.0.0.1:27017") as repo:
        user = User(name="Nikola", age=30, blog="rubikscode.net", location="Beograd")
        await repo.insert_user(user)
        await repo.update_user(user.id, "blog", "Rubik's Code")
"""

from .base import ConnectionStatus, UserRepositoryInterface
from .user_repository import MongoUserRepository, sanitize_mongodb_uri
from .config import (
    get_user_repository,
    close_user_repository,
    reset_user_repository,
    RepositoryConfig,
)

__all__ = [
    "get_user_repository",
    "close_user_repository",
    "reset_user_repository",
    "MongoUserRepository",
    "UserRepositoryInterface",
    "ConnectionStatus",
    "RepositoryConfig",
    "sanitize_mongodb_uri",
]
