"""
Tests for repository configuration and the shared-instance factory.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from blog_users.common.repositories import (
    UserRepositoryInterface,
    MongoUserRepository,
    RepositoryConfig,
    close_user_repository,
    get_user_repository,
    reset_user_repository,
)


class TestRepositoryConfig:
    """Tests for RepositoryConfig."""

    def test_config_from_env_minimal(self):
        """Should load minimal config from environment."""
        with patch.dict("os.environ", {"MONGODB_URI": "mongodb://localhost"}, clear=True):
            config = RepositoryConfig.from_env()

            assert config.mongodb_uri == "mongodb://localhost"
            assert config.database == "blog"
            assert config.collection == "users"
            assert config.server_selection_timeout_ms == 5000

    def test_config_from_env_overrides(self):
        """Should read namespace and timeout overrides."""
        env = {
            "MONGODB_URI": "mongodb://localhost",
            "BLOG_DATABASE": "blog_staging",
            "USERS_COLLECTION": "members",
            "MONGODB_SERVER_SELECTION_TIMEOUT_MS": "1500",
        }
        with patch.dict("os.environ", env, clear=True):
            config = RepositoryConfig.from_env()

            assert config.database == "blog_staging"
            assert config.collection == "members"
            assert config.server_selection_timeout_ms == 1500

    def test_config_from_env_missing_uri(self):
        """Should raise ValueError if MONGODB_URI is not set."""
        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(ValueError, match="MONGODB_URI"):
                RepositoryConfig.from_env()

    def test_config_from_env_empty_uri(self):
        """Should treat an empty MONGODB_URI as missing."""
        with patch.dict("os.environ", {"MONGODB_URI": ""}, clear=True):
            with pytest.raises(ValueError, match="MONGODB_URI"):
                RepositoryConfig.from_env()

    def test_invalid_timeout_defaults(self, caplog):
        """Should fall back to the default timeout and warn."""
        env = {
            "MONGODB_URI": "mongodb://localhost",
            "MONGODB_SERVER_SELECTION_TIMEOUT_MS": "soon",
        }
        with patch.dict("os.environ", env, clear=True):
            config = RepositoryConfig.from_env()

        assert config.server_selection_timeout_ms == 5000
        assert "Invalid MONGODB_SERVER_SELECTION_TIMEOUT_MS" in caplog.text


class TestGetUserRepository:
    """Tests for get_user_repository factory function."""

    @pytest.fixture(autouse=True)
    def reset_singleton(self):
        """Reset repository singleton before each test."""
        reset_user_repository()
        yield
        reset_user_repository()

    def test_returns_mongo_repository(self):
        """Should build a MongoUserRepository from the environment."""
        repo = get_user_repository()

        assert isinstance(repo, MongoUserRepository)
        assert repo.namespace == "blog.users"

    def test_returns_same_instance(self, mock_mongo_client):
        """Should share one repository and one client."""
        repo1 = get_user_repository()
        repo2 = get_user_repository()

        assert repo1 is repo2
        mock_mongo_client.assert_called_once()

    def test_raises_when_mongodb_uri_not_set(self, monkeypatch):
        """Should raise ValueError when MONGODB_URI is not configured."""
        monkeypatch.delenv("MONGODB_URI")

        with pytest.raises(ValueError, match="MONGODB_URI"):
            get_user_repository()

    def test_reset_clears_singleton(self):
        """Should create a new instance after reset."""
        repo1 = get_user_repository()
        reset_user_repository()
        repo2 = get_user_repository()

        assert repo1 is not repo2

    @pytest.mark.asyncio
    async def test_close_releases_client(self, mock_mongo_client):
        """Should close the shared client and forget the instance."""
        repo1 = get_user_repository()

        await close_user_repository()

        mock_mongo_client.return_value.close.assert_awaited_once()
        assert get_user_repository() is not repo1

    @pytest.mark.asyncio
    async def test_close_without_instance(self, mock_mongo_client):
        """Should be a no-op when nothing was created."""
        await close_user_repository()

        mock_mongo_client.return_value.close.assert_not_awaited()


class TestRepositoryInterface:
    """Tests for the contract the factory hands out."""

    def test_diagnostics_are_part_of_interface(self):
        """Callers of get_user_repository() may rely on the diagnostic members."""
        abstract = UserRepositoryInterface.__abstractmethods__

        for name in ("namespace", "get_connection_info", "check_connection_status", "count_users"):
            assert name in abstract

    @pytest.mark.asyncio
    async def test_interface_double_supports_diagnostics(self):
        """An autospecced double of the interface should accept the diagnostic calls."""
        double = MagicMock(spec=UserRepositoryInterface)
        double.count_users = AsyncMock(return_value=2)

        assert await double.count_users() == 2
        double.get_connection_info()
        double.get_connection_info.assert_called_once()
