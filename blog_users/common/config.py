"""
Configuration loader for the blog users data-access layer.

Loads all settings from environment variables (.env file).
Validates required settings and provides type-safe access.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


DEFAULT_MONGODB_URI = "mongodb://127.0.0.1:27017"
DEFAULT_SERVER_SELECTION_TIMEOUT_MS = 5000


def _int_env(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to default on bad input."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Config:
    """
    Centralized configuration for the users repository.

    All values loaded from environment variables - NO SECRETS IN CODE.
    """

    # ===== MongoDB =====
    MONGODB_URI: str = os.getenv("MONGODB_URI", DEFAULT_MONGODB_URI)
    BLOG_DATABASE: str = os.getenv("BLOG_DATABASE", "blog")
    USERS_COLLECTION: str = os.getenv("USERS_COLLECTION", "users")

    # Bounds how long health checks wait on an unreachable server
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = _int_env(
        "MONGODB_SERVER_SELECTION_TIMEOUT_MS", DEFAULT_SERVER_SELECTION_TIMEOUT_MS
    )

    # ===== Logging =====
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "simple")  # simple | json
    DEBUG_MODE: bool = os.getenv("DEBUG_MODE", "false").lower() == "true"

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required configuration is present.
        Raises ValueError if critical settings are missing.
        """
        required_settings = {
            "MONGODB_URI": cls.MONGODB_URI,
            "BLOG_DATABASE": cls.BLOG_DATABASE,
            "USERS_COLLECTION": cls.USERS_COLLECTION,
        }

        missing = [name for name, value in required_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required configuration: {', '.join(missing)}. "
                f"Please check your .env file."
            )

        if cls.LOG_FORMAT not in ("simple", "json"):
            raise ValueError(
                f"LOG_FORMAT must be 'simple' or 'json', got '{cls.LOG_FORMAT}'"
            )

    @classmethod
    def summary(cls) -> str:
        """Return a summary of the current configuration (safe for logging)."""
        return f"""
Configuration Summary:
  MongoDB: {'✓ Configured' if cls.MONGODB_URI else '✗ Missing'}
  Namespace: {cls.BLOG_DATABASE}.{cls.USERS_COLLECTION}
  Server selection timeout: {cls.MONGODB_SERVER_SELECTION_TIMEOUT_MS}ms
  Logging: {cls.LOG_LEVEL} ({cls.LOG_FORMAT}){' [debug]' if cls.DEBUG_MODE else ''}
"""
