"""
Application configuration.

All configuration is loaded from environment variables.
Connection strings are secrets: they are read here and
never written to logs.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

from db_keepalive.db.registry import ConnectionConfig

# Load .env file into environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Database Keep Alive Connector"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Databases, one connection string per logical connection name
    SUPABASE_CONNECTION_STRING: str = os.getenv("SUPABASE_CONNECTION_STRING", "")
    DATABASE_URL_1: str = os.getenv("DATABASE_URL_1", "")

    # Health check
    LIVENESS_QUERY: str = os.getenv("LIVENESS_QUERY", "SELECT NOW()")
    DB_POOL_PRE_PING: bool = os.getenv("DB_POOL_PRE_PING", "true").lower() == "true"

    def connection_configs(self) -> list[ConnectionConfig]:
        """
        Return the declared connections, in reporting order.

        Every declared name is returned even when its connection
        string is empty, so a missing variable shows up as a
        failed check instead of silently disappearing.
        """
        return [
            ConnectionConfig("supabase", self.SUPABASE_CONNECTION_STRING),
            ConnectionConfig("database1", self.DATABASE_URL_1),
        ]


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    The Settings object is created once and reused for all
    subsequent calls.
    """
    return Settings()
