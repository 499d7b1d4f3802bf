"""Database connection pools."""

from db_keepalive.db.registry import ConnectionConfig, ConnectionRegistry

__all__ = ["ConnectionConfig", "ConnectionRegistry"]
