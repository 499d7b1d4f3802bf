"""Business logic services."""

from db_keepalive.services.health_service import HealthService

__all__ = ["HealthService"]
