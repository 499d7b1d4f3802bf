"""
FastAPI dependency helpers for shared app state.
"""

from fastapi import Request

from db_keepalive.services.health_service import HealthService


def get_health_service(request: Request) -> HealthService:
    return HealthService(
        request.app.state.registry,
        liveness_query=request.app.state.settings.LIVENESS_QUERY,
    )
