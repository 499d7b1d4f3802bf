"""
Database Keep Alive Connector: FastAPI application.

This is the entry point for the application. Settings, the
connection registry and all routers are wired here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from db_keepalive.config import Settings, get_settings
from db_keepalive.db.registry import ConnectionRegistry
from db_keepalive.errors import MethodNotAllowedError
from db_keepalive.logging_config import setup_logging
from db_keepalive.api.health import router as health_router
from db_keepalive.api.pages import router as pages_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[ConnectionRegistry] = None,
) -> FastAPI:
    """
    Build the application.

    Tests pass their own settings and registry; in production
    both come from the environment.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    if registry is None:
        registry = ConnectionRegistry(
            settings.connection_configs(),
            pool_pre_ping=settings.DB_POOL_PRE_PING,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting %s with connections: %s",
            settings.APP_NAME,
            ", ".join(registry.names) or "<none>",
        )
        yield
        registry.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Pings configured databases to keep them awake",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # Shared state for dependencies
    app.state.settings = settings
    app.state.registry = registry

    @app.exception_handler(MethodNotAllowedError)
    async def method_not_allowed_handler(request: Request, exc: MethodNotAllowedError):
        return JSONResponse(
            status_code=405,
            content={"message": str(exc)},
            headers={"Allow": "GET"},
        )

    # Register routers
    app.include_router(health_router)
    app.include_router(pages_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "db_keepalive.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
