"""
Shared test fixtures.

SQLite file databases stand in for Postgres so tests never need
a database server. A path inside a missing directory gives a
pool that fails to connect, and SlowEngine is a stand-in pool
with a fixed query latency for concurrency tests.
"""

import time
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from db_keepalive.config import Settings
from db_keepalive.db.registry import ConnectionConfig, ConnectionRegistry
from db_keepalive.main import create_app
from db_keepalive.services.health_service import HealthService

# SQLite has no NOW(); CURRENT_TIMESTAMP is the equivalent.
SQLITE_LIVENESS_QUERY = "SELECT CURRENT_TIMESTAMP"

FIXED_SERVER_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def sqlite_engine(url, **kwargs):
    # Probes run in worker threads, so pooled SQLite connections
    # must be usable from any thread.
    return create_engine(url, connect_args={"check_same_thread": False}, **kwargs)


class FakeResult:
    def __init__(self, row):
        self.row = row

    def first(self):
        return self.row


class SlowConnection:
    def __init__(self, engine):
        self.engine = engine

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.engine.released += 1
        return False

    def execute(self, statement):
        time.sleep(self.engine.delay)
        return FakeResult((FIXED_SERVER_TIME,))


class SlowEngine:
    """Pool stand-in whose query takes `delay` seconds."""

    def __init__(self, delay=0.0):
        self.delay = delay
        self.connects = 0
        self.released = 0
        self.disposed = False

    def connect(self):
        self.connects += 1
        return SlowConnection(self)

    def dispose(self):
        self.disposed = True


@pytest.fixture
def settings():
    """Settings with a liveness query SQLite understands."""
    settings = Settings()
    settings.LIVENESS_QUERY = SQLITE_LIVENESS_QUERY
    return settings


@pytest.fixture
def good_url(tmp_path):
    return f"sqlite:///{tmp_path / 'good.db'}"


@pytest.fixture
def bad_url(tmp_path):
    return f"sqlite:///{tmp_path / 'missing' / 'bad.db'}"


@pytest.fixture
def healthy_registry(good_url, tmp_path):
    registry = ConnectionRegistry([
        ConnectionConfig("supabase", good_url),
        ConnectionConfig("database1", f"sqlite:///{tmp_path / 'other.db'}"),
    ], engine_factory=sqlite_engine)
    yield registry
    registry.dispose()


@pytest.fixture
def mixed_registry(good_url, bad_url):
    registry = ConnectionRegistry([
        ConnectionConfig("supabase", good_url),
        ConnectionConfig("database1", bad_url),
    ], engine_factory=sqlite_engine)
    yield registry
    registry.dispose()


@pytest.fixture
def make_service(settings):
    """Build a HealthService over a given registry."""
    def _make(registry, liveness_query=None):
        return HealthService(
            registry,
            liveness_query=liveness_query or settings.LIVENESS_QUERY,
        )
    return _make


@pytest.fixture
def make_client(settings):
    """
    Build a test client around a given registry.

    The client is used as a context manager so the app's
    lifespan (startup log, pool disposal) runs as in production.
    """
    clients = []

    def _make(registry):
        client = TestClient(create_app(settings=settings, registry=registry))
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def slow_engine():
    """Factory for SlowEngine pool stand-ins."""
    return SlowEngine
