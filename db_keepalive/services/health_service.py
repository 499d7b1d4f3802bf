"""
Connection health service.

Probes each named pool with a cheap liveness query and reports
the result. A check never raises: every failure mode (unknown
name, unreachable server, bad query) comes back as a failed
CheckResult naming the connection and the reason.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from db_keepalive.db.registry import ConnectionRegistry
from db_keepalive.errors import ConnectError, QueryError
from db_keepalive.schemas.health import CheckResult, ConnectionsReport

logger = logging.getLogger(__name__)

DEFAULT_LIVENESS_QUERY = "SELECT NOW()"


class HealthService:
    """
    Runs liveness checks against the pools in a registry.

    SQLAlchemy engines are synchronous, so each probe runs in a
    worker thread. That lets several checks wait on the network
    at the same time without blocking the event loop.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        liveness_query: str = DEFAULT_LIVENESS_QUERY,
    ):
        self.registry = registry
        self.liveness_query = liveness_query

    async def check_connection(self, name: str) -> CheckResult:
        """Probe one connection. Never raises."""
        try:
            server_time = await asyncio.to_thread(self._probe, name)
        except Exception as e:
            message = str(e) or e.__class__.__name__
            logger.warning("Connection check failed for '%s': %s", name, message)
            return CheckResult.failed(name, message)

        logger.debug("Connection '%s' is alive, server time %s", name, server_time)
        return CheckResult.ok(name, server_time)

    async def check_all(
        self, names: Optional[Iterable[str]] = None
    ) -> ConnectionsReport:
        """
        Probe every configured connection concurrently.

        Waits for all checks to finish; results keep the order
        of the configured names.
        """
        names = list(names) if names is not None else self.registry.names
        results = await asyncio.gather(
            *(self.check_connection(name) for name in names)
        )

        all_successful = all(r.success for r in results)
        logger.info(
            "Checked %d connection(s): %d ok, %d failed",
            len(results),
            sum(1 for r in results if r.success),
            sum(1 for r in results if not r.success),
        )
        return ConnectionsReport(
            all_successful=all_successful,
            results=list(results),
            timestamp=datetime.now(timezone.utc),
        )

    def _probe(self, name: str) -> str:
        engine = self.registry.get_pool(name)

        try:
            connection = engine.connect()
        except SQLAlchemyError as e:
            raise ConnectError(_describe(e)) from e

        # Leaving the block returns the connection to the pool,
        # whether the query succeeded or not.
        with connection:
            try:
                row = connection.execute(text(self.liveness_query)).first()
            except SQLAlchemyError as e:
                raise QueryError(_describe(e)) from e

        if row is None:
            raise QueryError("Liveness query returned no rows")
        return _format_server_time(row[0])


def _describe(error: SQLAlchemyError) -> str:
    # Prefer the driver's message; SQLAlchemy's own str() appends
    # the statement and a documentation link.
    orig = getattr(error, "orig", None)
    return str(orig if orig is not None else error).strip()


def _format_server_time(value) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)
