"""
Connection registry: one SQLAlchemy engine per named connection.

The registry is built once when the application is created and
handed to request handlers through app.state. There is no
module-level pool dictionary.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from db_keepalive.errors import ConnectError, UnknownConnectionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionConfig:
    """A logical connection name and the URL its pool connects to."""
    name: str
    connection_string: str


class ConnectionRegistry:
    """
    Maps connection names to pooled engines.

    create_engine() does not open a connection, so building the
    registry never touches the network. A bad URL or an unreachable
    server is only discovered on first use, and is then reported
    by the health check like any other failure.
    """

    def __init__(
        self,
        configs: Iterable[ConnectionConfig],
        pool_pre_ping: bool = True,
        engine_factory: Callable[..., Engine] = create_engine,
    ):
        self._engines: dict[str, Optional[Engine]] = {}
        self._errors: dict[str, str] = {}

        for config in configs:
            if not config.connection_string:
                logger.warning(
                    "Connection '%s' has no connection string configured",
                    config.name,
                )
                self._engines[config.name] = None
                self._errors[config.name] = (
                    f"No connection string configured for '{config.name}'"
                )
                continue

            try:
                # pool_pre_ping tests a pooled connection before handing it
                # out, so a server restart shows up as one reconnect instead
                # of a failed check.
                engine = engine_factory(
                    config.connection_string,
                    pool_pre_ping=pool_pre_ping,
                )
            except Exception as e:
                logger.warning(
                    "Could not create pool for '%s': %s", config.name, e
                )
                self._engines[config.name] = None
                self._errors[config.name] = str(e)
                continue

            self._engines[config.name] = engine
            logger.info(
                "Registered connection '%s' -> %s",
                config.name,
                _safe_url(config.connection_string),
            )

    @classmethod
    def from_engines(cls, engines: dict[str, Engine]) -> "ConnectionRegistry":
        """Build a registry around engines that already exist."""
        registry = cls([])
        registry._engines.update(engines)
        return registry

    @property
    def names(self) -> list[str]:
        """Configured connection names, in declaration order."""
        return list(self._engines)

    def get_pool(self, name: str) -> Engine:
        """
        Return the engine registered under name.

        Raises UnknownConnectionError if the name was never
        configured, ConnectError if it was configured without
        a usable connection string.
        """
        if name not in self._engines:
            raise UnknownConnectionError(name)

        engine = self._engines[name]
        if engine is None:
            raise ConnectError(self._errors[name])
        return engine

    def dispose(self) -> None:
        """Close every pooled connection. Called on application shutdown."""
        for name, engine in self._engines.items():
            if engine is not None:
                engine.dispose()
                logger.debug("Disposed pool for '%s'", name)


def _safe_url(connection_string: str) -> str:
    return make_url(connection_string).render_as_string(hide_password=True)
