"""
Error taxonomy for connection checks.

Everything except MethodNotAllowedError is caught inside the
health service and turned into a failed CheckResult.
"""


class KeepAliveError(Exception):
    """Base class for all errors raised by this service."""


class UnknownConnectionError(KeepAliveError):
    """The requested connection name is not configured."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid connection name: {name}")


class ConnectError(KeepAliveError):
    """A connection could not be obtained from the pool."""


class QueryError(KeepAliveError):
    """The liveness query failed after a connection was obtained."""


class MethodNotAllowedError(KeepAliveError):
    """The endpoint was called with an HTTP verb other than GET."""

    def __init__(self, method: str):
        self.method = method
        super().__init__("Method Not Allowed")
