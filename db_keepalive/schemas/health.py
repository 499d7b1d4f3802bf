"""
Pydantic schemas for connection health checks.

Field names are snake_case in Python and camelCase on the wire,
which is the shape existing keep-alive clients already parse.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CheckResult(CamelModel):
    """
    Outcome of probing one named connection.

    Exactly one of server_time and error is set.
    """
    connection_name: str
    success: bool
    server_time: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def exactly_one_outcome(self) -> "CheckResult":
        if self.success and (self.server_time is None or self.error is not None):
            raise ValueError("successful check must carry server_time only")
        if not self.success and (self.error is None or self.server_time is not None):
            raise ValueError("failed check must carry error only")
        return self

    @classmethod
    def ok(cls, connection_name: str, server_time: str) -> "CheckResult":
        return cls(connection_name=connection_name, success=True, server_time=server_time)

    @classmethod
    def failed(cls, connection_name: str, error: str) -> "CheckResult":
        return cls(connection_name=connection_name, success=False, error=error)


class ConnectionsReport(CamelModel):
    """Aggregate of one check per configured connection."""
    all_successful: bool
    results: list[CheckResult]
    timestamp: datetime


class ConnectionsResponse(CamelModel):
    """Body of GET /api/test-db-connection."""
    message: str
    all_successful: bool
    connections: dict[str, CheckResult]
    timestamp: datetime

    @classmethod
    def from_report(cls, report: ConnectionsReport) -> "ConnectionsResponse":
        return cls(
            message=(
                "All database connections successful!"
                if report.all_successful
                else "Some database connections failed"
            ),
            all_successful=report.all_successful,
            connections={r.connection_name: r for r in report.results},
            timestamp=report.timestamp,
        )


class ErrorResponse(BaseModel):
    """Body returned when the check itself could not run."""
    message: str
    error: Optional[str] = None
