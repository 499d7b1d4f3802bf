"""
Database connection test endpoint.

Hit on a schedule to keep idle hosted databases awake, and by
humans to see which connection is down. The API layer is thin:
it picks the status code and delegates the checks to
HealthService.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from db_keepalive.api.deps import get_health_service
from db_keepalive.errors import MethodNotAllowedError
from db_keepalive.schemas.health import ConnectionsResponse, ErrorResponse
from db_keepalive.services.health_service import HealthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])


@router.get(
    "/test-db-connection",
    response_model=ConnectionsResponse,
    response_model_exclude_none=True,
    responses={
        207: {"model": ConnectionsResponse, "description": "Some connections failed"},
        500: {"model": ErrorResponse, "description": "Checks could not run"},
    },
)
async def test_db_connection(
    response: Response,
    service: HealthService = Depends(get_health_service),
):
    """
    Ping every configured database and report the results.

    Returns 200 when every connection answered, 207 when at
    least one failed. Individual failures are reported in the
    body, never raised.
    """
    try:
        report = await service.check_all()
    except Exception as e:
        logger.exception("Database connection test failed")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                message="Failed to test database connections.",
                error=str(e),
            ).model_dump(),
        )

    response.status_code = 200 if report.all_successful else 207
    return ConnectionsResponse.from_report(report)


@router.api_route(
    "/test-db-connection",
    methods=["POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD", "TRACE"],
    include_in_schema=False,
)
def reject_test_db_connection(request: Request):
    raise MethodNotAllowedError(request.method)
