"""
Status page.

Renders the same checks as /api/test-db-connection as a small
HTML page, so a browser visit shows which database is up.
"""

from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from db_keepalive.api.deps import get_health_service
from db_keepalive.schemas.health import CheckResult, ConnectionsReport
from db_keepalive.services.health_service import HealthService

router = APIRouter(tags=["Pages"])

PAGE_TITLE = "Database Keep Alive Connector"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<div style="padding: 2rem; font-family: sans-serif">
<h1>{title}</h1>
<p>{status}</p>
<ul>
{rows}
</ul>
<p style="color: #666">Checked at {timestamp}</p>
</div>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
async def index(service: HealthService = Depends(get_health_service)):
    """Show the status of every configured connection."""
    report = await service.check_all()
    return HTMLResponse(render_status_page(report))


def render_status_page(report: ConnectionsReport) -> str:
    if report.all_successful:
        status = "All database connections successful!"
    else:
        status = "Some database connections failed."

    rows = "\n".join(_render_row(r) for r in report.results)
    return PAGE_TEMPLATE.format(
        title=escape(PAGE_TITLE),
        status=escape(status),
        rows=rows,
        timestamp=escape(report.timestamp.isoformat()),
    )


def _render_row(result: CheckResult) -> str:
    name = escape(result.connection_name)
    if result.success:
        return f"<li>{name}: connected, server time {escape(result.server_time)}</li>"
    return (
        f'<li style="color: red">{name}: connection failed. '
        f"Error: {escape(result.error)}</li>"
    )
