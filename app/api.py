"""
FastAPI routes for the budget dashboard.
Thin HTTP layer over DashboardService; all figures are recomputed per request.
"""
import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import FileResponse, HTMLResponse, Response
from fastapi.templating import Jinja2Templates

from core.config import get_settings
from core.exceptions import (
    BudgetDashboardException,
    DataNotFoundError,
    ExportError,
    LedgerFormatError,
    LedgerLoadError,
)
from core.logger import setup_logger
from core.numbers import format_eur
from services.dashboard_service import DashboardService, DashboardSession

logger = setup_logger(__name__)
settings = get_settings()

# Initialize FastAPI app
app = FastAPI(
    title="Budget Dashboard",
    description="Expense and income totals per account group from a JSON ledger",
    version="1.0.0"
)

# Setup templates
templates_dir = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))
templates.env.filters["eur"] = format_eur

# Single-user session state
session = DashboardSession()

# Service instance
dashboard_service = DashboardService()


def to_http_error(e: BudgetDashboardException) -> HTTPException:
    """Map a boundary error to an HTTP error response."""
    if isinstance(e, DataNotFoundError):
        status_code = 404
    elif isinstance(e, LedgerFormatError):
        status_code = 422
    elif isinstance(e, LedgerLoadError):
        status_code = 502
    else:
        status_code = 500
    return HTTPException(status_code=status_code, detail={"error": e.message, "details": e.details})


async def load_session() -> Dict[str, Any]:
    """Read the ledger into the session without blocking the event loop."""
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, dashboard_service.load, session)


async def ensure_loaded() -> DashboardSession:
    """Load the configured ledger on first use."""
    if not session.loaded:
        try:
            await load_session()
        except BudgetDashboardException as e:
            logger.error(f"Failed to load ledger: {e.message} {e.details}")
            raise to_http_error(e)
    return session


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Render the dashboard page."""
    view = dashboard_service.build_view(await ensure_loaded())
    return templates.TemplateResponse(request, "index.html", {"view": view, "title": settings.app_name})


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "budget_dashboard",
        "version": "1.0.0",
        "ledger_loaded": session.loaded,
    }


@app.get("/favicon.ico")
async def favicon():
    """Return empty response for favicon to avoid 404 errors."""
    return Response(status_code=204)


@app.get("/api/options")
async def get_options():
    """Filter option lists for the current selection."""
    view = dashboard_service.build_view(await ensure_loaded())
    return {"selection": view["selection"], "options": view["options"]}


@app.get("/api/dashboard")
async def get_dashboard(
    year: Optional[str] = None,
    group_level1: Optional[str] = None,
    group: List[str] = Query(default=[]),
):
    """
    Apply a filter selection and return the recomputed dashboard.

    Args:
        year: Year to show; omitted means all years
        group_level1: Super-group; omitted means all super-groups
        group: Organizational groups (repeatable); none means all

    Returns:
        Overview, aggregates, drill-down detail and chart series
    """
    current = await ensure_loaded()
    dashboard_service.select(current, year=year, group_level1=group_level1, groups=group)
    return dashboard_service.build_view(current)


@app.post("/api/account-groups/{account_group:path}/toggle")
async def toggle_account_group(account_group: str):
    """Expand or collapse the per-account detail of an account group."""
    current = await ensure_loaded()
    dashboard_service.toggle_account_group(current, account_group)
    return dashboard_service.build_view(current)


@app.post("/api/reload")
async def reload_ledger():
    """Re-read the ledger source and reset the filters."""
    try:
        stats = await load_session()
    except BudgetDashboardException as e:
        logger.error(f"Reload failed: {e.message} {e.details}")
        raise to_http_error(e)
    return {"status": "reloaded", "source": session.source, "stats": stats}


@app.get("/api/export")
async def export_dashboard():
    """Download the current view as an Excel workbook."""
    current = await ensure_loaded()
    try:
        loop = asyncio.get_event_loop()
        output_path = await loop.run_in_executor(None, dashboard_service.export, current)
    except ExportError as e:
        raise to_http_error(e)

    return FileResponse(
        path=output_path,
        filename=Path(output_path).name,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
