"""
Routes for the OpenVerse site.

Pages render HTML through Jinja2; the /aral/rows and /aral/table fragments
are what htmx swaps in while the user types or picks a filter column.
The /api routes expose the same data as JSON.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from aral_table.columns import ARAL_COLUMNS
from aral_table.data_table import DataTable
from backend.app import templates
from models.config_models import Config
from models.data_models import Aral, validate_resources
from storage.resources import load_resources
from storage.supabase_client import ResourceFetchError, SupabaseClient
from utils.logger import setup_logger
from utils.stars import generate_stars

logger = setup_logger(name=__name__)

pages_router = APIRouter(tags=["pages"])
api_router = APIRouter(prefix="/api", tags=["resources"])

# Canvas the landing page star field is laid out on (SVG viewBox units)
STAR_FIELD_WIDTH = 1440
STAR_FIELD_HEIGHT = 900


def get_supabase(request: Request) -> SupabaseClient:
    return request.app.state.supabase


def get_config(request: Request) -> Config:
    return request.app.state.config


class ResourceListResponse(BaseModel):
    """Response model for the resource list endpoint."""
    resources: List[Dict[str, Any]]
    total: int
    visible: int
    column: str
    q: str


def build_table(request: Request, resources: List[Aral], column: Optional[str], q: str) -> DataTable:
    return DataTable(
        columns=ARAL_COLUMNS,
        rows=resources,
        filter_column=column,
        filter_value=q,
        rows_url=str(request.url_for("aral_rows").path),
        table_url=str(request.url_for("aral_table").path),
    )


@pages_router.get("/", response_class=HTMLResponse)
def home(request: Request):
    """Landing page with the star field and the way into Aral."""
    stars = generate_stars(STAR_FIELD_WIDTH, STAR_FIELD_HEIGHT)
    return templates.TemplateResponse(
        request,
        "home.html",
        {
            "stars": stars,
            "width": STAR_FIELD_WIDTH,
            "height": STAR_FIELD_HEIGHT,
        },
    )


@pages_router.get("/aral", response_class=HTMLResponse)
def aral_page(
    request: Request,
    column: Optional[str] = Query(None, description="Resource attribute to filter on"),
    q: str = Query("", description="Case-insensitive substring to match"),
    supabase: SupabaseClient = Depends(get_supabase),
    config: Config = Depends(get_config),
):
    """
    Aral resource listing.

    A failed fetch renders the page with an empty table ("No results.").
    """
    resources = load_resources(supabase, order_by=config.order_by)
    table = build_table(request, resources, column, q)
    return templates.TemplateResponse(request, "aral.html", {"table": table})


@pages_router.get("/aral/rows", response_class=HTMLResponse, name="aral_rows")
def aral_rows(
    request: Request,
    column: Optional[str] = Query(None),
    q: str = Query(""),
    supabase: SupabaseClient = Depends(get_supabase),
    config: Config = Depends(get_config),
):
    """Table body for the current filter, swapped in on every keystroke."""
    resources = load_resources(supabase, order_by=config.order_by)
    table = build_table(request, resources, column, q)
    logger.debug(f"Filtered rows: column={table.state.column} q={table.state.value!r} -> {len(table.visible_rows)}")
    return HTMLResponse(table.render_body())


@pages_router.get("/aral/table", response_class=HTMLResponse, name="aral_table")
def aral_table(
    request: Request,
    column: Optional[str] = Query(None),
    supabase: SupabaseClient = Depends(get_supabase),
    config: Config = Depends(get_config),
):
    """Whole table component for a newly selected column; the filter text starts empty."""
    resources = load_resources(supabase, order_by=config.order_by)
    table = build_table(request, resources, column, "")
    return HTMLResponse(table.render())


@api_router.get("/resources", response_model=ResourceListResponse)
def list_resources(
    column: Optional[str] = Query(None, description="Resource attribute to filter on"),
    q: str = Query("", description="Case-insensitive substring to match"),
    supabase: SupabaseClient = Depends(get_supabase),
    config: Config = Depends(get_config),
):
    """
    List resources, optionally filtered on one column.

    Returns:
    - resources: Visible resources in provider order
    - total: Number of valid resources before filtering
    - visible: Number of resources after filtering
    - column: The filter column actually applied
    - q: The filter text actually applied

    Raises:
    - 503: If resources cannot be fetched from Supabase
    """
    try:
        raw_rows = supabase.get_all_resources(order_by=config.order_by)
    except ResourceFetchError as e:
        raise HTTPException(status_code=503, detail=str(e))

    resources = validate_resources(raw_rows)
    table = DataTable(columns=ARAL_COLUMNS, rows=resources, filter_column=column, filter_value=q)
    visible = table.visible_rows

    logger.info(f"Listed {len(visible)} of {len(resources)} resources (column={table.state.column}, q={q!r})")

    return {
        "resources": [resource.model_dump() for resource in visible],
        "total": len(resources),
        "visible": len(visible),
        "column": table.state.column,
        "q": table.state.value,
    }


@api_router.get("/resources/{resource_id}")
def get_resource(resource_id: int, supabase: SupabaseClient = Depends(get_supabase)):
    """
    Get one resource by id.

    Raises:
    - 404: If the resource does not exist or fails validation
    - 503: If Supabase cannot be reached
    """
    try:
        raw = supabase.get_resource(resource_id)
    except ResourceFetchError as e:
        raise HTTPException(status_code=503, detail=str(e))

    resources = validate_resources([raw]) if raw else []
    if not resources:
        logger.warning(f"Resource not found: id={resource_id}")
        raise HTTPException(status_code=404, detail=f"Resource not found: {resource_id}")

    return resources[0].model_dump()


@api_router.get("/stats")
def resource_stats(supabase: SupabaseClient = Depends(get_supabase)):
    """Resource totals, overall and per category."""
    return supabase.get_resource_stats()


@pages_router.get("/health")
def health():
    return {"status": "ok"}
