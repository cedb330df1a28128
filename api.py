"""
FastAPI REST API for marketplace listings.

Read-only endpoints for babysitting jobs and sitter profiles with
query-string filtering, sorting, pagination and radius search.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from resource_query import ResourceOrchestrator
from resource_query.adapters.geocoding import MapQuestGeocoder
from resource_query.adapters.mongodb import MongoConnection
from resource_query.core.errors import GeocodingError, QueryParseError, RepositoryError
from resource_query.execution import ResultFormatter
from resource_query.logging_config import configure_logging
from resource_query.query import nest_query_params
from resource_query.resources import RESOURCES
from resource_query.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def build_geocoder(settings: Settings) -> Optional[MapQuestGeocoder]:
    if not settings.geocoder_api_key:
        logger.warning("GEOCODER_API_KEY not set; radius search is disabled")
        return None
    return MapQuestGeocoder(
        api_key=settings.geocoder_api_key,
        base_url=settings.geocoder_base_url,
        timeout=settings.geocoder_timeout,
    )


def build_orchestrators(
    settings: Settings,
    connection: MongoConnection,
    geocoder: Optional[MapQuestGeocoder] = None,
) -> Dict[str, ResourceOrchestrator]:
    """Create one orchestrator per configured resource."""
    return {
        name: ResourceOrchestrator.from_mongodb(
            resource,
            connection,
            geocoder=geocoder,
            default_radius_km=settings.default_radius_km,
        )
        for name, resource in RESOURCES.items()
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)

    connection = MongoConnection(settings.mongo_uri, settings.mongo_database).open()
    geocoder = build_geocoder(settings)
    app.state.orchestrators = build_orchestrators(settings, connection, geocoder)
    try:
        yield
    finally:
        if geocoder is not None:
            geocoder.close()
        connection.close()


app = FastAPI(
    title="Sitter Marketplace API",
    description="Search babysitting jobs and sitter profiles",
    version="1.0.0",
    lifespan=lifespan,
)


def get_orchestrator(request: Request, resource_name: str) -> ResourceOrchestrator:
    """Look up the orchestrator created at startup."""
    orchestrators = getattr(request.app.state, "orchestrators", {})
    if resource_name not in orchestrators:
        raise HTTPException(status_code=404, detail=f"Unknown resource '{resource_name}'")
    return orchestrators[resource_name]


@app.exception_handler(QueryParseError)
async def query_parse_error_handler(request: Request, exc: QueryParseError):
    logger.info("Rejected query %s: %s", request.url.query, exc)
    return JSONResponse(status_code=400, content=ResultFormatter.format_error(str(exc)))


@app.exception_handler(GeocodingError)
async def geocoding_error_handler(request: Request, exc: GeocodingError):
    logger.error("Geocoding failed for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content=ResultFormatter.format_error(str(exc)))


@app.exception_handler(RepositoryError)
async def repository_error_handler(request: Request, exc: RepositoryError):
    logger.error("Repository failure for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content=ResultFormatter.format_error("Server Error"))


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "API Running"


def _list_resource(request: Request, resource_name: str) -> Dict[str, Any]:
    orchestrator = get_orchestrator(request, resource_name)
    raw = nest_query_params(request.query_params.multi_items())
    return orchestrator.list(raw)


def _get_by_user(request: Request, resource_name: str, user_id: str):
    orchestrator = get_orchestrator(request, resource_name)
    record = orchestrator.get_by_user(user_id)
    if record is None:
        return JSONResponse(
            status_code=400,
            content={"msg": f"{orchestrator.resource.label} not found"},
        )
    return record


@app.get("/api/jobs")
def list_jobs(request: Request):
    """
    List babysitting jobs.

    Supports ``select``, ``sort``, ``page``, ``limit``, ``city``/``radius``
    and field filters such as ``hourlyRate[gte]=15``.
    """
    return _list_resource(request, "jobs")


@app.get("/api/jobs/user/{user_id}")
def get_job_by_user(request: Request, user_id: str):
    return _get_by_user(request, "jobs", user_id)


@app.get("/api/sitters")
def list_sitters(request: Request):
    """List sitter profiles with the same query parameters as jobs, minus radius search."""
    return _list_resource(request, "sitters")


@app.get("/api/sitters/user/{user_id}")
def get_sitter_by_user(request: Request, user_id: str):
    return _get_by_user(request, "sitters", user_id)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
