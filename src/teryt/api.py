"""
FastAPI application exposing street and locality autocomplete.
"""

import time
import logging
from contextlib import asynccontextmanager
from importlib.resources import files
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from .autocomplete import AutocompleteService
from .config import get_config
from .logger import get_logger
from .schemas import (
    CityOut,
    CitySearchResponse,
    HealthResponse,
    MunicipalityOut,
    StreetGmiResponse,
    StreetOut,
    StreetSearchResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_service(request: Request) -> AutocompleteService:
    return request.app.state.service


def _elapsed(start_time: float) -> str:
    return f"{(time.perf_counter() - start_time) * 1000:.3f}ms"


def _load_index_page() -> str:
    page = files("teryt").joinpath("static", "index.html")
    return page.read_text(encoding="utf-8")


@router.get("/", response_class=HTMLResponse)
def index() -> HTMLResponse:
    """Demo page with a street search box and the endpoint list."""
    return HTMLResponse(content=_load_index_page())


@router.get("/streets", response_model=StreetSearchResponse)
def search_streets(
    q: str = Query("", description="Street name fragment"),
    limit: int = Query(10, ge=1, le=100, description="Maximum number of results"),
    service: AutocompleteService = Depends(get_service),
) -> StreetSearchResponse:
    """
    Search streets by main name (prefix or substring, case-insensitive).
    An empty query returns no results.
    """
    start_time = time.perf_counter()
    streets = service.search_streets(q, limit)
    return StreetSearchResponse(
        query=q,
        results=[StreetOut.from_record(street) for street in streets],
        count=len(streets),
        time=_elapsed(start_time),
    )


@router.get("/streets/gmi", response_model=StreetGmiResponse)
def street_gmi(
    name: str = Query("", description="Exact street name (NAZWA_1)"),
    service: AutocompleteService = Depends(get_service),
) -> StreetGmiResponse:
    """List the municipalities (woj, pow, gmi) that have a street with exactly this name."""
    start_time = time.perf_counter()
    if not name.strip():
        raise HTTPException(status_code=400, detail="missing 'name' parameter")

    codes = service.gmi_for_street(name)
    return StreetGmiResponse(
        street_name=name,
        results=[MunicipalityOut.from_code(code) for code in codes],
        count=len(codes),
        time=_elapsed(start_time),
    )


@router.get("/cities", response_model=CitySearchResponse)
def search_cities(
    q: str = Query("", description="Locality name fragment, empty matches all"),
    woj: int = Query(0, ge=0, description="Voivodeship code, 0 for any"),
    pow: int = Query(0, ge=0, description="County code, 0 for any"),
    gmi: int = Query(0, ge=0, description="Municipality code, 0 for any"),
    limit: int = Query(10, ge=1, le=100, description="Maximum number of results"),
    service: AutocompleteService = Depends(get_service),
) -> CitySearchResponse:
    """Search localities by name within an optional administrative unit."""
    start_time = time.perf_counter()
    cities = service.search_cities(q, woj, pow, gmi, limit)

    filters = {key: value for key, value in (("woj", woj), ("pow", pow), ("gmi", gmi)) if value > 0}
    return CitySearchResponse(
        query=q,
        filters=filters,
        results=[CityOut.from_record(city) for city in cities],
        count=len(cities),
        time=_elapsed(start_time),
    )


@router.get("/health", response_model=HealthResponse)
def health_check(service: AutocompleteService = Depends(get_service)) -> HealthResponse:
    stats = service.get_stats()
    return HealthResponse(
        status="ok" if stats["loaded"] else "loading",
        streets=stats["total_streets"],
        cities=stats["total_cities"],
    )


@router.get("/api/stats")
def get_stats(service: AutocompleteService = Depends(get_service)) -> Dict[str, Any]:
    return {
        "service": "teryt_autocomplete",
        "stats": service.get_stats(),
    }


def create_app(service: Optional[AutocompleteService] = None) -> FastAPI:
    """
    Build the API around an autocomplete service.

    If the service has no data yet, both datasets are loaded from the
    TERYT_STREETS_FILE and TERYT_CITIES_FILE settings on startup. A missing
    or unreadable file aborts startup.
    """
    service = service if service is not None else AutocompleteService()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        get_logger("teryt")
        if not service.loaded:
            try:
                logger.info("Starting up autocomplete service...")
                service.load_streets(get_config("TERYT_STREETS_FILE"))
                service.load_cities(get_config("TERYT_CITIES_FILE"))
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load autocomplete datasets: {e}")
                raise
        logger.info("Autocomplete service ready!")
        yield

    app = FastAPI(
        title="TERYT Autocomplete API",
        description="Street and locality autocomplete over the TERYT ULIC and SIMC registries",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app
