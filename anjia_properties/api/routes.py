# anjia_properties/api/routes.py

"""HTTP routes consumed by the property front end.

Data routes always answer 200 with the best record available; degraded
answers carry ``source`` and, when every source failed, an ``error`` note.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from anjia_properties.api.deps import get_pipeline
from anjia_properties.api.schemas import (
    CacheClearRequest,
    CacheClearResponse,
    CacheClearResult,
    CacheStatsResponse,
)
from anjia_properties.models.filter_set import FilterSet
from anjia_properties.services.resolution_pipeline import ResolutionPipeline
from anjia_properties.utils.parsing import parse_int_prefix

logger = logging.getLogger("anjia.api")

router = APIRouter(prefix="/api", tags=["properties"])

MISSING_ID_ERROR = "Property ID is required"


def _page_number(value: Any) -> int:
    page = parse_int_prefix(value)
    return page if page is not None and page >= 1 else 1


def _missing_id() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": MISSING_ID_ERROR})


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/properties-wp")
async def list_properties(
    request: Request,
    pipeline: ResolutionPipeline = Depends(get_pipeline),
) -> dict[str, Any]:
    """Filtered, paginated listing (query: page, location, minPrice, ...)."""
    params = request.query_params
    filters = FilterSet.from_params(params)
    page = _page_number(params.get("page"))
    result = await pipeline.resolve_listing(filters, page)
    return result.to_dict()


@router.get("/properties/latest")
async def latest_properties(
    pipeline: ResolutionPipeline = Depends(get_pipeline),
) -> dict[str, Any]:
    return (await pipeline.latest()).to_dict()


@router.get("/properties/featured")
async def featured_properties(
    pipeline: ResolutionPipeline = Depends(get_pipeline),
) -> dict[str, Any]:
    return (await pipeline.featured()).to_dict()


@router.get("/direct-property/")
def direct_property_without_id() -> JSONResponse:
    return _missing_id()


@router.get("/direct-property/{property_id}", response_model=None)
async def direct_property(
    property_id: str,
    pipeline: ResolutionPipeline = Depends(get_pipeline),
) -> dict[str, Any] | JSONResponse:
    """One property by id; never fails once an id is given."""
    property_id = property_id.strip()
    if not property_id:
        return _missing_id()
    resolution = await pipeline.resolve_property(property_id)
    return resolution.to_dict()


@router.get("/cache", response_model=CacheStatsResponse)
def cache_stats(
    pipeline: ResolutionPipeline = Depends(get_pipeline),
) -> CacheStatsResponse:
    return CacheStatsResponse(stats=pipeline.cache.stats())


@router.post("/cache", response_model=CacheClearResponse)
def clear_cache(
    payload: CacheClearRequest | None = None,
    pipeline: ResolutionPipeline = Depends(get_pipeline),
) -> CacheClearResponse:
    cache_type = (payload or CacheClearRequest()).cacheType
    cleared = pipeline.cache.clear(cache_type)
    logger.info("Cache cleared via API (%s): %d entries", cache_type, cleared)
    return CacheClearResponse(
        message=f"Successfully cleared {cleared} cached items",
        result=CacheClearResult(cacheType=cache_type, cleared=cleared),
    )
