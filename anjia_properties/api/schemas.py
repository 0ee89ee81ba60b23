# anjia_properties/api/schemas.py

"""Request and response models for the cache admin endpoints."""

from typing import Any, Literal

from pydantic import BaseModel


class CacheClearRequest(BaseModel):
    cacheType: Literal["all", "property", "listing"] = "all"


class CacheClearResult(BaseModel):
    cacheType: str
    cleared: int


class CacheClearResponse(BaseModel):
    success: bool = True
    message: str
    result: CacheClearResult


class CacheStatsResponse(BaseModel):
    success: bool = True
    stats: dict[str, Any]
