"""Cache management routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from json_query.api.dependencies import get_file_service
from json_query.core.metrics import metrics_response
from json_query.files import normalize_file_name
from json_query.models.dto import CacheClearResponse, CacheStatsInfo, CacheStatsResponse
from json_query.service import JsonFileService

router = APIRouter()
metrics_router = APIRouter()


@router.post("/clear", response_model=CacheClearResponse, summary="Clear all cached query results")
def clear_all(service: JsonFileService = Depends(get_file_service)) -> CacheClearResponse:
    cleared = service.clear_cache()
    return CacheClearResponse(message="All cache cleared", entries_cleared=cleared)


@router.post(
    "/clear/{file_name}",
    response_model=CacheClearResponse,
    summary="Clear cached query results for one file",
)
def clear_file(file_name: str, service: JsonFileService = Depends(get_file_service)) -> CacheClearResponse:
    name = normalize_file_name(file_name)
    cleared = service.clear_cache(name)
    return CacheClearResponse(message=f"Cache cleared for file: {name}", entries_cleared=cleared)


@router.get("/stats", response_model=CacheStatsResponse, summary="Cache counters")
def cache_stats(service: JsonFileService = Depends(get_file_service)) -> CacheStatsResponse:
    stats = service.cache_stats()
    return CacheStatsResponse(stats=CacheStatsInfo(**stats.to_dict()))


@metrics_router.get("/metrics", summary="Prometheus metrics")
async def get_metrics():
    return metrics_response()


__all__ = ["metrics_router", "router"]
