"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from json_query.cache.store import CacheStore
from json_query.core.config import Settings, get_settings
from json_query.service import JsonFileService

_CACHE: CacheStore | None = None
_SERVICE: JsonFileService | None = None


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def get_cache_store() -> CacheStore:
    global _CACHE
    if _CACHE is None:
        settings = get_app_settings()
        _CACHE = CacheStore(
            ttl=settings.cache_ttl,
            max_size=settings.max_cache_size,
            check_period=settings.effective_check_period,
        )
    return _CACHE


def get_file_service() -> JsonFileService:
    global _SERVICE
    if _SERVICE is None:
        _SERVICE = JsonFileService(settings=get_app_settings(), cache=get_cache_store())
    return _SERVICE


def shutdown_cache() -> None:
    """Release the process-wide cache."""
    global _CACHE, _SERVICE
    if _CACHE is not None:
        _CACHE.clear_all()
    _CACHE = None
    _SERVICE = None


__all__ = [
    "get_app_settings",
    "get_cache_store",
    "get_file_service",
    "shutdown_cache",
]
