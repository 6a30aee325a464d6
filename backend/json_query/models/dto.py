"""Pydantic DTOs exposed via API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class FileListResponse(BaseModel):
    success: bool = True
    files: list[str]


class QueryResponse(BaseModel):
    success: bool = True
    file: str
    data: list[Any]
    total: int
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")

    model_config = {"populate_by_name": True}


class StructureInfo(BaseModel):
    type: str = "array"
    root_element_type: str | None = Field(default=None, alias="rootElementType")
    fields: list[str]
    sample: Any = None
    count: int

    model_config = {"populate_by_name": True}


class StructureResponse(BaseModel):
    success: bool = True
    file: str
    structure: StructureInfo


class CacheClearResponse(BaseModel):
    success: bool = True
    message: str
    entries_cleared: int = Field(alias="entriesCleared")

    model_config = {"populate_by_name": True}


class CacheStatsInfo(BaseModel):
    keys: int
    hits: int
    misses: int
    evictions: int


class CacheStatsResponse(BaseModel):
    success: bool = True
    stats: CacheStatsInfo


__all__ = [
    "ErrorResponse",
    "FileListResponse",
    "QueryResponse",
    "StructureInfo",
    "StructureResponse",
    "CacheClearResponse",
    "CacheStatsInfo",
    "CacheStatsResponse",
]
