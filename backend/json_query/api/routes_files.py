"""File query API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from json_query.api.dependencies import get_app_settings, get_file_service
from json_query.core.config import Settings
from json_query.models.dto import (
    ErrorResponse,
    FileListResponse,
    QueryResponse,
    StructureInfo,
    StructureResponse,
)
from json_query.query.parsing import parse_query_params
from json_query.service import JsonFileService

router = APIRouter()

_ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.get("/files", response_model=FileListResponse, summary="List available JSON files")
def list_files(service: JsonFileService = Depends(get_file_service)) -> FileListResponse:
    return FileListResponse(files=service.list_files())


@router.get(
    "/file/{file_name}",
    response_model=QueryResponse,
    responses=_ERRORS,
    summary="Filter, search, sort and paginate a JSON file",
    description="Any `filter.<field>` parameter filters on that (dot-path) field. "
    "Values like `[a,b]` match any listed value; `{\"gte\": 25}` applies comparison operators.",
)
def query_file(
    file_name: str,
    request: Request,
    page: int | None = Query(None, description="Page number, starting at 1"),
    limit: int | None = Query(None, description="Items per page"),
    sort_by: str | None = Query(None, alias="sortBy", description="Top-level field to sort by"),
    sort_order: str | None = Query(None, alias="sortOrder", description="asc or desc"),
    search: str | None = Query(None, description="Case-insensitive substring search"),
    search_fields: str | None = Query(None, alias="searchFields", description="Comma-separated fields to search in"),
    settings: Settings = Depends(get_app_settings),
    service: JsonFileService = Depends(get_file_service),
) -> QueryResponse:
    # Named parameters document the API; filter.* keys only exist in the raw query string.
    query = parse_query_params(
        request.query_params,
        default_limit=settings.default_limit,
        max_limit=settings.max_limit,
    )
    name, result = service.run_query(file_name, query)
    return QueryResponse(file=name, **result.to_dict())


@router.get(
    "/file/{file_name}/structure",
    response_model=StructureResponse,
    responses=_ERRORS,
    summary="Describe the structure of a JSON file",
)
def file_structure(
    file_name: str,
    service: JsonFileService = Depends(get_file_service),
) -> StructureResponse:
    name, summary = service.sample_structure(file_name)
    return StructureResponse(file=name, structure=StructureInfo(**summary.to_dict()))


__all__ = ["router"]
