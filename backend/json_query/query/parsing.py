"""Decode caller-supplied request parameters into a typed Query."""

from __future__ import annotations

from typing import Any, Mapping

import orjson

from json_query.core.errors import MalformedInput
from json_query.query.models import (
    RANGE_OPERATORS,
    FilterValue,
    Query,
    RangeFilter,
    ScalarFilter,
    SetFilter,
)

FILTER_PREFIX = "filter."
DEFAULT_LIMIT = 100
MAX_LIMIT = 1000


def parse_filter_value(raw: Any) -> FilterValue | None:
    """Classify a raw filter value as Scalar, Set or Range.

    Text starting with ``[`` or ``{`` is decoded as JSON; if decoding fails it
    stays a plain scalar. Empty values yield None.
    """
    value = raw
    if isinstance(raw, str):
        if raw == "":
            return None
        if raw.startswith(("[", "{")):
            try:
                value = orjson.loads(raw)
            except orjson.JSONDecodeError:
                return ScalarFilter(raw)
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return SetFilter(tuple(value))
    if isinstance(value, dict):
        unknown = sorted(set(value) - set(RANGE_OPERATORS))
        if unknown:
            raise MalformedInput(f"Unsupported filter operator(s): {', '.join(unknown)}")
        return RangeFilter.from_mapping(value)
    if isinstance(value, bool):
        return ScalarFilter("true" if value else "false")
    return ScalarFilter(str(value))


def _parse_positive_int(name: str, raw: Any, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedInput(f"{name} must be an integer") from exc
    if value < 1:
        raise MalformedInput(f"{name} must be at least 1")
    return value


def parse_query_params(
    params: Mapping[str, Any],
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> Query:
    """Build a Query from flat request parameters.

    ``filter.<dot.path>`` keys become filters; ``searchFields`` is a
    comma-separated list.
    """
    filters: dict[str, FilterValue] = {}
    for key, raw in params.items():
        if not key.startswith(FILTER_PREFIX):
            continue
        path = key[len(FILTER_PREFIX) :]
        if not path:
            raise MalformedInput("Filter parameter is missing a field name")
        condition = parse_filter_value(raw)
        if condition is not None:
            filters[path] = condition

    page = _parse_positive_int("page", params.get("page"), 1)
    limit = _parse_positive_int("limit", params.get("limit"), default_limit)
    if limit > max_limit:
        raise MalformedInput(f"limit must not exceed {max_limit}")

    sort_order = (params.get("sortOrder") or "asc").lower()
    if sort_order not in ("asc", "desc"):
        raise MalformedInput("sortOrder must be 'asc' or 'desc'")

    raw_fields = params.get("searchFields") or ""
    search_fields = tuple(field.strip() for field in raw_fields.split(",") if field.strip())

    return Query(
        filters=filters,
        search=params.get("search") or None,
        search_fields=search_fields,
        sort_by=params.get("sortBy") or None,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )


__all__ = ["FILTER_PREFIX", "parse_filter_value", "parse_query_params"]
