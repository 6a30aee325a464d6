"""Value objects flowing through the query engine."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping, Union

from json_query.utils.text import canonical_json

SortOrder = Literal["asc", "desc"]

RANGE_OPERATORS = ("gt", "gte", "lt", "lte", "ne")


@dataclass(frozen=True, slots=True)
class ScalarFilter:
    """Equality after coercing both sides to text."""

    value: str

    def to_param(self) -> Any:
        return self.value


@dataclass(frozen=True, slots=True)
class SetFilter:
    """Membership test against an exact set of values."""

    values: tuple[Any, ...]

    def to_param(self) -> Any:
        return list(self.values)


@dataclass(frozen=True, slots=True)
class RangeFilter:
    """Comparison operators; every operator present must hold."""

    operators: tuple[tuple[str, Any], ...]

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "RangeFilter":
        return cls(operators=tuple((op, raw[op]) for op in RANGE_OPERATORS if op in raw))

    def get(self, operator: str, default: Any = None) -> Any:
        for name, value in self.operators:
            if name == operator:
                return value
        return default

    def to_param(self) -> Any:
        return dict(self.operators)


FilterValue = Union[ScalarFilter, SetFilter, RangeFilter]


@dataclass(frozen=True)
class Query:
    """Filter, search, sort and pagination parameters for one request."""

    filters: Mapping[str, FilterValue] = field(default_factory=dict)
    search: str | None = None
    search_fields: tuple[str, ...] = ()
    sort_by: str | None = None
    sort_order: SortOrder = "asc"
    page: int = 1
    limit: int = 100

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")
        if self.sort_order not in ("asc", "desc"):
            raise ValueError("sort_order must be 'asc' or 'desc'")
        # filters stay read-only once the query exists
        object.__setattr__(self, "filters", MappingProxyType(dict(self.filters)))

    def __hash__(self) -> int:
        return hash(canonical_json(self.cache_params()))

    def cache_params(self) -> dict[str, Any]:
        """Every query parameter, keyed by its external name."""
        return {
            "filters": {key: value.to_param() for key, value in self.filters.items()},
            "sortBy": self.sort_by,
            "sortOrder": self.sort_order,
            "page": self.page,
            "limit": self.limit,
            "search": self.search,
            "searchFields": list(self.search_fields),
        }


@dataclass(slots=True)
class ResultPage:
    data: list[Any]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def paginate(cls, matches: list[Any], page: int, limit: int) -> "ResultPage":
        start = (page - 1) * limit
        return cls(
            data=matches[start : start + limit],
            total=len(matches),
            page=page,
            limit=limit,
            total_pages=math.ceil(len(matches) / limit),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": self.data,
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }


@dataclass(slots=True)
class StructureSummary:
    root_element_type: str | None
    fields: list[str]
    sample: Any
    count: int
    type: str = "array"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "rootElementType": self.root_element_type,
            "fields": self.fields,
            "sample": self.sample,
            "count": self.count,
        }


__all__ = [
    "FilterValue",
    "Query",
    "RANGE_OPERATORS",
    "RangeFilter",
    "ResultPage",
    "ScalarFilter",
    "SetFilter",
    "SortOrder",
    "StructureSummary",
]
