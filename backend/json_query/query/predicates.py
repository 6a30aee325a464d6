"""Per-record filter and search matching."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from json_query.query.models import FilterValue, Query, RangeFilter, ScalarFilter, SetFilter
from json_query.utils.text import MISSING, is_number, to_text

_COMPARATORS: Mapping[str, Callable[[int], bool]] = {
    "gt": lambda cmp: cmp > 0,
    "gte": lambda cmp: cmp >= 0,
    "lt": lambda cmp: cmp < 0,
    "lte": lambda cmp: cmp <= 0,
}


def resolve_path(record: Any, path: str) -> Any:
    """Walk ``a.b.c`` through nested objects; MISSING when any step fails."""
    current = record
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return MISSING
        current = current[part]
    return current


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without coercion: booleans never equal numbers."""
    if left is MISSING or right is MISSING:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    return type(left) is type(right) and left == right


def compare_values(left: Any, right: Any) -> int:
    """Order two present values: numerically when both are numbers, else by text."""
    if is_number(left) and is_number(right):
        return (left > right) - (left < right)
    left_text, right_text = to_text(left), to_text(right)
    return (left_text > right_text) - (left_text < right_text)


def _matches_range(value: Any, condition: RangeFilter) -> bool:
    for operator, bound in condition.operators:
        if operator == "ne":
            if strict_equals(value, bound):
                return False
            continue
        if value is MISSING or value is None or bound is None:
            return False
        if not _COMPARATORS[operator](compare_values(value, bound)):
            return False
    return True


def matches_filter(value: Any, condition: FilterValue) -> bool:
    if isinstance(condition, ScalarFilter):
        return value is not MISSING and to_text(value) == condition.value
    if isinstance(condition, SetFilter):
        return any(strict_equals(value, candidate) for candidate in condition.values)
    if isinstance(condition, RangeFilter):
        return _matches_range(value, condition)
    raise TypeError(f"Unsupported filter type: {type(condition).__name__}")


def is_blank(condition: FilterValue | None) -> bool:
    """Blank filters impose no constraint."""
    return condition is None or (isinstance(condition, ScalarFilter) and condition.value == "")


def matches_filters(record: Any, filters: Mapping[str, FilterValue | None]) -> bool:
    """True when every non-blank filter passes for ``record``."""
    for path, condition in filters.items():
        if is_blank(condition):
            continue
        if not matches_filter(resolve_path(record, path), condition):
            return False
    return True


def matches_search(record: Any, search: str | None, search_fields: Sequence[str] = ()) -> bool:
    """Case-insensitive substring search over string-valued fields."""
    if not search or not search.strip():
        return True
    if not isinstance(record, dict):
        return False
    needle = search.lower()
    if search_fields:
        candidates = (resolve_path(record, field) for field in search_fields)
    else:
        candidates = iter(record.values())
    return any(isinstance(value, str) and needle in value.lower() for value in candidates)


def matches(record: Any, query: Query) -> bool:
    return matches_filters(record, query.filters) and matches_search(record, query.search, query.search_fields)


__all__ = [
    "compare_values",
    "is_blank",
    "matches",
    "matches_filter",
    "matches_filters",
    "matches_search",
    "resolve_path",
    "strict_equals",
]
