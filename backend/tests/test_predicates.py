"""Tests for per-record filter and search matching."""

from __future__ import annotations

import itertools

import pytest

from json_query.query.models import Query, RangeFilter, ScalarFilter, SetFilter
from json_query.query.predicates import (
    compare_values,
    matches,
    matches_filters,
    matches_search,
    resolve_path,
    strict_equals,
)
from json_query.utils.text import MISSING, to_text

from conftest import SAMPLE_RECORDS

JOHN = SAMPLE_RECORDS[0]


def _range(**operators) -> RangeFilter:
    return RangeFilter.from_mapping(operators)


def test_resolve_path_walks_nested_objects() -> None:
    assert resolve_path(JOHN, "address.country") == "USA"
    assert resolve_path(JOHN, "name") == "John"
    assert resolve_path(JOHN, "address.zip") is MISSING
    assert resolve_path(JOHN, "name.first") is MISSING
    assert resolve_path("scalar", "name") is MISSING


def test_scalar_filter_coerces_to_text() -> None:
    assert matches_filters(JOHN, {"age": ScalarFilter("30")})
    assert matches_filters(JOHN, {"status": ScalarFilter("active")})
    assert not matches_filters(JOHN, {"status": ScalarFilter("pending")})
    assert matches_filters({"flag": True}, {"flag": ScalarFilter("true")})
    assert matches_filters({"score": 2.0}, {"score": ScalarFilter("2")})
    assert matches_filters({"tags": ["admin"]}, {"tags": ScalarFilter("admin")})
    assert matches_filters({"tags": ["a", None, "b"]}, {"tags": ScalarFilter("a,,b")})
    assert matches_filters({"grid": [[1, 2], [3]]}, {"grid": ScalarFilter("1,2,3")})
    assert matches_filters({"meta": {"a": 1}}, {"meta": ScalarFilter("[object Object]")})
    assert not matches_filters({"meta": {"a": 1}}, {"meta": ScalarFilter('{"a":1}')})
    assert matches_filters({"big": 1e21}, {"big": ScalarFilter("1e+21")})


@pytest.mark.parametrize(
    "value,expected",
    [
        (1e21, "1e+21"),
        (123456789012345680000.0, "123456789012345680000"),
        (-2.5, "-2.5"),
        (0.000001, "0.000001"),
        (1e-7, "1e-7"),
        (1.5e-10, "1.5e-10"),
        (0.1, "0.1"),
        (10**21, "1e+21"),
        ([], ""),
        ([{"a": 1}, 2], "[object Object],2"),
    ],
)
def test_to_text_matches_javascript_string(value, expected) -> None:
    assert to_text(value) == expected


def test_missing_value_never_matches_scalar() -> None:
    assert not matches_filters(JOHN, {"nickname": ScalarFilter("undefined")})


def test_set_filter_requires_exact_member() -> None:
    assert matches_filters(JOHN, {"status": SetFilter(("active", "pending"))})
    assert not matches_filters(JOHN, {"age": SetFilter(("30",))})
    assert matches_filters(JOHN, {"age": SetFilter((30,))})
    assert not matches_filters({"flag": True}, {"flag": SetFilter((1,))})
    assert not matches_filters(JOHN, {"status": SetFilter(())})


def test_range_filter_all_operators_must_hold() -> None:
    assert matches_filters(JOHN, {"age": _range(gte=30, lt=31)})
    assert not matches_filters(JOHN, {"age": _range(gt=30)})
    assert matches_filters(JOHN, {"age": _range(lte=30, ne=25)})
    assert not matches_filters(JOHN, {"age": _range(ne=30)})
    assert matches_filters(JOHN, {"name": _range(gt="Ja")})
    assert matches_filters(JOHN, {"age": _range()})


def test_range_on_missing_value() -> None:
    assert not matches_filters(JOHN, {"height": _range(gt=1)})
    assert matches_filters(JOHN, {"height": _range(ne=1)})
    assert not matches_filters({"height": None}, {"height": _range(lte=1)})


def test_blank_filters_are_skipped() -> None:
    assert matches_filters(JOHN, {"status": ScalarFilter(""), "other": None})


def test_filter_order_is_irrelevant() -> None:
    filters = [
        ("status", ScalarFilter("active")),
        ("age", _range(gte=30)),
        ("address.country", SetFilter(("USA",))),
    ]
    expected = [record["id"] for record in SAMPLE_RECORDS if matches_filters(record, dict(filters))]
    assert expected == [1, 3]
    for ordering in itertools.permutations(filters):
        result = [record["id"] for record in SAMPLE_RECORDS if matches_filters(record, dict(ordering))]
        assert result == expected


def test_search_defaults_to_top_level_string_fields() -> None:
    assert matches_search(JOHN, "john")
    assert matches_search(JOHN, "ACT")
    assert not matches_search(JOHN, "usa")
    assert not matches_search(JOHN, "30")


def test_search_fields_use_dot_paths() -> None:
    assert matches_search(JOHN, "usa", ["address.country"])
    assert not matches_search(JOHN, "john", ["status"])


@pytest.mark.parametrize("search", [None, "", "   "])
def test_empty_search_matches_everything(search) -> None:
    assert matches_search(JOHN, search)
    assert matches_search(42, search)


def test_non_object_records_never_match_search() -> None:
    assert not matches_search("john", "john")


def test_matches_combines_filters_and_search() -> None:
    query = Query(filters={"status": ScalarFilter("active")}, search="john")
    assert [record["id"] for record in SAMPLE_RECORDS if matches(record, query)] == [1, 3]


def test_strict_equals_and_compare_values() -> None:
    assert strict_equals(1, 1.0)
    assert not strict_equals(True, 1)
    assert not strict_equals("1", 1)
    assert compare_values(2, 10) < 0
    assert compare_values("2", "10") > 0
    assert compare_values("b", "a") > 0
    assert compare_values(5, 5) == 0
