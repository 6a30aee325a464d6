"""Streaming query engine components."""

from .models import Query, RangeFilter, ResultPage, ScalarFilter, SetFilter, StructureSummary
from .source import RecordStream, open_records
from .predicates import matches, resolve_path
from .executor import QueryExecutor, sort_records
from .structure import sample_structure
from .parsing import parse_filter_value, parse_query_params

__all__ = [
    "Query",
    "RangeFilter",
    "ResultPage",
    "ScalarFilter",
    "SetFilter",
    "StructureSummary",
    "RecordStream",
    "open_records",
    "matches",
    "resolve_path",
    "QueryExecutor",
    "sort_records",
    "sample_structure",
    "parse_filter_value",
    "parse_query_params",
]
