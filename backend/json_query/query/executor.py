"""Scan, filter, sort and paginate JSON array files with result caching."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Callable

from json_query.cache.keys import build_cache_key
from json_query.cache.store import CacheStore
from json_query.core.errors import RecordSourceError
from json_query.core.logging import get_logger, log_context
from json_query.core.metrics import CACHE_HITS, CACHE_MISSES, RECORDS_SCANNED, SCAN_DURATION
from json_query.query.models import Query, ResultPage, SortOrder
from json_query.query.predicates import matches
from json_query.query.source import RecordStream, open_records
from json_query.utils.text import is_number, to_text

logger = get_logger(__name__)


def _sort_key(record: Any, field: str) -> tuple:
    value = record.get(field) if isinstance(record, dict) else None
    if value is None:
        return (2,)
    if is_number(value):
        return (0, value)
    return (1, to_text(value))


def sort_records(records: list[Any], sort_by: str, sort_order: SortOrder = "asc") -> list[Any]:
    """Stable sort on a top-level field.

    Numbers order before every other value, which compare by their text
    form. Records without the field (or with null) order after all others in
    ascending order and before them in descending order. Ties keep file
    order either way.
    """
    return sorted(records, key=lambda record: _sort_key(record, sort_by), reverse=sort_order == "desc")


class QueryExecutor:
    """Runs one query end-to-end: cache lookup, scan, sort, paginate, store.

    Entries are cached per page and never checked against the file again;
    clear the cache for a file after it changes.
    """

    def __init__(
        self,
        cache: CacheStore,
        opener: Callable[[Path], RecordStream] = open_records,
    ) -> None:
        self.cache = cache
        self.opener = opener

    def run(self, file_name: str, path: Path, query: Query) -> ResultPage:
        cache_key = build_cache_key(file_name, query.cache_params())
        cached = self.cache.get(cache_key)
        if cached is not None:
            CACHE_HITS.inc()
            logger.debug("Cache hit for %s", cache_key)
            return cached
        CACHE_MISSES.inc()
        logger.debug("Cache miss for %s", cache_key)

        start_time = time.perf_counter()
        matched, scanned = self._collect_matches(file_name, path, query)
        if query.sort_by:
            matched = sort_records(matched, query.sort_by, query.sort_order)
        result = ResultPage.paginate(matched, query.page, query.limit)
        duration = time.perf_counter() - start_time

        SCAN_DURATION.observe(duration)
        RECORDS_SCANNED.labels(operation="query").inc(scanned)
        logger.info(
            "Scanned %s records from %s",
            scanned,
            file_name,
            extra=log_context(
                file=file_name,
                scanned=scanned,
                total=result.total,
                duration_ms=round(duration * 1000, 3),
            ),
        )
        self.cache.set(cache_key, result)
        return result

    def _collect_matches(self, file_name: str, path: Path, query: Query) -> tuple[list[Any], int]:
        matched: list[Any] = []
        try:
            with self.opener(path) as stream:
                for record in stream:
                    if matches(record, query):
                        matched.append(record)
                scanned = stream.consumed
        except RecordSourceError:
            logger.exception("Query scan of %s failed", file_name)
            raise
        return matched, scanned


__all__ = ["QueryExecutor", "sort_records"]
