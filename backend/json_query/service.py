"""Entry points used by the HTTP and CLI layers."""

from __future__ import annotations

from json_query.cache.store import CacheStore, CacheStats
from json_query.core.config import Settings
from json_query.files import FileCatalog, normalize_file_name
from json_query.query.executor import QueryExecutor
from json_query.query.models import Query, ResultPage, StructureSummary
from json_query.query.structure import sample_structure


class JsonFileService:
    """Queries, samples and cache management over the files of one data directory.

    Cached results are not tied to file contents. After a file changes,
    call ``clear_cache`` for it or callers keep seeing the old results.
    """

    def __init__(self, settings: Settings, cache: CacheStore) -> None:
        self.settings = settings
        self.cache = cache
        self.catalog = FileCatalog(settings.data_dir)
        self.executor = QueryExecutor(cache)

    def run_query(self, file_name: str, query: Query) -> tuple[str, ResultPage]:
        name, path = self.catalog.resolve(file_name)
        return name, self.executor.run(name, path, query)

    def sample_structure(self, file_name: str) -> tuple[str, StructureSummary]:
        name, path = self.catalog.resolve(file_name)
        return name, sample_structure(path, max_samples=self.settings.structure_samples)

    def clear_cache(self, file_name: str | None = None) -> int:
        if file_name is None:
            return self.cache.clear_all()
        return self.cache.clear_by_prefix(normalize_file_name(file_name))

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    def list_files(self) -> list[str]:
        return self.catalog.list_files()


__all__ = ["JsonFileService"]
