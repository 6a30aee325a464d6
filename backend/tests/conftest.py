"""Test fixtures for the JSON query service."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

SAMPLE_RECORDS = [
    {"id": 1, "name": "John", "age": 30, "status": "active", "address": {"city": "Boston", "country": "USA"}},
    {"id": 2, "name": "Jane", "age": 25, "status": "pending", "address": {"city": "Toronto", "country": "Canada"}},
    {"id": 3, "name": "Alice Johnson", "age": 35, "status": "active", "address": {"city": "Austin", "country": "USA"}},
    {"id": 4, "name": "Bob", "age": 30, "status": "inactive", "address": {"city": "Leeds", "country": "UK"}},
    {"id": 5, "name": "Carol", "age": 41, "status": "active", "tags": ["admin"], "address": {"city": "Paris", "country": "France"}},
]


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "data"
    directory.mkdir()
    return directory


@pytest.fixture
def sample_file(data_dir: Path) -> Path:
    path = data_dir / "sample.json"
    path.write_text(json.dumps(SAMPLE_RECORDS), encoding="utf-8")
    return path


@pytest.fixture
def write_json(data_dir: Path):
    """Write a JSON document into the data directory and return its path."""

    def _write(name: str, payload: object) -> Path:
        path = data_dir / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_state(data_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset global singletons and environment between tests."""
    monkeypatch.setenv("JSONQ_DATA_DIR", str(data_dir))
    monkeypatch.delenv("JSONQ_CONFIG", raising=False)

    from json_query.api import dependencies as deps
    from json_query.core import config

    config.get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    deps._CACHE = None
    deps._SERVICE = None
    yield
    config.get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    deps._CACHE = None
    deps._SERVICE = None
