"""API integration tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from json_query.app import app


@pytest.fixture
def client(sample_file: Path) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True


def test_home_lists_endpoints(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["documentation"] == "/api-docs"
    assert "queryFile" in body["endpoints"]


def test_list_files(client: TestClient) -> None:
    resp = client.get("/api/files")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "files": ["sample.json"]}


def test_query_default_page(client: TestClient) -> None:
    resp = client.get("/api/file/sample.json")
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["file"] == "sample.json"
    assert body["total"] == 5
    assert body["page"] == 1
    assert body["limit"] == 100
    assert body["totalPages"] == 1
    assert len(body["data"]) == 5


def test_query_without_suffix(client: TestClient) -> None:
    resp = client.get("/api/file/sample")
    assert resp.status_code == 200
    assert resp.json()["file"] == "sample.json"


def test_missing_file_is_404(client: TestClient) -> None:
    resp = client.get("/api/file/nonexistent.json")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "File 'nonexistent.json' not found in data directory"}


def test_filters(client: TestClient) -> None:
    resp = client.get("/api/file/sample.json", params={"filter.status": "active", "filter.age": "30"})
    data = resp.json()["data"]
    assert [item["name"] for item in data] == ["John"]

    resp = client.get("/api/file/sample.json", params={"filter.status": '["pending","inactive"]'})
    assert [item["id"] for item in resp.json()["data"]] == [2, 4]

    resp = client.get("/api/file/sample.json", params={"filter.age": '{"gt": 30, "lte": 41}'})
    assert [item["id"] for item in resp.json()["data"]] == [3, 5]

    resp = client.get("/api/file/sample.json", params={"filter.address.country": "USA"})
    assert resp.json()["total"] == 2


def test_sort_and_paginate(client: TestClient) -> None:
    resp = client.get("/api/file/sample.json", params={"sortBy": "age", "sortOrder": "desc", "page": 1, "limit": 2})
    body = resp.json()
    assert [item["age"] for item in body["data"]] == [41, 35]
    assert body["totalPages"] == 3
    assert body["limit"] == 2

    resp = client.get("/api/file/sample.json", params={"page": 9, "limit": 2})
    body = resp.json()
    assert body["data"] == []
    assert body["total"] == 5


def test_search(client: TestClient) -> None:
    resp = client.get("/api/file/sample.json", params={"search": "John"})
    assert [item["id"] for item in resp.json()["data"]] == [1, 3]

    resp = client.get("/api/file/sample.json", params={"search": "USA", "searchFields": "address.country"})
    data = resp.json()["data"]
    assert data
    assert all(item["address"]["country"] == "USA" for item in data)


@pytest.mark.parametrize(
    "params",
    [{"page": "0"}, {"limit": "5000"}, {"page": "abc"}, {"sortOrder": "up"}, {"filter.age": '{"near": 3}'}],
)
def test_bad_parameters_are_400(client: TestClient, params: dict[str, str]) -> None:
    resp = client.get("/api/file/sample.json", params=params)
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_structure(client: TestClient) -> None:
    resp = client.get("/api/file/sample.json/structure")
    assert resp.status_code == 200
    structure = resp.json()["structure"]
    assert structure["type"] == "array"
    assert structure["rootElementType"] == "object"
    assert structure["count"] == 5
    assert "address.country" in structure["fields"]
    assert structure["sample"]["name"] == "John"


def test_malformed_file_is_500(client: TestClient, data_dir: Path) -> None:
    (data_dir / "bad.json").write_text('{"not": "an array"}', encoding="utf-8")
    resp = client.get("/api/file/bad.json")
    assert resp.status_code == 500
    assert resp.json()["success"] is False


def test_cache_lifecycle(client: TestClient, data_dir: Path) -> None:
    (data_dir / "other.json").write_text(json.dumps([{"status": "active"}]), encoding="utf-8")
    client.get("/api/file/sample.json", params={"filter.status": "active"})
    client.get("/api/file/sample.json", params={"filter.status": "active"})
    client.get("/api/file/sample.json", params={"search": "John"})
    client.get("/api/file/other.json")

    stats = client.get("/api/cache/stats").json()["stats"]
    assert stats["keys"] == 3
    assert stats["hits"] == 1

    resp = client.post("/api/cache/clear/sample.json")
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert "sample.json" in body["message"]
    assert body["entriesCleared"] == 2

    resp = client.post("/api/cache/clear")
    assert resp.json()["entriesCleared"] == 1
    assert resp.json()["message"] == "All cache cleared"


def test_cached_response_reflects_stale_file(client: TestClient, sample_file: Path) -> None:
    first = client.get("/api/file/sample.json").json()
    sample_file.write_text("[]", encoding="utf-8")
    assert client.get("/api/file/sample.json").json() == first
    client.post("/api/cache/clear/sample")
    assert client.get("/api/file/sample.json").json()["total"] == 0


def test_unknown_route(client: TestClient) -> None:
    resp = client.get("/api/nowhere")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Route not found"}


def test_metrics(client: TestClient) -> None:
    client.get("/api/file/sample.json")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "jsonq_cache_misses_total" in resp.text
