"""CLI entrypoint for the JSON query service."""

from __future__ import annotations

import json
import os
from typing import List, Optional

import requests
import typer

app = typer.Typer(name="jsonq", help="Query large JSON array files through the JSON query API")
cache_app = typer.Typer(name="cache", help="Inspect and clear the result cache")
app.add_typer(cache_app, name="cache")

DEFAULT_HOST = "http://127.0.0.1:3000"


def _resolve_host(override: Optional[str]) -> str:
    if override:
        return override.rstrip('/')
    env_host = os.environ.get("JSONQ_URL")
    if env_host:
        return env_host.rstrip('/')
    return DEFAULT_HOST


def _request(method: str, path: str, host: Optional[str] = None, **kwargs) -> requests.Response:
    base = _resolve_host(host)
    url = f"{base}{path}"
    try:
        resp = requests.request(method, url, timeout=60, **kwargs)
    except requests.ConnectionError as exc:
        typer.echo(f"Could not reach {base}: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    if not resp.ok:
        try:
            detail = resp.json().get("error", resp.text)
        except ValueError:
            detail = resp.text
        typer.echo(f"Request failed ({resp.status_code}): {detail}", err=True)
        raise typer.Exit(code=1)
    return resp


def _parse_filters(pairs: List[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        field, sep, value = pair.partition("=")
        if not sep or not field:
            raise typer.BadParameter(f"Expected FIELD=VALUE, got '{pair}'", param_hint="--filter")
        params[f"filter.{field}"] = value
    return params


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from json_query.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "json_query.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


@app.command()
def files(
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """List JSON files available for querying."""
    resp = _request("GET", "/api/files", host=host)
    typer.echo(json.dumps(resp.json(), indent=2))


@app.command()
def query(
    file_name: str = typer.Argument(..., help="JSON file name"),
    filter_: List[str] = typer.Option([], "--filter", "-f", help="FIELD=VALUE filter; repeatable"),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help="Field to sort by"),
    order: str = typer.Option("asc", "--order", help="asc or desc"),
    page: int = typer.Option(1, "--page", min=1, help="Page number"),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Items per page"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Search text"),
    search_field: List[str] = typer.Option([], "--search-field", help="Field to search in; repeatable"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Filter, search, sort and paginate a file."""
    params: dict[str, object] = {"page": page, "sortOrder": order}
    params.update(_parse_filters(filter_))
    if limit is not None:
        params["limit"] = limit
    if sort_by:
        params["sortBy"] = sort_by
    if search:
        params["search"] = search
    if search_field:
        params["searchFields"] = ",".join(search_field)
    resp = _request("GET", f"/api/file/{file_name}", host=host, params=params)
    typer.echo(json.dumps(resp.json(), indent=2))


@app.command()
def structure(
    file_name: str = typer.Argument(..., help="JSON file name"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Show the fields found in the first records of a file."""
    resp = _request("GET", f"/api/file/{file_name}/structure", host=host)
    typer.echo(json.dumps(resp.json(), indent=2))


@cache_app.command("clear")
def clear_cache(
    file_name: Optional[str] = typer.Argument(None, help="Only clear entries for this file"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Clear cached query results."""
    path = f"/api/cache/clear/{file_name}" if file_name else "/api/cache/clear"
    resp = _request("POST", path, host=host)
    typer.echo(json.dumps(resp.json(), indent=2))


@cache_app.command("stats")
def cache_stats(
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Show cache counters."""
    resp = _request("GET", "/api/cache/stats", host=host)
    typer.echo(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    app()
