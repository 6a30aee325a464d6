"""FastAPI application setup for the JSON query service."""

from __future__ import annotations

import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from json_query.api.dependencies import get_app_settings, get_file_service, shutdown_cache
from json_query.api.routes_cache import metrics_router
from json_query.api.routes_cache import router as cache_router
from json_query.api.routes_files import router as files_router
from json_query.core.errors import JsonQueryError
from json_query.core.logging import configure_logging, get_logger, log_context
from json_query.core.metrics import REQUEST_COUNT, REQUEST_LATENCY

_settings = get_app_settings()
configure_logging(_settings.log_level, use_json=_settings.log_json)
logger = get_logger("json_query.app")

app = FastAPI(
    title="JSON Query",
    description="Filter, search, sort and paginate large JSON array files.",
    version="0.1.0",
    docs_url="/api-docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1024)

app.include_router(files_router, prefix="/api", tags=["files"])
app.include_router(cache_router, prefix="/api/cache", tags=["cache"])
app.include_router(metrics_router, prefix="", tags=["admin"])


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.perf_counter()
    response = await call_next(request)
    duration = time.perf_counter() - start_time
    route = request.scope.get("route")
    endpoint = getattr(route, "path", "unmatched")
    REQUEST_LATENCY.labels(endpoint=endpoint, method=request.method).observe(duration)
    REQUEST_COUNT.labels(endpoint=endpoint, method=request.method, status=str(response.status_code)).inc()
    logger.info(
        "%s %s %s",
        request.method,
        request.url.path,
        response.status_code,
        extra=log_context(duration_ms=round(duration * 1000, 3)),
    )
    return response


@app.exception_handler(JsonQueryError)
async def handle_query_error(request: Request, exc: JsonQueryError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request %s failed: %s", request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [
        f"{'.'.join(str(part) for part in error['loc'][1:])}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"success": False, "error": "; ".join(messages)})


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": message})


@app.on_event("startup")
async def startup() -> None:
    """Create the data directory and warm up core singletons."""
    settings = get_app_settings()
    service = get_file_service()
    if not settings.data_dir.exists():
        service.catalog.ensure_dir()
        logger.info("Data directory created at %s", settings.data_dir)
    logger.info("JSON query service ready in %s mode", settings.environment)


@app.on_event("shutdown")
async def shutdown() -> None:
    shutdown_cache()


@app.get("/", tags=["admin"])
def home() -> dict[str, object]:
    return {
        "message": "Large JSON File API Server",
        "documentation": "/api-docs",
        "endpoints": {
            "listFiles": "/api/files",
            "queryFile": "/api/file/:fileName",
            "fileStructure": "/api/file/:fileName/structure",
            "clearAllCache": "/api/cache/clear",
            "clearFileCache": "/api/cache/clear/:fileName",
            "cacheStats": "/api/cache/stats",
        },
    }


@app.get("/health", tags=["admin"])
def health() -> dict[str, bool]:
    """Simple liveness check."""
    return {"ok": True}
