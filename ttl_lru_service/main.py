# =============================================
# File: ttl_lru_service/main.py
# Purpose: FastAPI application factory wiring the store, routers and middleware
# =============================================
from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ttl_lru_service.domain.errors import CacheError
from ttl_lru_service.routers import cache, metrics
from ttl_lru_service.services.store import TTLLRUStore
from ttl_lru_service.utils import slog
from ttl_lru_service.utils.config import Settings, get_settings
from ttl_lru_service.utils.logging import configure_logging
from ttl_lru_service.utils.metrics import record_request, record_endpoint


def create_app(settings: Settings | None = None, store: TTLLRUStore | None = None) -> FastAPI:
    """
    Build the service. The store is created here (or injected) and lives on
    app.state; handlers reach it through the `get_store` dependency.

    Nothing is built at import time; serve with the CLI or
    `uvicorn --factory ttl_lru_service.main:create_app`.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="TTL-LRU Cache Service")
    app.state.settings = settings
    app.state.store = store if store is not None else TTLLRUStore(settings.capacity)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(CacheError)
    async def _cache_error(request: Request, err: CacheError):
        slog.log_event(
            "request.rejected",
            level=logging.WARNING,
            path=str(request.url.path),
            status=err.status_code,
            error=err.message,
        )
        return JSONResponse({"error": err.message}, status_code=err.status_code)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, err: RequestValidationError):
        # Malformed input is a plain 400 on this API, not FastAPI's 422
        slog.log_event(
            "request.rejected",
            level=logging.WARNING,
            path=str(request.url.path),
            status=400,
            error="invalid request",
        )
        return JSONResponse({"error": "Invalid request"}, status_code=400)

    @app.middleware("http")
    async def _logging_middleware(request, call_next):
        req_id = slog.new_request_id()
        client_ip = request.client.host if request.client else None
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            latency_ms = int((time.perf_counter() - start) * 1000)
            ctx = getattr(request.state, "log_context", {})
            slog.log_event(
                "request.error",
                level=logging.ERROR,
                request_id=req_id,
                path=str(request.url.path),
                method=request.method,
                latency_ms=latency_ms,
                client_ip=client_ip,
                error=str(e),
                **(ctx or {}),
            )
            record_request(latency_ms=latency_ms, status=500)
            record_endpoint(method=request.method, path=str(request.url.path), latency_ms=latency_ms)
            raise
        latency_ms = int((time.perf_counter() - start) * 1000)
        ctx = getattr(request.state, "log_context", {}) or {}
        slog.finalize_request_log(
            request_id=req_id,
            method=request.method,
            path=str(request.url.path),
            status=response.status_code,
            latency_ms=latency_ms,
            client_ip=client_ip,
            ctx=ctx,
        )
        record_request(latency_ms=latency_ms, status=response.status_code)
        record_endpoint(method=request.method, path=str(request.url.path), latency_ms=latency_ms)
        response.headers["X-Request-ID"] = req_id
        return response

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(cache.router)
    app.include_router(metrics.router)
    return app

