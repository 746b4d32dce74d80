# =============================================
# File: ttl_lru_service/utils/slog.py
# Purpose: JSON event lines for the cache service (one object per line)
# =============================================
from __future__ import annotations
import hashlib
import json
import logging
import os
import uuid
from typing import Any, Dict

_LOGGER_NAME = "ttl_lru_service"

_logger = logging.getLogger(_LOGGER_NAME)
if not _logger.handlers:
    _logger.setLevel(getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter("%(message)s"))
    _logger.addHandler(_handler)
    _logger.propagate = True  # caplog listens on the root logger

def khash(key: str) -> str:
    """Short, stable digest of a cache key; raw keys never reach the log."""
    raw = (key or "").encode("utf-8", errors="surrogatepass")
    return hashlib.sha256(raw).hexdigest()[:10]

def key_context(key: str, **extra: Any) -> Dict[str, Any]:
    """Per-request log context for a keyed operation (merged into request.completed)."""
    ctx: Dict[str, Any] = {"key_hash": khash(key), "key_len": len(key or "")}
    ctx.update(extra)
    return ctx

def new_request_id() -> str:
    return uuid.uuid4().hex

def _emit(level: int, payload: Dict[str, Any]) -> None:
    # default=str keeps odd field types from breaking the log line
    _logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))

def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    _emit(level, {"event": event, **fields})

def finalize_request_log(
    request_id: str,
    method: str,
    path: str,
    status: int,
    latency_ms: int,
    client_ip: str | None,
    ctx: Dict[str, Any] | None = None,
) -> None:
    payload: Dict[str, Any] = {
        "event": "request.completed",
        "request_id": request_id,
        "method": method,
        "path": path,
        "status": status,
        "latency_ms": latency_ms,
        "client_ip": client_ip or "",
    }
    if ctx:
        payload.update(ctx)
    # 4xx is the caller's problem, 5xx is ours
    level = logging.ERROR if status >= 500 else logging.WARNING if status >= 400 else logging.INFO
    _emit(level, payload)
