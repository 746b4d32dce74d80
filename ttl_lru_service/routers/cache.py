# =============================================
# File: ttl_lru_service/routers/cache.py
# Purpose: HTTP adapter for the store: POST /set and GET /get
# =============================================
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Request
from pydantic import BaseModel, Field, field_validator

from ttl_lru_service.domain.errors import BadRequestError, KeyNotFoundError
from ttl_lru_service.services.store import TTLLRUStore
from ttl_lru_service.utils import slog

router = APIRouter(tags=["cache"])

# Signed 64-bit seconds, the range a client can express in `exp`
MAX_EXP_SECONDS = 2**63 - 1
MIN_EXP_SECONDS = -(2**63)


# --------- Schemas ---------

class SetRequest(BaseModel):
    """
    Create/update payload.
    - key: cache key (empty string allowed).
    - value: opaque string payload.
    - exp: time-to-live in whole seconds; zero or negative expires on next read.
    """
    key: str = ""
    value: str = ""
    exp: int = Field(..., ge=MIN_EXP_SECONDS, le=MAX_EXP_SECONDS)

    @field_validator("key", "value")
    @classmethod
    def _utf8_only(cls, v: str) -> str:
        # Lone surrogates from JSON escapes could be stored but never served back
        try:
            v.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("must be valid UTF-8 text")
        return v


class SetResponse(BaseModel):
    status: str = "ok"


class GetResponse(BaseModel):
    value: str


# --------- Dependencies ---------

def get_store(request: Request) -> TTLLRUStore:
    """The store is owned by the application instance, not by this module."""
    return request.app.state.store


def _parse_exp(raw: Optional[str]) -> int:
    try:
        exp = int((raw or "").strip())
    except ValueError:
        raise BadRequestError("Invalid expiration")
    if not MIN_EXP_SECONDS <= exp <= MAX_EXP_SECONDS:
        raise BadRequestError("Invalid expiration")
    return exp


# --------- Routes ---------

@router.post("/set", response_model=SetResponse)
def set_value(
    request: Request,
    body: Optional[SetRequest] = Body(None),
    key: Optional[str] = Query(None),
    value: Optional[str] = Query(None),
    exp: Optional[str] = Query(None),
    store: TTLLRUStore = Depends(get_store),
) -> SetResponse:
    """
    Create or update an entry. Accepts either a JSON body
    ({"key", "value", "exp"}) or the same fields as query parameters.
    """
    if body is None:
        body = SetRequest(key=key or "", value=value or "", exp=_parse_exp(exp))

    request.state.log_context = slog.key_context(body.key, ttl_s=body.exp)
    store.set(body.key, body.value, body.exp)
    return SetResponse()


@router.get("/get", response_model=GetResponse)
def get_value(
    request: Request,
    key: str = Query(""),
    store: TTLLRUStore = Depends(get_store),
) -> GetResponse:
    """Return the live value for `key`, or 404 when absent or expired."""
    request.state.log_context = slog.key_context(key)
    value, found = store.get(key)
    request.state.log_context["hit"] = found
    if not found:
        raise KeyNotFoundError("Key not found")
    return GetResponse(value=value)
