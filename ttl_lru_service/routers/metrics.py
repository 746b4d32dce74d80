# =============================================
# File: ttl_lru_service/routers/metrics.py
# Purpose: Expose internal metrics as JSON
# =============================================
from __future__ import annotations
from fastapi import APIRouter, Depends

from ttl_lru_service.routers.cache import get_store
from ttl_lru_service.services.store import TTLLRUStore
from ttl_lru_service.utils.metrics import snapshot

router = APIRouter(tags=["metrics"])

@router.get("/metrics")
def get_metrics(store: TTLLRUStore = Depends(get_store)):
    """Return in-process request metrics plus store counters (JSON)."""
    data = snapshot()
    data["cache"] = store.stats().as_dict()
    return data
