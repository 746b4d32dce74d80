# =============================================
# File: ttl_lru_service/utils/config.py
# Purpose: Environment-driven settings for the cache service
# =============================================
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_CAPACITY = 1024
DEFAULT_PORT = 8080


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass
class Settings:
    capacity: int = DEFAULT_CAPACITY
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT


def get_settings() -> Settings:
    """Read settings at call time so tests/env overrides take effect."""
    return Settings(
        capacity=_env_int("CACHE_CAPACITY", DEFAULT_CAPACITY),
        cors_allow_origins=_env_list("CORS_ALLOW_ORIGINS", "*"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", DEFAULT_PORT),
    )
