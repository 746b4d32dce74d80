# =============================================
# File: ttl_lru_service/domain/errors.py
# Purpose: Error types shared by the store and the HTTP layer
# =============================================
from __future__ import annotations


class CacheError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code:
            self.status_code = status_code
        self.message = message


class InvalidCapacityError(CacheError, ValueError):
    """Raised when a store is built with a non-positive capacity."""


class BadRequestError(CacheError):
    status_code = 400


class KeyNotFoundError(CacheError):
    status_code = 404
