# =============================================
# File: ttl_lru_service/utils/logging.py
# Purpose: Logging configuration (loguru sinks for internal diagnostics)
# =============================================
from __future__ import annotations

import sys

from loguru import logger

_configured_level: str | None = None


def configure_logging(level: str = "INFO", logfile: str | None = None) -> None:
    """Point loguru at stderr (and optionally a rotating file) at the given level."""
    global _configured_level
    level = (level or "INFO").upper()
    if _configured_level == level:
        return
    logger.remove()
    logger.add(sys.stderr, level=level)
    if logfile:
        logger.add(logfile, level=level, rotation="10 MB")
    _configured_level = level
