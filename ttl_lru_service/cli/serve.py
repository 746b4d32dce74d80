# =============================================
# File: ttl_lru_service/cli/serve.py
# Purpose: CLI entrypoint to run the cache service under uvicorn.
# Usage:
#   python -m ttl_lru_service.cli.serve --port 8080 --capacity 1024
# =============================================
from __future__ import annotations
import argparse
import sys

import uvicorn

from ttl_lru_service.domain.errors import InvalidCapacityError
from ttl_lru_service.main import create_app
from ttl_lru_service.utils.config import get_settings

def build_parser() -> argparse.ArgumentParser:
    defaults = get_settings()
    ap = argparse.ArgumentParser(description="Serve the TTL-LRU cache over HTTP.")
    ap.add_argument("--host", default=defaults.host, help=f"Bind address (default: {defaults.host})")
    ap.add_argument("--port", type=int, default=defaults.port, help=f"Bind port (default: {defaults.port})")
    ap.add_argument("--capacity", type=int, default=defaults.capacity, help=f"Max cached entries (default: {defaults.capacity})")
    ap.add_argument("--log-level", default=defaults.log_level, help=f"Log level (default: {defaults.log_level})")
    return ap

def main(argv=None):
    args = build_parser().parse_args(argv)

    settings = get_settings()
    settings.host = args.host
    settings.port = args.port
    settings.capacity = args.capacity
    settings.log_level = args.log_level.upper()

    try:
        app = create_app(settings)
    except InvalidCapacityError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(2)

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())

if __name__ == "__main__":
    main()
