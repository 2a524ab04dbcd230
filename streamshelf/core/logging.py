# streamshelf/core/logging.py
from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

access_log = logging.getLogger("streamshelf.access")


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the root logger (idempotent)."""
    root = logging.getLogger()
    if not any(getattr(h, "_streamshelf", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._streamshelf = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level.upper())


class RequestLogMiddleware(BaseHTTPMiddleware):
    """One access line per request: METHOD path status duration."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        access_log.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response
