# streamshelf/main.py — app factory, router mounting, CORS

from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from streamshelf.core.logging import RequestLogMiddleware, configure_logging
from streamshelf.core.settings import Settings, get_settings
from streamshelf.errors import install_error_handlers
from streamshelf.store import JsonFileStore, Store

log = logging.getLogger("startup")

ROUTERS = (
    ("streamshelf.routes.auth", "auth"),
    ("streamshelf.routes.catalog", "catalog"),
    ("streamshelf.routes.favorites", "favorites"),
    ("streamshelf.routes.social", "social"),
    ("streamshelf.routes.ratings", "ratings"),
    ("streamshelf.routes.profiles", "profiles"),
    ("streamshelf.routes.health", "health"),
)


def _include(api: APIRouter, router_import: str, attr: str = "router", *, name_hint: str = "") -> None:
    """
    Import a router and include it.
    A broken router is logged with its full traceback and startup fails.
    """
    label = name_hint or router_import
    try:
        mod = __import__(router_import, fromlist=[attr])
        router = getattr(mod, attr)
    except Exception as e:
        log.error("FAILED to mount router: %s (%s)", label, router_import)
        log.error("Reason: %r", e)
        log.error("Traceback:\n%s", traceback.format_exc())
        raise
    api.include_router(router)
    log.info("Mounted router: %s (prefix=%s)", label, getattr(router, "prefix", ""))


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="streamshelf API",
        version="1.0.0",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else JsonFileStore(Path(settings.data_dir))

    # ───────────────── CORS ─────────────────
    # Bearer tokens in the Authorization header, no cookies
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLogMiddleware)
    install_error_handlers(app)

    # ───────────────── Routers ─────────────────
    api = APIRouter(prefix="/api")
    for module, hint in ROUTERS:
        _include(api, module, name_hint=hint)
    app.include_router(api)

    # Unprefixed liveness probe
    from streamshelf.routes.health import router as health_router

    app.include_router(health_router)

    log.info("Data directory: %s", getattr(app.state.store, "root", "<memory>"))
    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
