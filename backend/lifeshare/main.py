"""
main.py — FastAPI Application Entrypoint

Purpose:
- Initialize application services (logging, config, the entity store).
- Register API routers.
- Define root-level health/status endpoints.
- Provide `app` object used by ASGI server (uvicorn).

`create_app(store=...)` builds an app around a given EntityStore; tests use
it to get a fresh store each. The module-level `app` owns its own store.

This file should stay clean — no business logic here.
"""

import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from lifeshare.core.config import settings
from lifeshare.core.logging import configure_logging, get_logger
from lifeshare.api.v1 import auth, donations, donors
from lifeshare.services.store import EntityStore

# -----------------------------------------------------------------------------
# App Initialization
# -----------------------------------------------------------------------------

configure_logging(settings.LOG_LEVEL)  # Set logging defaults at startup

logger = get_logger(__name__)


def create_app(store: Optional[EntityStore] = None) -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Blood donor registry: registration, donation history, donor directory",
        version="0.1.0",
    )
    app.state.store = store if store is not None else EntityStore()

    # -------------------------------------------------------------------------
    # Middleware
    # -------------------------------------------------------------------------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "%s %s raised after %.1fms",
                request.method,
                request.url.path,
                (time.perf_counter() - start) * 1000,
            )
            raise
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Server error"})

    # -------------------------------------------------------------------------
    # Router Registration
    # -------------------------------------------------------------------------

    # Mount all v1 API routers under /api/v1 prefix
    app.include_router(auth.router, prefix="/api/v1")
    app.include_router(donations.router, prefix="/api/v1")
    app.include_router(donors.router, prefix="/api/v1")

    # -------------------------------------------------------------------------
    # Health Check
    # -------------------------------------------------------------------------

    @app.get("/")
    def root():
        return {"status": "ok", "message": "LifeShare backend running"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()
