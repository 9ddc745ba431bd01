"""
DFDA Explorer Backend API
=========================

FastAPI service exposing read-only views over the Decentralized FDA
variable database.

Endpoints
---------
• GET /api/v1/variables
    Public variables from all non-boring categories, ranked (cap 500).
• GET /api/v1/variables/{query}
    One variable by id or slug, with its strongest aggregate correlations.
• GET /api/v1/variable-categories
    Listable categories with their slugs.
• GET /api/v1/variable-categories/{slug}/variables
    Ranked variables of one category (cap 200).
• GET /variable-categories, /variable-categories/{slug}
    Server-rendered browse pages.
• GET /, GET /health
    Liveness and health probes.

Errors are always returned as `{"error": "<message>"}`; storage details are
logged server-side only.

Run with: uvicorn backend.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# --------------------------------------------------------------------------- #
# Path setup: ensure project root on sys.path
# --------------------------------------------------------------------------- #

# Allows imports like `core.*`, `database.*` when running via uvicorn
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from backend.routes import pages, variable_categories, variables
from backend.schemas import HealthSchema
from core.errors import ExplorerError
from core.health import system_health
from core.logging_setup import setup_logging
from core.metadata import __project__
from core.settings import Settings, get_settings
from database.db_setup import Database

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Error handling
# --------------------------------------------------------------------------- #

async def explorer_error_handler(request: Request, exc: ExplorerError) -> JSONResponse:
    """Convert domain errors into the `{"error": ...}` shape."""
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.detail,
            exc_info=exc.__cause__ or exc,
        )
    else:
        logger.info("%s %s -> %d (%s)", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


# --------------------------------------------------------------------------- #
# App factory
# --------------------------------------------------------------------------- #

def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The storage client is injected (or built from settings) and opened /
    disposed by the lifespan, never created at import time.
    """
    settings = settings or get_settings()
    database = database or Database(settings=settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)
        logger.info("Starting %s %s", __project__, settings.API_VERSION)
        app.state.db.open()
        yield
        logger.info("Shutting down; closing database")
        app.state.db.close()

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        description=(
            "Read-only API over DFDA variables and variable categories.\n"
            "- Ranked public variable listings (global and per category).\n"
            "- Legacy-compatible slugs for category and variable URLs."
        ),
    )
    app.state.settings = settings
    app.state.db = database

    app.add_exception_handler(ExplorerError, explorer_error_handler)

    app.include_router(variables.router)
    app.include_router(variable_categories.router)
    app.include_router(pages.router)

    # ----------------------------------------------------------------------- #
    # Core Routes
    # ----------------------------------------------------------------------- #

    @app.get("/", tags=["health"])
    async def root():
        """Basic liveness probe."""
        return {
            "status": "ok",
            "message": f"{__project__} backend is live.",
            "version": app.version,
        }

    @app.get("/health", tags=["health"], response_model=HealthSchema)
    def health():
        """
        System health endpoint.

        Delegates to core.health.system_health (database ping + process
        metrics). Always 200; a failed probe is reported as "degraded".
        """
        return system_health(app.state.db, version=app.version)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.main:app", host="0.0.0.0", port=8000, reload=get_settings().DEBUG)
