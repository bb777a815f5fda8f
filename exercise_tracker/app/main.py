"""
Main entrypoint for the Exercise Tracker API.

This module assembles the FastAPI application: logging, CORS, the
``/api`` routes, the landing page and its static assets, the error
rendering and the store lifecycle.  The ``create_app`` function builds
and configures the app, which is then instantiated at module import
time as ``app``, e.g.::

    uvicorn exercise_tracker.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from .api.router import router as api_router
from .core.config import Settings, settings
from .core.db import Database
from .core.errors import TrackerError, describe_errors
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)

APP_DIR = Path(__file__).resolve().parent
VIEWS_DIR = APP_DIR / "views"
PUBLIC_DIR = APP_DIR / "public"


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to build the application from.  Defaults to the
        module-level ``settings`` read from the environment.

    Returns
    -------
    FastAPI
        A configured application whose ``state.database`` is opened on
        startup and closed on shutdown.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.database = Database.from_settings(app_settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def index() -> FileResponse:
        return FileResponse(VIEWS_DIR / "index.html")

    app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

    # Errors are reported in the body only; the status stays 200.
    @app.exception_handler(TrackerError)
    async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
        return JSONResponse({"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse({"error": describe_errors(exc.errors())})

    return app


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the store on startup and close it on shutdown."""
    app_settings: Settings = app.state.settings
    app.state.database.open()
    logger.info("%s %s started", app_settings.project_name, app_settings.api_version)
    try:
        yield
    finally:
        app.state.database.close()


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
