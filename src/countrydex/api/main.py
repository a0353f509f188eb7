"""Countrydex — FastAPI Application.

This module is the single entry point for the web application.  It builds the
FastAPI ``app`` instance, mounts the static directories, and provides the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
- **Configuration** comes from :mod:`countrydex.core.config` (``COUNTRYDEX_*``
  environment variables and ``.env``).
- **Entries** live in one SQLite table managed by
  :class:`~countrydex.core.records_db.RecordsDB`.
- **Photos** live in the uploads directory and are served by FastAPI's
  ``StaticFiles`` at ``/uploads/<image_path>``.
- **The client bundle** (``/static/js/app.js``, ``/static/css/styles.css``)
  is served from the package's ``static`` directory and the HTML page is
  returned as a raw ``HTMLResponse``; all data is fetched from
  ``/api/countries`` on page load.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
GET       ``/``                         Serve the main HTML page
GET       ``/api/countries``            List entries, newest first
GET       ``/api/countries/{id}``       Single entry
POST      ``/api/countries``            Create an entry (multipart)
PUT       ``/api/countries/{id}``       Update name and/or image
DELETE    ``/api/countries/{id}``       Delete entry and image file
GET       ``/uploads/{image_path}``     Uploaded photos
GET       ``/static/...``               Client JS and CSS
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    countrydex

Direct invocation::

    python -m countrydex.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from countrydex import __version__
from countrydex.api.errors import register_error_handlers
from countrydex.api.routes import router as countries_router
from countrydex.core.config import CountrydexConfig, config
from countrydex.core.records_db import RecordsDB

logger = logging.getLogger(__name__)


def create_app(cfg: CountrydexConfig | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        cfg: Configuration to use.  Defaults to the global
            :data:`~countrydex.core.config.config` instance.

    Returns:
        A fully wired application.  The records database is opened when the
        application starts up.
    """
    cfg = cfg or config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Open the records database on startup and ensure the uploads dir exists."""
        cfg.uploads_dir.mkdir(parents=True, exist_ok=True)
        app.state.records_db = RecordsDB(cfg.database_path)
        logger.info(f"Serving uploads from {cfg.uploads_dir.resolve()}")

        yield

        logger.info("Countrydex shutting down.")

    app = FastAPI(
        title="Countrydex",
        description="A personal gallery of visited countries.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(countries_router, prefix="/api/countries", tags=["countries"])

    cfg.uploads_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=str(cfg.uploads_dir)), name="uploads")
    if cfg.static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(cfg.static_dir)), name="static")

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def index() -> HTMLResponse:
        """Serve the gallery page.

        Raises:
            HTTPException: 404 if ``index.html`` is not found.
        """
        index_path = cfg.templates_dir / "index.html"
        if index_path.exists():
            return HTMLResponse(content=index_path.read_text(encoding="utf-8"))
        raise HTTPException(status_code=404, detail="index.html not found")

    return app


app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~countrydex.core.config.config` (which
    loads from ``COUNTRYDEX_SERVER_HOST`` and ``COUNTRYDEX_SERVER_PORT``
    environment variables).  Defaults to ``0.0.0.0:3000``.

    This function is registered as the ``countrydex`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Server is running on http://{config.server_host}:{config.server_port}")

    uvicorn.run(
        "countrydex.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
