"""FastAPI application factory.

Lifespan
--------
On startup the app configures logging from ``settings.log_level``.  No
other state is created: every request fetches its own robots.txt and page.

Routers
-------

    /          — plain-text usage hint
    /scrape    — robots-aware single-page scrape
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from pagescout.config import configure_logging
from pagescout.scraper.errors import ScrapeError

from pagescout.api.routers import scrape as scrape_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup."""
    configure_logging()
    yield


async def _scrape_error_handler(request: Request, exc: ScrapeError) -> JSONResponse:
    logger.info("%s %s -> %s (%s)", request.method, request.url.path, exc.status_code, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="PageScout API",
        description=(
            "Fetches a single web page when its robots.txt allows it and "
            "returns the page title, top headings and outbound links."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ScrapeError, _scrape_error_handler)

    @app.get("/", response_class=PlainTextResponse)
    def index() -> str:
        return "Hello! Use /scrape?url=..."

    app.include_router(scrape_router.router, prefix="/scrape", tags=["scrape"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn pagescout.api.app:app --reload
app = create_app()
