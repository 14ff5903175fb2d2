"""Scrape endpoint.

Routes
------
GET /scrape?url=<target>    → robots check, page fetch, structural summary

Failures are raised as :class:`~pagescout.scraper.errors.ScrapeError`
subclasses and rendered to JSON by the handler registered in
:func:`pagescout.api.app.create_app`.
"""

from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from pagescout.config import settings
from pagescout.scraper.pipeline import scrape

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class LinkOut(BaseModel):
    href: str
    text: str


class PageDataOut(BaseModel):
    title: Optional[str]
    headings: List[str]
    links: List[LinkOut]


class RobotsOut(BaseModel):
    crawlDelay: Optional[float]


class ScrapeResponse(BaseModel):
    success: bool = True
    url: str
    robots: RobotsOut
    data: PageDataOut


class ErrorResponse(BaseModel):
    success: bool = False
    error: Optional[str] = None
    status: Optional[int] = None
    statusText: Optional[str] = None


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=ScrapeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        403: {"model": ErrorResponse, "description": "Blocked by robots.txt"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"},
        502: {"model": ErrorResponse, "description": "Upstream returned an error status"},
    },
)
async def scrape_endpoint(
    url: Optional[str] = None,
) -> dict[str, Any]:
    """Fetch *url* (if robots.txt allows it) and summarise the page.

    Args:
        url: Absolute http(s) URL to scrape.  Falls back to the configured
            demo target when missing or empty.
    """
    result = await scrape(url or settings.default_target_url)
    return result.to_dict()
