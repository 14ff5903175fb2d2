"""Async HTTP fetcher for robots.txt files and target pages."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from pagescout.config import settings
from pagescout.scraper.errors import UpstreamUnavailable
from pagescout.scraper.models import RawPage

logger = logging.getLogger(__name__)


def _page_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent}


async def fetch_robots_txt(origin: str) -> Optional[str]:
    """Return the body of ``{origin}/robots.txt``, or ``None`` on a non-2xx status.

    The request goes out with the transport's default User-Agent.  Network
    errors propagate; the policy gate decides what to do with them.
    """
    robots_url = f"{origin}/robots.txt"
    async with httpx.AsyncClient(
        timeout=settings.request_timeout,
        follow_redirects=True,
    ) as client:
        response = await client.get(robots_url)

    if not response.is_success:
        logger.debug("robots.txt at %s returned HTTP %s", robots_url, response.status_code)
        return None
    return response.text


async def fetch_page(url: str) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Raises:
        UpstreamUnavailable: If the server answers with a non-2xx status
            (after following redirects).
    """
    async with httpx.AsyncClient(
        headers=_page_headers(),
        timeout=settings.request_timeout,
        follow_redirects=True,
    ) as client:
        response = await client.get(url)

    if not response.is_success:
        logger.warning("Fetching %s returned HTTP %s", url, response.status_code)
        raise UpstreamUnavailable(response.status_code, response.reason_phrase)

    return RawPage(url=url, html=response.text, status_code=response.status_code)
