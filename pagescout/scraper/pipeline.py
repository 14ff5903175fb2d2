"""The scrape pipeline: policy check, page fetch, extraction.

The robots evaluation always completes before the page fetch starts, since
its decision gates the fetch.  An advertised crawl delay is only reported
back to the caller; pacing repeated calls is the caller's job.
"""

from __future__ import annotations

import logging

from pagescout.scraper.errors import PolicyDenied, ScrapeError, UnexpectedFailure
from pagescout.scraper.extractor import extract
from pagescout.scraper.fetcher import fetch_page
from pagescout.scraper.models import ScrapeResult
from pagescout.scraper.robots import evaluate
from pagescout.scraper.urls import origin_of, parse_target_url, request_path

logger = logging.getLogger(__name__)


async def scrape(url: str) -> ScrapeResult:
    """Scrape a single page and return its structural summary.

    Raises:
        InvalidInputUrl: *url* is not an absolute http(s) URL.
        PolicyDenied: robots.txt disallows the path.
        UpstreamUnavailable: The page answered with a non-2xx status.
        UnexpectedFailure: Anything else went wrong while fetching or
            extracting.
    """
    target = parse_target_url(url)
    origin = origin_of(target)
    target_str = str(target)

    decision = await evaluate(origin, request_path(target))
    if not decision.allowed:
        raise PolicyDenied(target_str)

    try:
        raw = await fetch_page(target_str)
        data = extract(raw.html, origin)
    except ScrapeError:
        raise
    except Exception as exc:
        logger.exception("Scraping %s failed", target_str)
        raise UnexpectedFailure(str(exc) or exc.__class__.__name__) from exc

    return ScrapeResult(url=target_str, crawl_delay=decision.crawl_delay, data=data)
