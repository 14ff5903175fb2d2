"""Scraper package — robots policy gate, page fetch & structural extraction."""

from pagescout.scraper.extractor import extract
from pagescout.scraper.fetcher import fetch_page
from pagescout.scraper.models import ExtractionResult, LinkEntry, PolicyDecision, RawPage, RobotsPolicy
from pagescout.scraper.pipeline import scrape
from pagescout.scraper.robots import evaluate, parse_robots

__all__ = [
    "scrape",
    "evaluate",
    "parse_robots",
    "extract",
    "fetch_page",
    "RawPage",
    "RobotsPolicy",
    "PolicyDecision",
    "ExtractionResult",
    "LinkEntry",
]
