"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass
class RobotsPolicy:
    """Rules of the universal (``User-agent: *``) group of one robots.txt."""

    disallowed_prefixes: List[str] = field(default_factory=list)
    crawl_delay: Optional[float] = None

    def allows(self, path: str) -> bool:
        """Return ``False`` if any disallowed prefix is a literal prefix of *path*."""
        return not any(path.startswith(prefix) for prefix in self.disallowed_prefixes if prefix)


@dataclass(frozen=True)
class PolicyDecision:
    allowed: bool
    crawl_delay: Optional[float] = None


@dataclass(frozen=True)
class LinkEntry:
    href: str
    text: str

    def to_dict(self) -> dict[str, str]:
        return {"href": self.href, "text": self.text}


@dataclass
class ExtractionResult:
    """Bounded structural summary of one page."""

    title: Optional[str] = None
    headings: List[str] = field(default_factory=list)
    links: List[LinkEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "headings": list(self.headings),
            "links": [link.to_dict() for link in self.links],
        }


@dataclass
class ScrapeResult:
    """Everything the ``/scrape`` endpoint reports for a permitted fetch."""

    url: str
    crawl_delay: Optional[float]
    data: ExtractionResult

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "url": self.url,
            "robots": {"crawlDelay": self.crawl_delay},
            "data": self.data.to_dict(),
        }
