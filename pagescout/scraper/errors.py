"""Error taxonomy of the scrape pipeline.

Each error knows the HTTP status it maps to and the JSON body the API
returns for it.  Robots failures and extraction mismatches are absorbed
where they happen and never show up here.
"""

from __future__ import annotations

from typing import Any


class ScrapeError(Exception):
    """Base class for failures surfaced to the caller."""

    status_code: int = 500

    def payload(self) -> dict[str, Any]:
        return {"success": False, "error": str(self)}


class InvalidInputUrl(ScrapeError):
    """The ``url`` query value is not an absolute http(s) URL."""

    status_code = 400

    def __init__(self, url: str, reason: str = "Invalid URL") -> None:
        super().__init__(reason)
        self.url = url


class PolicyDenied(ScrapeError):
    """robots.txt disallows the requested path."""

    status_code = 403

    def __init__(self, url: str) -> None:
        super().__init__("Blocked by robots.txt")
        self.url = url


class UpstreamUnavailable(ScrapeError):
    """The target page answered with a non-success status."""

    status_code = 502

    def __init__(self, status: int, status_text: str) -> None:
        super().__init__(f"Upstream returned {status} {status_text}".rstrip())
        self.status = status
        self.status_text = status_text

    def payload(self) -> dict[str, Any]:
        return {"success": False, "status": self.status, "statusText": self.status_text}


class UnexpectedFailure(ScrapeError):
    status_code = 500
