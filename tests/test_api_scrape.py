"""Tests for the /scrape API endpoint.

The FastAPI ``TestClient`` talks to the app in-process; ``respx_mock``
intercepts the outbound robots.txt and page fetches the endpoint makes.
"""

from __future__ import annotations

from typing import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from pagescout.api.app import create_app
from pagescout.config import settings


_PAGE_HTML = """\
<html>
<head><title>Shares</title></head>
<body>
  <h1>Market</h1><h2>Today</h2>
  <a href="/news">News</a>
  <a href="::::">Broken</a>
  <a href="https://other.test/">Elsewhere</a>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    app = create_app()
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


def _mock_robots(respx_mock, text: str | None = None) -> None:
    """Serve *text* as x.test's robots.txt, or a 404 when *text* is None."""
    response = httpx.Response(404) if text is None else httpx.Response(200, text=text)
    respx_mock.get("https://x.test/robots.txt").mock(return_value=response)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestIndex:
    def test_usage_hint(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert "/scrape?url=" in resp.text


class TestScrapeEndpoint:
    def test_success(self, client, respx_mock):
        _mock_robots(respx_mock, "User-agent: *\nCrawl-delay: 10\n")
        respx_mock.get("https://x.test/p").mock(return_value=httpx.Response(200, text=_PAGE_HTML))

        resp = client.get("/scrape", params={"url": "https://x.test/p"})

        assert resp.status_code == 200
        assert resp.json() == {
            "success": True,
            "url": "https://x.test/p",
            "robots": {"crawlDelay": 10},
            "data": {
                "title": "Shares",
                "headings": ["Market", "Today"],
                "links": [
                    {"href": "https://x.test/news", "text": "News"},
                    {"href": "https://other.test/", "text": "Elsewhere"},
                ],
            },
        }

    def test_no_robots_reports_null_crawl_delay(self, client, respx_mock):
        _mock_robots(respx_mock)
        respx_mock.get("https://x.test/p").mock(return_value=httpx.Response(200, text="<p>hi</p>"))

        resp = client.get("/scrape", params={"url": "https://x.test/p"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["robots"] == {"crawlDelay": None}
        assert body["data"] == {"title": None, "headings": [], "links": []}

    def test_invalid_url_returns_400(self, client):
        resp = client.get("/scrape", params={"url": "definitely not a url"})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Invalid URL"}

    def test_unsupported_scheme_returns_400(self, client):
        resp = client.get("/scrape", params={"url": "ftp://x.test/file"})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Unsupported URL scheme"}

    def test_blocked_by_robots_returns_403(self, client, respx_mock):
        _mock_robots(respx_mock, "User-agent: *\nDisallow: /p")

        resp = client.get("/scrape", params={"url": "https://x.test/p"})

        assert resp.status_code == 403
        assert resp.json() == {"success": False, "error": "Blocked by robots.txt"}

    def test_upstream_error_returns_502(self, client, respx_mock):
        _mock_robots(respx_mock)
        respx_mock.get("https://x.test/p").mock(return_value=httpx.Response(500))

        resp = client.get("/scrape", params={"url": "https://x.test/p"})

        assert resp.status_code == 502
        assert resp.json() == {
            "success": False,
            "status": 500,
            "statusText": "Internal Server Error",
        }

    def test_fetch_exception_returns_500(self, client, respx_mock):
        _mock_robots(respx_mock)
        respx_mock.get("https://x.test/p").mock(side_effect=httpx.ReadTimeout("timed out"))

        resp = client.get("/scrape", params={"url": "https://x.test/p"})

        assert resp.status_code == 500
        assert resp.json() == {"success": False, "error": "timed out"}

    @pytest.mark.parametrize("params", [{}, {"url": ""}])
    def test_missing_url_uses_default_target(self, client, respx_mock, monkeypatch, params):
        monkeypatch.setattr(settings, "default_target_url", "https://x.test/home")
        _mock_robots(respx_mock)
        respx_mock.get("https://x.test/home").mock(
            return_value=httpx.Response(200, text="<title>Home</title>")
        )

        resp = client.get("/scrape", params=params)

        assert resp.status_code == 200
        assert resp.json()["url"] == "https://x.test/home"
        assert resp.json()["data"]["title"] == "Home"
