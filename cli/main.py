"""PageScout CLI — entry-point for the scraper and the API server.

Usage:
    python cli/main.py --help

Commands:
    scrape    → robots check + fetch + extraction for one URL
    robots    → robots.txt verdict for one URL
    extract   → extraction only, on a local HTML file
    serve     → run the FastAPI app under uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from pagescout.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import json
from typing import Any, Optional

import typer

from pagescout.config import configure_logging, settings
from pagescout.scraper.errors import ScrapeError
from pagescout.scraper.extractor import extract
from pagescout.scraper.pipeline import scrape
from pagescout.scraper.robots import evaluate
from pagescout.scraper.urls import origin_of, parse_target_url, request_path

app = typer.Typer(
    name="pagescout",
    help="PageScout single-page scraper CLI.",
    no_args_is_help=True,
)


def _echo_json(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL."),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(log_level.upper() if log_level else None)


@app.command("scrape")
def scrape_cmd(
    url: Optional[str] = typer.Option(None, help="URL to scrape (defaults to the demo target)."),
) -> None:
    """Scrape a URL and print the JSON summary the API would return."""
    target = url or settings.default_target_url
    try:
        result = asyncio.run(scrape(target))
    except ScrapeError as exc:
        _echo_json(exc.payload())
        raise typer.Exit(code=1)
    _echo_json(result.to_dict())


@app.command("robots")
def robots_cmd(
    url: str = typer.Option(..., help="URL whose robots.txt verdict to show."),
) -> None:
    """Print whether robots.txt allows fetching *url*."""
    try:
        target = parse_target_url(url)
    except ScrapeError as exc:
        _echo_json(exc.payload())
        raise typer.Exit(code=1)

    origin = origin_of(target)
    path = request_path(target)
    decision = asyncio.run(evaluate(origin, path))

    typer.echo(f"[robots] Origin      : {origin}")
    typer.echo(f"[robots] Path        : {path}")
    typer.echo(f"[robots] Allowed     : {'yes' if decision.allowed else 'no'}")
    delay = "(none)" if decision.crawl_delay is None else f"{decision.crawl_delay:g}s"
    typer.echo(f"[robots] Crawl-delay : {delay}")


@app.command("extract")
def extract_cmd(
    file: Path = typer.Option(..., exists=True, dir_okay=False, help="Local HTML file."),
    base: str = typer.Option(..., help="Origin used to resolve relative links."),
) -> None:
    """Run the extractor on a local HTML file and print the result."""
    markup = file.read_text(encoding="utf-8", errors="replace")
    _echo_json(extract(markup, base).to_dict())


@app.command("serve")
def serve(
    host: str = typer.Option(settings.api_host, help="Interface to bind."),
    port: int = typer.Option(settings.api_port, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Start the HTTP API under uvicorn."""
    import uvicorn  # noqa: PLC0415

    typer.echo(f"[serve] Listening on http://{host}:{port}")
    uvicorn.run("pagescout.api.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
