"""Structural extraction: turns raw markup into an :class:`ExtractionResult`.

This is not an HTML parser.  A handful of regular expressions pull the
title, the first ``h1``–``h3`` headings and the first anchors out of the
text, which keeps the extractor tolerant of broken markup: anything that
does not match is simply left out.
"""

from __future__ import annotations

import re
from itertools import islice
from typing import Iterable, Iterator, Optional

from pagescout.scraper.models import ExtractionResult, LinkEntry
from pagescout.scraper.urls import resolve_reference

MAX_HEADINGS = 5
MAX_LINK_CANDIDATES = 50
MAX_LINKS = 10

_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")
_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)
# The closing tag must repeat the opening level (``\1``).
_HEADING_RE = re.compile(r"<(h[1-3])[^>]*>(.*?)</\1>", re.IGNORECASE | re.DOTALL)
_ANCHOR_RE = re.compile(
    r"""<a\s+[^>]*href=(["']?)([^"'\s>]+)\1[^>]*>(.*?)</a>""",
    re.IGNORECASE | re.DOTALL,
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def strip_tags(fragment: str) -> str:
    """Drop every ``<...>`` tag, collapse whitespace runs and trim."""
    text = _TAG_RE.sub("", fragment)
    return _WHITESPACE_RE.sub(" ", text).strip()


def extract_title(markup: str) -> Optional[str]:
    """Return the text of the first ``<title>`` element, or ``None``."""
    match = _TITLE_RE.search(markup)
    if match is None:
        return None
    return strip_tags(match.group(1))


def iter_headings(markup: str, limit: int = MAX_HEADINGS) -> Iterator[str]:
    """Yield the text of ``h1``–``h3`` elements in document order, at most *limit*."""
    matches = _HEADING_RE.finditer(markup)
    for match in islice(matches, limit):
        yield strip_tags(match.group(2))


def iter_link_candidates(
    markup: str, limit: int = MAX_LINK_CANDIDATES
) -> Iterator[tuple[str, str]]:
    """Yield ``(raw href, anchor text)`` for the first *limit* anchors."""
    for match in islice(_ANCHOR_RE.finditer(markup), limit):
        yield match.group(2), strip_tags(match.group(3))


def iter_resolved_links(
    candidates: Iterable[tuple[str, str]], base_origin: str
) -> Iterator[LinkEntry]:
    """Resolve candidates against *base_origin*, skipping malformed references."""
    for raw_href, text in candidates:
        href = resolve_reference(base_origin, raw_href)
        if href is None:
            continue
        yield LinkEntry(href=href, text=text)


def unique_links(links: Iterable[LinkEntry], limit: int = MAX_LINKS) -> Iterator[LinkEntry]:
    """Yield the first occurrence of each ``href``, stopping after *limit*."""
    seen: set[str] = set()
    for link in links:
        if link.href in seen:
            continue
        seen.add(link.href)
        yield link
        if len(seen) >= limit:
            return


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract(markup: str, base_origin: str) -> ExtractionResult:
    """Extract title, headings and outbound links from *markup*.

    Relative links are resolved against *base_origin*.  Never raises for
    malformed markup; missing pieces come back empty (or ``None`` for the
    title).
    """
    candidates = iter_link_candidates(markup)
    links = unique_links(iter_resolved_links(candidates, base_origin))

    return ExtractionResult(
        title=extract_title(markup),
        headings=list(iter_headings(markup)),
        links=list(links),
    )
