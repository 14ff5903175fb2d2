"""URL helpers: target validation, origin / path split and link resolution."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

import httpx

from pagescout.scraper.errors import InvalidInputUrl

_ALLOWED_SCHEMES = ("http", "https")

# RFC 3986 §4.2: a relative-path reference cannot carry a colon in its first
# segment, otherwise it would be read as a scheme.
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


def _with_root_path(url: httpx.URL) -> httpx.URL:
    """Serialise a bare authority the way browsers do (``https://a.com/``)."""
    # httpx reports an empty path as "/", so look at the serialised form.
    if url.host and not urlsplit(str(url)).path:
        return url.copy_with(path="/")
    return url


def _has_valid_authority(url: httpx.URL) -> bool:
    """``False`` for http(s) URLs without a host or with an out-of-range port."""
    if url.scheme in _ALLOWED_SCHEMES and not url.host:
        return False
    return url.port is None or 0 <= url.port <= 65535


def parse_target_url(raw: str) -> httpx.URL:
    """Return *raw* as an absolute http(s) :class:`httpx.URL`.

    Raises:
        InvalidInputUrl: If *raw* is malformed, relative, or not http(s).
    """
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidInputUrl(raw) from exc
    if url.scheme and url.scheme not in _ALLOWED_SCHEMES:
        raise InvalidInputUrl(raw, "Unsupported URL scheme")
    if not url.scheme or not _has_valid_authority(url):
        raise InvalidInputUrl(raw)
    return _with_root_path(url)


def origin_of(url: httpx.URL) -> str:
    """Return ``scheme://host[:port]`` for *url* (default ports omitted)."""
    return f"{url.scheme}://{url.netloc.decode('ascii')}"


def request_path(url: httpx.URL) -> str:
    """Return the path plus query string, the string robots rules are matched against."""
    return url.raw_path.decode("ascii") or "/"


def resolve_reference(base: str, ref: str) -> Optional[str]:
    """Resolve *ref* against *base*; ``None`` if *ref* cannot be resolved."""
    ref = ref.strip()
    if not ref:
        return None
    try:
        if _SCHEME_RE.match(ref):
            # Checked before joining: ``https://`` would borrow the base host.
            if not _has_valid_authority(httpx.URL(ref)):
                return None
        elif ":" in re.split(r"[/?#]", ref, maxsplit=1)[0]:
            return None
        resolved = httpx.URL(base).join(ref)
    except (httpx.InvalidURL, TypeError, ValueError):
        return None
    if not resolved.scheme or not _has_valid_authority(resolved):
        return None
    return str(_with_root_path(resolved))
