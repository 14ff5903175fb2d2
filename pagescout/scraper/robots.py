"""robots.txt policy gate for the universal (``User-agent: *``) group.

The parser is deliberately small: only ``User-agent``, ``Disallow`` and
``Crawl-delay`` are understood, ``Disallow`` values are literal path
prefixes (no wildcards, no ``$`` anchor) and ``Allow`` is ignored.

A robots file that is missing, unreachable or broken never blocks a fetch:
:func:`evaluate` falls back to "allowed" and never raises.
"""

from __future__ import annotations

import enum
import logging
import math
from typing import Iterable, Optional

from pagescout.scraper.fetcher import fetch_robots_txt
from pagescout.scraper.models import PolicyDecision, RobotsPolicy

logger = logging.getLogger(__name__)

UNIVERSAL_AGENT = "*"


class GroupState(enum.Enum):
    """Whether the parser is currently inside a ``User-agent: *`` group."""

    OUTSIDE = "outside"
    UNIVERSAL = "universal"


def next_group_state(user_agent: str) -> GroupState:
    """Return the state entered by a ``User-agent`` line with value *user_agent*."""
    if user_agent == UNIVERSAL_AGENT:
        return GroupState.UNIVERSAL
    return GroupState.OUTSIDE


def _parse_crawl_delay(value: str) -> Optional[float]:
    try:
        delay = float(value)
    except ValueError:
        return None
    if not math.isfinite(delay) or delay < 0:
        return None
    return delay


def _directives(lines: Iterable[str]) -> Iterable[tuple[str, str]]:
    """Yield ``(lowercased name, trimmed value)`` for every meaningful line."""
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        name, _, value = line.partition(":")
        yield name.strip().lower(), value.strip()


def parse_robots(text: str) -> RobotsPolicy:
    """Build a :class:`RobotsPolicy` from the body of a robots.txt file.

    ``Disallow`` entries of every ``User-agent: *`` group accumulate into one
    sequence, even when the group is closed and re-opened later in the file.
    """
    policy = RobotsPolicy()
    state = GroupState.OUTSIDE

    for name, value in _directives(text.splitlines()):
        if name == "user-agent":
            state = next_group_state(value)
            continue
        if state is not GroupState.UNIVERSAL:
            continue

        if name == "disallow":
            # An empty Disallow means "allow everything".
            if value:
                policy.disallowed_prefixes.append(value)
        elif name == "crawl-delay":
            delay = _parse_crawl_delay(value)
            if delay is not None:
                policy.crawl_delay = delay

    return policy


async def load_policy(origin: str) -> RobotsPolicy:
    """Fetch and parse ``{origin}/robots.txt``; a missing file yields an empty policy."""
    text = await fetch_robots_txt(origin)
    if text is None:
        return RobotsPolicy()
    return parse_robots(text)


async def evaluate(origin: str, path: str) -> PolicyDecision:
    """Decide whether *path* on *origin* may be fetched.

    Never raises: any failure while retrieving or parsing the policy is
    logged and treated as "allowed, no crawl delay".
    """
    try:
        policy = await load_policy(origin)
    except Exception as exc:  # noqa: BLE001
        logger.warning(
            "Could not read robots.txt for %s (%s) -- assuming fetching is allowed",
            origin,
            exc,
        )
        return PolicyDecision(allowed=True)

    if policy.crawl_delay is not None:
        logger.info("robots.txt for %s advertises crawl-delay of %s seconds", origin, policy.crawl_delay)

    allowed = policy.allows(path)
    if not allowed:
        logger.warning("robots.txt for %s disallows %s", origin, path)
    return PolicyDecision(allowed=allowed, crawl_delay=policy.crawl_delay)
