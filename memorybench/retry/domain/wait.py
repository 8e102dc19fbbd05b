"""Heuristics over provider and model error messages.

Rate-limited APIs often say how long to back off ("Please try again in 8.5s").
These helpers pull that hint out of free text so the retry loop can honor it.
"""

import re

_RATE_LIMIT_MARKERS: tuple[str, ...] = (
    "rate_limit",
    "rate limit",
    "429",
    "too many requests",
    "request was rejected",
    "overloaded",
    "capacity",
)

_WAIT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"try again in (\d+(?:\.\d+)?)\s*s", re.IGNORECASE),
    re.compile(r"retry after (\d+(?:\.\d+)?)\s*s", re.IGNORECASE),
    re.compile(r"wait (\d+(?:\.\d+)?)\s*s", re.IGNORECASE),
    re.compile(r"(\d+(?:\.\d+)?)\s*seconds?", re.IGNORECASE),
)


def looks_rate_limited(message: str) -> bool:
    """Return True when message reads like a rate-limit or capacity rejection."""
    lowered = message.lower()
    return any(marker in lowered for marker in _RATE_LIMIT_MARKERS)


def suggested_wait_seconds(message: str) -> float | None:
    """Return the wait suggested by message in seconds, or None if it names none."""
    for pattern in _WAIT_PATTERNS:
        match = pattern.search(message)
        if match:
            return float(match.group(1))
    return None
