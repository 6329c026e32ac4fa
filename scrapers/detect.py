from __future__ import annotations

import re
from urllib.parse import urlsplit

from core.models import Source

# Checked in order; the first match wins.
SOURCE_PATTERNS: list[tuple[re.Pattern[str], Source]] = [
    (re.compile(r"(^|\.)(tiktok\.com|vm\.tiktok\.com)$", re.I), Source.TIKTOK),
    (re.compile(r"(^|\.)(youtube\.com|youtu\.be)$", re.I), Source.YOUTUBE),
    (re.compile(r"(^|\.)(twitter\.com|x\.com)$", re.I), Source.TWITTER),
    (re.compile(r"(^|\.)instagram\.com$", re.I), Source.INSTAGRAM),
    (re.compile(r"(^|\.)(reddit\.com|redd\.it)$", re.I), Source.REDDIT),
]

_FORBIDDEN_HOST_CHARS = frozenset('<>"{}|\\^`')


def parse_http_url(url: str) -> str | None:
    """Lower-cased host of an absolute http(s) URL, or None if it is not one."""
    if not isinstance(url, str):
        return None
    try:
        parts = urlsplit(url.strip())
        host = parts.hostname
        # Raises for a non-numeric or out-of-range port.
        parts.port
    except ValueError:
        return None
    if parts.scheme.lower() not in ("http", "https") or not host:
        return None
    if any(c.isspace() or c in _FORBIDDEN_HOST_CHARS for c in host):
        return None
    return host.lower()


def is_valid_url(url: str) -> bool:
    return parse_http_url(url) is not None


def detect_source(url: str) -> Source:
    host = parse_http_url(url)
    if host is None:
        return Source.UNKNOWN
    for pattern, source in SOURCE_PATTERNS:
        if pattern.search(host):
            return source
    return Source.UNKNOWN
