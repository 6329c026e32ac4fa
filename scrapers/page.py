"""HTTP fetch and HTML query helpers shared by every scraper."""

from __future__ import annotations

import re
from collections.abc import Iterator

import httpx
from scrapling.parser import Selector

from config.settings import settings

BROWSER_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Mirror front-ends only serve their rich meta tags to link-preview bots.
EMBED_BOT_UA = "Mozilla/5.0 (compatible; Discordbot/2.0; +https://discordapp.com)"

DESKTOP_UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


def browser_headers(user_agent: str = BROWSER_UA, accept: str = HTML_ACCEPT) -> dict[str, str]:
    return {
        "User-Agent": user_agent,
        "Accept": accept,
        "Accept-Language": "en-US,en;q=0.5",
    }


class UpstreamShapeError(ValueError):
    """An endpoint answered, but not with the structure we expected."""


def build_client(
    headers: dict[str, str],
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers=headers,
        follow_redirects=True,
        max_redirects=settings.MAX_REDIRECTS,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
        transport=transport,
    )


def first_of(*values: str | None) -> str | None:
    """Return the first non-empty value, mirroring an ``a or b or c`` chain."""
    for value in values:
        if value:
            return value
    return None


_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


def parse_dimension(value: str | None) -> int:
    """Leading integer of a width/height attribute ("300px" -> 300), else 0."""
    if not value:
        return 0
    m = _LEADING_INT_RE.match(value)
    return int(m.group(1)) if m else 0


class Page:
    """A fetched HTML document plus the URL it was finally served from."""

    def __init__(self, html: str, url: str) -> None:
        self.url = url
        self._doc = Selector(html)

    @classmethod
    def from_response(cls, resp: httpx.Response) -> Page:
        return cls(resp.text, str(resp.url))

    def attr(self, selector: str, name: str) -> str | None:
        found = self._doc.css(selector)
        if not found:
            return None
        value = found[0].attrib.get(name)
        return str(value) if value is not None else None

    def attrs(self, selector: str, name: str) -> Iterator[tuple[str, dict[str, str]]]:
        """Yield ``(value, attributes)`` for every element carrying ``name``."""
        for el in self._doc.css(selector):
            value = el.attrib.get(name)
            if value is not None:
                yield str(value), {k: str(v) for k, v in el.attrib.items()}

    def prop(self, key: str) -> str | None:
        return self.attr(f'meta[property="{key}"]', "content")

    def named(self, key: str) -> str | None:
        return self.attr(f'meta[name="{key}"]', "content")

    def title(self) -> str:
        found = self._doc.css("title")
        if not found:
            return ""
        return str(found[0].text or "")

    def scripts(self) -> Iterator[str]:
        for el in self._doc.css("script"):
            text = el.text
            if text:
                yield str(text)

    def search_scripts(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        """First match of ``pattern`` across inline scripts, in document order."""
        for text in self.scripts():
            m = pattern.search(text)
            if m:
                return m
        return None
