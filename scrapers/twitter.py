from __future__ import annotations

import re
from urllib.parse import urlsplit

import httpx

from config.settings import settings
from core.models import ScrapeResult, Source
from scrapers.base import Attempt, BaseScraper
from scrapers.page import EMBED_BOT_UA, UpstreamShapeError, browser_headers, first_of

_STATUS_RE = re.compile(r"status/(\d+)")
_LABEL_PREFIX_RE = re.compile(r"^[^:/]*:\s*")
_HANDLE_RE = re.compile(r"^\w{1,15}$")

_MIN_NAME_LENGTH = 10


def extract_tweet_id(url: str) -> str | None:
    m = _STATUS_RE.search(url)
    return m.group(1) if m else None


def extract_author(url: str) -> str | None:
    segments = [s for s in urlsplit(url).path.split("/") if s]
    if segments and segments[0] != "i" and _HANDLE_RE.match(segments[0]):
        return segments[0]
    return None


def to_mirror(url: str, mirror: str) -> str:
    parts = urlsplit(url)
    return f"https://{mirror}{parts.path}"


class TwitterScraper(BaseScraper):
    """Scrapes tweets through embed-friendly mirror front-ends.

    x.com serves no usable meta tags without a login, so the status URL is
    rewritten to the configured mirrors (primary first) which re-serve the
    tweet with rich link-preview tags.
    """

    source_name = Source.TWITTER

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        super().__init__(transport)
        self._mirrors = [
            m.strip() for m in settings.TWITTER_MIRRORS.split(",") if m.strip()
        ]

    def attempts(self) -> list[Attempt]:
        return [self._scrape_primary_mirror, self._scrape_secondary_mirror]

    async def scrape(self, url: str) -> ScrapeResult:
        if not extract_tweet_id(url):
            return ScrapeResult.failed(self.source_name, "Could not extract tweet ID from URL")
        return await super().scrape(url)

    def _mirror(self, index: int) -> str:
        if index >= len(self._mirrors):
            raise UpstreamShapeError(f"No twitter mirror configured at position {index + 1}")
        return self._mirrors[index]

    async def _scrape_primary_mirror(self, url: str) -> ScrapeResult:
        mirror_url = to_mirror(url, self._mirror(0))
        page = await self._get_page(mirror_url, browser_headers(EMBED_BOT_UA))

        image = first_of(
            page.prop("og:image"),
            page.named("twitter:image"),
            page.named("twitter:image:src"),
        )
        name = first_of(
            page.prop("og:title"),
            page.named("twitter:title"),
            page.title(),
        ) or "Twitter Post"
        description = first_of(
            page.prop("og:description"),
            page.named("twitter:description"),
        ) or ""

        name = _LABEL_PREFIX_RE.sub("", name, count=1).strip()
        if len(name) < _MIN_NAME_LENGTH and len(description) > len(name):
            name = description

        return self._result(url, image, name, description)

    async def _scrape_secondary_mirror(self, url: str) -> ScrapeResult:
        mirror_url = to_mirror(url, self._mirror(1))
        page = await self._get_page(mirror_url, browser_headers(EMBED_BOT_UA))

        description = page.prop("og:description") or ""
        name = description or page.prop("og:title") or "Twitter Post"
        image = first_of(page.prop("og:image"), page.named("twitter:image"))

        return self._result(url, image, name, description)

    def _result(self, url: str, image: str | None, name: str, description: str) -> ScrapeResult:
        return self._ok(
            {
                "image": image,
                "name": name,
                "description": description,
                "tweetId": extract_tweet_id(url),
                "author": extract_author(url),
                "originalUrl": url,
            }
        )
