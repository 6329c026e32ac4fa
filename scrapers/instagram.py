from __future__ import annotations

import re

from config.settings import settings
from core.models import ScrapeResult, Source
from scrapers.base import Attempt, BaseScraper
from scrapers.page import DESKTOP_UA, EMBED_BOT_UA, browser_headers, first_of

_POST_ID_RE = re.compile(r"(?:/p/|/reel/|/reels/)([a-zA-Z0-9_-]+)")
_DOMAIN_RE = re.compile(r"instagram\.com", re.I)

_ON_INSTAGRAM_RE = re.compile(r"\s*on Instagram.*$", re.I)
_PIPE_INSTAGRAM_RE = re.compile(r"\s*\|\s*Instagram.*$", re.I)
_INSTAGRAM_PREFIX_RE = re.compile(r"^Instagram\s*[-:]\s*", re.I)

_MIN_NAME_LENGTH = 5


def extract_post_id(url: str) -> str | None:
    m = _POST_ID_RE.search(url)
    return m.group(1) if m else None


def to_mirror(url: str) -> str:
    return _DOMAIN_RE.sub(settings.INSTAGRAM_MIRROR, url, count=1)


def clean_instagram_title(name: str, description: str) -> str:
    name = _ON_INSTAGRAM_RE.sub("", name)
    name = _PIPE_INSTAGRAM_RE.sub("", name)
    name = _INSTAGRAM_PREFIX_RE.sub("", name).strip()
    # A bare handle makes a poor title; the caption usually says more.
    if name.startswith("@") or len(name) < _MIN_NAME_LENGTH:
        if len(description) > _MIN_NAME_LENGTH:
            name = description
    return name


class InstagramScraper(BaseScraper):
    source_name = Source.INSTAGRAM

    def attempts(self) -> list[Attempt]:
        return [self._scrape_mirror, self._scrape_original]

    async def _scrape_mirror(self, url: str) -> ScrapeResult:
        page = await self._get_page(to_mirror(url), browser_headers(EMBED_BOT_UA))

        image = first_of(page.prop("og:image"), page.named("twitter:image"))
        name = first_of(
            page.prop("og:title"),
            page.named("twitter:title"),
            page.title(),
        ) or "Instagram Post"
        description = first_of(
            page.prop("og:description"),
            page.named("description"),
        ) or ""

        return self._ok(
            {
                "image": image,
                "name": clean_instagram_title(name, description),
                "description": description,
                "postId": extract_post_id(url),
                "originalUrl": url,
            }
        )

    async def _scrape_original(self, url: str) -> ScrapeResult:
        # Usually blocked without a session, still worth one try.
        page = await self._get_page(url, browser_headers(DESKTOP_UA))

        name = page.prop("og:title") or "Instagram Post"
        return self._ok(
            {
                "image": page.prop("og:image"),
                "name": _ON_INSTAGRAM_RE.sub("", name).strip(),
                "description": page.prop("og:description") or "",
                "postId": extract_post_id(url),
                "originalUrl": url,
            }
        )
