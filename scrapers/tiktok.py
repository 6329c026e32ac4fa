"""TikTok scraper reading the public video page (no API key needed)."""

from __future__ import annotations

import re

from core.models import ScrapeResult, Source
from scrapers.base import Attempt, BaseScraper
from scrapers.page import first_of

_HASHTAG_RE = re.compile(r"\s*#\w+")
_SUFFIX_RE = re.compile(r"\s*\|\s*TikTok.*$", re.I)
_PLAY_COUNT_RE = re.compile(r'"playCount"\s*:\s*(\d+)')
_HANDLE_RE = re.compile(r"/@([\w.-]+)")


def clean_tiktok_title(name: str) -> str:
    name = _HASHTAG_RE.sub("", name)
    return _SUFFIX_RE.sub("", name).strip()


def extract_author(url: str) -> str | None:
    m = _HANDLE_RE.search(url)
    return m.group(1) if m else None


class TikTokScraper(BaseScraper):
    source_name = Source.TIKTOK

    def attempts(self) -> list[Attempt]:
        return [self._scrape_page]

    async def _scrape_page(self, url: str) -> ScrapeResult:
        page = await self._get_page(url)

        image = first_of(
            page.prop("og:image"),
            page.named("twitter:image"),
            page.attr("video[poster]", "poster"),
        )

        name = first_of(
            page.prop("og:title"),
            page.named("twitter:title"),
            page.title(),
        ) or "TikTok Video"

        description = first_of(
            page.prop("og:description"),
            page.named("description"),
        ) or ""

        m = page.search_scripts(_PLAY_COUNT_RE)
        views = int(m.group(1)) if m else None

        return self._ok(
            {
                "image": image,
                "name": clean_tiktok_title(name),
                "description": description,
                "views": views,
                "author": extract_author(url),
                "originalUrl": url,
            }
        )
