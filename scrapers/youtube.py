from __future__ import annotations

import re

from core.models import ScrapeResult, Source
from scrapers.base import Attempt, BaseScraper
from scrapers.page import first_of

VIDEO_ID_PATTERNS = [
    re.compile(
        r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/)"
        r"([a-zA-Z0-9_-]{11})"
    ),
    re.compile(r"youtube\.com/shorts/([a-zA-Z0-9_-]{11})"),
]

THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"

_SUFFIX_RE = re.compile(r"\s*-\s*YouTube.*$", re.I)
_VIEW_COUNT_RE = re.compile(r'"viewCount"\s*:\s*"?(\d+)"?')


def extract_video_id(url: str) -> str | None:
    for pattern in VIDEO_ID_PATTERNS:
        m = pattern.search(url)
        if m:
            return m.group(1)
    return None


class YouTubeScraper(BaseScraper):
    source_name = Source.YOUTUBE

    def attempts(self) -> list[Attempt]:
        return [self._scrape_page]

    async def _scrape_page(self, url: str) -> ScrapeResult:
        video_id = extract_video_id(url)
        page = await self._get_page(url)

        if video_id:
            image = THUMBNAIL_URL.format(video_id=video_id)
        else:
            image = first_of(page.prop("og:image"), page.named("twitter:image"))

        name = first_of(
            page.prop("og:title"),
            page.named("twitter:title"),
            page.title(),
        ) or "YouTube Video"

        description = first_of(
            page.prop("og:description"),
            page.named("description"),
        ) or ""

        m = page.search_scripts(_VIEW_COUNT_RE)
        views = int(m.group(1)) if m else None

        return self._ok(
            {
                "image": image,
                "name": _SUFFIX_RE.sub("", name).strip(),
                "description": description,
                "views": views,
                "videoId": video_id,
                "originalUrl": url,
            }
        )
