"""Generic Open Graph scraper, usable on any page."""

from __future__ import annotations

import re
from urllib.parse import urljoin

from core.models import ScrapeResult, Source
from scrapers.base import Attempt, BaseScraper
from scrapers.page import Page, first_of, parse_dimension

# " - Site Name" or " | Site Name" at the end of a title.
_SITE_SUFFIX_RE = re.compile(r"\s*[-|]\s*[^-|]+$")

_MIN_IMAGE_SIDE = 200


def _first_content_image(page: Page) -> str | None:
    for src, attrs in page.attrs("img[src]", "src"):
        width = parse_dimension(attrs.get("width"))
        height = parse_dimension(attrs.get("height"))
        big_enough = width > _MIN_IMAGE_SIDE or height > _MIN_IMAGE_SIDE
        if not (big_enough or (not width and not height and src)):
            continue
        if src.startswith("data:") or "pixel" in src or "tracking" in src:
            continue
        return src
    return None


def extract_image(page: Page) -> str | None:
    image = first_of(
        page.prop("og:image"),
        page.prop("og:image:url"),
        page.named("twitter:image"),
        page.named("twitter:image:src"),
        page.attr('link[rel="image_src"]', "href"),
        page.attr('meta[itemprop="image"]', "content"),
    ) or _first_content_image(page)

    if image and not image.startswith("http"):
        image = urljoin(page.url, image)
    return image


def clean_title(name: str) -> str:
    return _SITE_SUFFIX_RE.sub("", name).strip()


class OpenGraphScraper(BaseScraper):
    source_name = Source.OG

    def attempts(self) -> list[Attempt]:
        return [self._scrape_page]

    async def _scrape_page(self, url: str) -> ScrapeResult:
        page = await self._get_page(url)

        name = first_of(
            page.prop("og:title"),
            page.named("twitter:title"),
            page.named("title"),
            page.title(),
        ) or "Untitled"

        description = first_of(
            page.prop("og:description"),
            page.named("twitter:description"),
            page.named("description"),
        ) or ""

        return self._ok(
            {
                "image": extract_image(page),
                "name": clean_title(name),
                "description": description,
                "siteName": page.prop("og:site_name") or "",
                "originalUrl": url,
            }
        )
