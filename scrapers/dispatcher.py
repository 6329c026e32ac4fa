from __future__ import annotations

import logging

import httpx

from core.models import ScrapeResult, Source
from scrapers.base import BaseScraper
from scrapers.detect import detect_source, is_valid_url
from scrapers.instagram import InstagramScraper
from scrapers.og import OpenGraphScraper
from scrapers.reddit import RedditScraper
from scrapers.tiktok import TikTokScraper
from scrapers.twitter import TwitterScraper
from scrapers.youtube import YouTubeScraper

log = logging.getLogger(__name__)

INVALID_URL_ERROR = "Invalid URL provided"


class ScrapeDispatcher:
    """Routes a URL to its platform scraper, falling back to Open Graph tags."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._generic = OpenGraphScraper(transport)
        self._scrapers: dict[Source, BaseScraper] = {
            Source.TIKTOK: TikTokScraper(transport),
            Source.YOUTUBE: YouTubeScraper(transport),
            Source.TWITTER: TwitterScraper(transport),
            Source.INSTAGRAM: InstagramScraper(transport),
            Source.REDDIT: RedditScraper(transport),
            Source.UNKNOWN: self._generic,
        }

    def scraper_for(self, source: Source) -> BaseScraper:
        return self._scrapers.get(source, self._generic)

    async def scrape(self, url: str) -> ScrapeResult:
        if not is_valid_url(url):
            return ScrapeResult.failed(Source.UNKNOWN, INVALID_URL_ERROR)

        source = detect_source(url)
        log.info("Detected source %s for %s", source.value, url)

        result = await self.scraper_for(source).scrape(url)
        if result.success or source is Source.UNKNOWN:
            return result

        log.warning("%s scraper failed, falling back to OG tags", source.value)
        og_result = await self._generic.scrape(url)
        if og_result.success:
            return og_result.as_fallback(source)
        return result


async def scrape_url(url: str) -> ScrapeResult:
    return await ScrapeDispatcher().scrape(url)
