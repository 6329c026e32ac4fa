"""Reddit scraper using the public JSON API, with an HTML fallback."""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import urlsplit

from config.settings import settings
from core.models import ScrapeResult, Source
from scrapers.base import Attempt, BaseScraper
from scrapers.page import browser_headers, first_of

log = logging.getLogger(__name__)

JSON_ACCEPT = "application/json,text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

# Placeholder values Reddit puts in `thumbnail` when there is no real image.
SENTINEL_THUMBNAILS = frozenset({"self", "default", "nsfw", "spoiler", "image"})

_SUFFIX_RE = re.compile(r"\s*:\s*Reddit.*$", re.I)


def to_json_url(url: str) -> str:
    path = urlsplit(url).path.rstrip("/")
    return f"{settings.REDDIT_BASE_URL}{path}.json"


def _first_child(listing: Any) -> dict | None:
    if not isinstance(listing, dict):
        return None
    children = (listing.get("data") or {}).get("children") or []
    if not children or not isinstance(children[0], dict):
        return None
    post = children[0].get("data")
    return post if isinstance(post, dict) and post else None


def find_post(payload: Any) -> dict | None:
    """Post object from a listing, or from the first listing of a comments page."""
    if isinstance(payload, list):
        return _first_child(payload[0]) if payload else None
    return _first_child(payload)


def _unescape(url: str | None) -> str | None:
    return url.replace("&amp;", "&") if url else url


def _preview_image(post: dict) -> str | None:
    try:
        return _unescape(post["preview"]["images"][0]["source"]["url"]) or None
    except (KeyError, IndexError, TypeError):
        return None


def pick_image(post: dict) -> str | None:
    image = _unescape(
        first_of(post.get("url_overridden_by_dest"), post.get("thumbnail"))
    ) or _preview_image(post)
    if image in SENTINEL_THUMBNAILS:
        image = _preview_image(post)
    return image


class RedditScraper(BaseScraper):
    source_name = Source.REDDIT

    def attempts(self) -> list[Attempt]:
        return [self._scrape_json, self._scrape_html]

    async def _scrape_json(self, url: str) -> ScrapeResult:
        json_url = to_json_url(url)
        payload = await self._get_json(json_url, browser_headers(accept=JSON_ACCEPT))

        post = find_post(payload)
        if post is None:
            log.info("No post in %s", json_url)
            return ScrapeResult.failed(self.source_name, "No post found in Reddit response")

        return self._ok(
            {
                "image": pick_image(post),
                "name": post.get("title") or "Reddit Post",
                "description": post.get("selftext") or "",
                "subreddit": post.get("subreddit"),
                "upvotes": post.get("ups"),
                "originalUrl": url,
            }
        )

    async def _scrape_html(self, url: str) -> ScrapeResult:
        page = await self._get_page(url, browser_headers(accept=JSON_ACCEPT))

        image = first_of(page.prop("og:image"), page.named("twitter:image"))
        name = first_of(page.prop("og:title"), page.title()) or "Reddit Post"
        description = first_of(
            page.prop("og:description"),
            page.named("description"),
        ) or ""

        return self._ok(
            {
                "image": image,
                "name": _SUFFIX_RE.sub("", name).strip(),
                "description": description,
                "originalUrl": url,
            }
        )
