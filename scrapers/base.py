from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

import httpx

from config.settings import settings
from core.models import ScrapeResult, Source
from scrapers.page import Page, browser_headers, build_client

log = logging.getLogger(__name__)

Attempt = Callable[[str], Awaitable[ScrapeResult]]


def truncate_name(name: str) -> str:
    limit = settings.NAME_MAX_LENGTH
    if len(name) > limit:
        return name[: limit - 3] + "..."
    return name


def error_message(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


class BaseScraper(ABC):
    """One extraction strategy for one source.

    Subclasses list their attempts in order. An attempt that raises hands over
    to the next one; an attempt that returns ends the chain. When every attempt
    raises, the failure carries the first attempt's message.
    """

    source_name: Source

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    @abstractmethod
    def attempts(self) -> list[Attempt]:
        ...

    async def scrape(self, url: str) -> ScrapeResult:
        first_error: Exception | None = None
        for attempt in self.attempts():
            try:
                return await attempt(url)
            except Exception as exc:
                log.debug(
                    "%s attempt %s failed for %s: %s",
                    self.source_name.value, attempt.__name__, url, exc,
                )
                if first_error is None:
                    first_error = exc

        msg = error_message(first_error) if first_error else "No extraction attempts"
        log.warning("%s scrape failed for %s: %s", self.source_name.value, url, msg)
        return ScrapeResult.failed(self.source_name, msg)

    # -- Network helpers --

    async def _get(self, url: str, headers: dict[str, str] | None = None) -> httpx.Response:
        async with build_client(headers or browser_headers(), self._transport) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            return resp

    async def _get_page(self, url: str, headers: dict[str, str] | None = None) -> Page:
        resp = await self._get(url, headers)
        return Page.from_response(resp)

    async def _get_json(self, url: str, headers: dict[str, str] | None = None):
        resp = await self._get(url, headers)
        return resp.json()

    def _ok(self, data: dict) -> ScrapeResult:
        data["name"] = truncate_name(data.get("name") or "")
        return ScrapeResult.ok(self.source_name, data)
