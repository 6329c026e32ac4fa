"""
Shared test fixtures.

Scrapers take an httpx transport, so tests plug in a MockTransport routed by
exact URL. Unrouted URLs behave like an unreachable host.
"""
from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from scrapers.dispatcher import ScrapeDispatcher

Route = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    def __init__(self) -> None:
        self.routes: dict[str, Route] = {}
        self.requests: list[httpx.Request] = []

    def html(self, url: str, body: str, status: int = 200) -> None:
        self.routes[url] = lambda request: httpx.Response(status, html=body)

    def json(self, url: str, payload, status: int = 200) -> None:
        self.routes[url] = lambda request: httpx.Response(status, json=payload)

    def redirect(self, url: str, location: str) -> None:
        self.routes[url] = lambda request: httpx.Response(301, headers={"Location": location})

    def route(self, url: str, fn: Route) -> None:
        self.routes[url] = fn

    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            raise httpx.ConnectError(f"Connection refused: {request.url}", request=request)
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def dispatcher(backend) -> ScrapeDispatcher:
    return ScrapeDispatcher(transport=backend.transport)


def meta_page(
    *,
    props: dict[str, str] | None = None,
    names: dict[str, str] | None = None,
    title: str | None = None,
    body: str = "",
) -> str:
    """Small HTML document with the given meta tags."""
    head = []
    for key, value in (props or {}).items():
        head.append(f'<meta property="{key}" content="{value}">')
    for key, value in (names or {}).items():
        head.append(f'<meta name="{key}" content="{value}">')
    if title is not None:
        head.append(f"<title>{title}</title>")
    return f"<html><head>{''.join(head)}</head><body>{body}</body></html>"
