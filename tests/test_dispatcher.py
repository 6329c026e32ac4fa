"""
Tests for source dispatch and the Open Graph fallback.
"""
import httpx
import pytest

from conftest import meta_page
from core.models import Source
from scrapers.dispatcher import INVALID_URL_ERROR

TWEET = "https://x.com/jack/status/20"
REDDIT = "https://www.reddit.com/r/test/comments/abc123/hello_world/"


class TestInvalidUrl:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "url",
        [
            "not a url",
            "",
            "ftp://example.com/x",
            "https://",
            "www.tiktok.com/@u",
            "http://example.com:99999/x",
            "https://exa mple.com/x",
            "http://exa<mple.com/",
        ],
    )
    async def test_rejected_without_network(self, backend, dispatcher, url):
        result = await dispatcher.scrape(url)
        assert not result.success
        assert result.error == INVALID_URL_ERROR
        assert result.data is None
        assert backend.requests == []


class TestDispatch:
    @pytest.mark.asyncio
    async def test_unknown_source_uses_open_graph(self, backend, dispatcher):
        backend.html("https://example.com/page", meta_page(props={"og:image": "/img.png"}))
        result = await dispatcher.scrape("https://example.com/page")
        assert result.success
        assert result.source == Source.OG
        assert result.data["image"] == "https://example.com/img.png"
        assert result.fallback is None
        assert result.original_source is None

    @pytest.mark.asyncio
    async def test_platform_strategy_selected(self, backend, dispatcher):
        backend.html(
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            meta_page(title="Cool Video - YouTube"),
        )
        result = await dispatcher.scrape("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        assert result.source == Source.YOUTUBE
        assert result.data["name"] == "Cool Video"
        assert result.fallback is None

    @pytest.mark.asyncio
    async def test_unknown_source_failure_is_not_retried(self, backend, dispatcher):
        result = await dispatcher.scrape("https://example.com/page")
        assert not result.success
        assert result.source == Source.OG
        assert len(backend.requests) == 1


class TestFallback:
    @pytest.mark.asyncio
    async def test_failed_strategy_falls_back_to_open_graph(self, backend, dispatcher):
        backend.html(TWEET, meta_page(props={"og:title": "Post on X", "og:image": "https://x.com/og.png"}))

        result = await dispatcher.scrape(TWEET)
        assert result.success
        assert result.source == Source.OG
        assert result.fallback is True
        assert result.original_source == Source.TWITTER
        assert result.data["name"] == "Post on X"
        assert result.to_dict()["originalSource"] == "twitter"

    @pytest.mark.asyncio
    async def test_both_failing_returns_strategy_failure(self, backend, dispatcher):
        result = await dispatcher.scrape(TWEET)
        assert not result.success
        assert result.source == Source.TWITTER
        assert "fxtwitter.com" in result.error
        assert result.fallback is None
        assert backend.urls()[-1] == TWEET

    @pytest.mark.asyncio
    async def test_terminal_strategy_failure_still_falls_back(self, backend, dispatcher):
        backend.json(
            "https://www.reddit.com/r/test/comments/abc123/hello_world.json",
            {"data": {"children": []}},
        )
        backend.html(REDDIT, meta_page(props={"og:title": "Hello World"}))
        result = await dispatcher.scrape(REDDIT)
        assert result.success
        assert result.fallback is True
        assert result.original_source == Source.REDDIT

    @pytest.mark.asyncio
    async def test_fallback_after_transient_failure(self, backend, dispatcher):
        url = "https://www.tiktok.com/@u/video/123"
        calls = {"n": 0}

        def flaky(request):
            calls["n"] += 1
            if calls["n"] == 1:
                raise httpx.ReadTimeout("timed out", request=request)
            return httpx.Response(200, html=meta_page(title="Recovered | TikTok"))

        backend.route(url, flaky)
        result = await dispatcher.scrape(url)
        assert result.success
        assert result.fallback is True
        assert result.original_source == Source.TIKTOK
        assert result.data["name"] == "Recovered"


class TestInvariants:
    @pytest.mark.asyncio
    async def test_name_never_exceeds_limit(self, backend, dispatcher):
        long_title = "a" * 250
        pages = {
            "https://www.tiktok.com/@u/video/1": meta_page(props={"og:title": long_title}),
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ": meta_page(title=long_title),
            "https://fxtwitter.com/jack/status/20": meta_page(props={"og:title": long_title}),
            "https://www.ddinstagram.com/p/abc/": meta_page(props={"og:title": long_title}),
            "https://example.com/long": meta_page(title=long_title),
        }
        for url, html in pages.items():
            backend.html(url, html)

        urls = [
            "https://www.tiktok.com/@u/video/1",
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            TWEET,
            "https://www.instagram.com/p/abc/",
            "https://example.com/long",
        ]
        for url in urls:
            result = await dispatcher.scrape(url)
            assert result.success, url
            assert len(result.data["name"]) <= 100, url

    @pytest.mark.asyncio
    async def test_idempotent_against_same_backend(self, backend, dispatcher):
        backend.json(
            "https://www.reddit.com/r/test/comments/abc123/hello_world.json",
            {"data": {"children": [{"data": {"title": "Hello World", "selftext": "body", "subreddit": "test", "ups": 5}}]}},
        )
        first = await dispatcher.scrape(REDDIT)
        second = await dispatcher.scrape(REDDIT)
        assert first.to_dict() == second.to_dict()
        assert first.data["upvotes"] == 5
