import pytest

from core.models import ScrapeResult, Source


class TestScrapeResult:
    def test_success_requires_data(self):
        with pytest.raises(ValueError):
            ScrapeResult(success=True, source=Source.OG)

    def test_failure_requires_error_and_no_data(self):
        with pytest.raises(ValueError):
            ScrapeResult(success=False, source=Source.OG)
        with pytest.raises(ValueError):
            ScrapeResult(success=False, source=Source.OG, error="x", data={"name": "n"})

    def test_failed_to_dict(self):
        out = ScrapeResult.failed(Source.REDDIT, "boom").to_dict()
        assert out == {"success": False, "source": "reddit", "data": None, "error": "boom"}

    def test_fallback_to_dict(self):
        result = ScrapeResult.ok(Source.OG, {"name": "n"}).as_fallback(Source.TIKTOK)
        out = result.to_dict()
        assert out["source"] == "og"
        assert out["originalSource"] == "tiktok"
        assert out["fallback"] is True
        assert "error" not in out

    def test_frozen(self):
        result = ScrapeResult.ok(Source.OG, {"name": "n"})
        with pytest.raises(AttributeError):
            result.success = False
