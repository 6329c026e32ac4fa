from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Source(str, Enum):
    """Platform a URL belongs to.

    ``OG`` is never a classification outcome: it tags results produced by the
    generic Open Graph scraper.
    """

    TIKTOK = "tiktok"
    YOUTUBE = "youtube"
    TWITTER = "twitter"
    INSTAGRAM = "instagram"
    REDDIT = "reddit"
    UNKNOWN = "unknown"
    OG = "og"


@dataclass
class ScrapeRequest:
    """Body of a scrape call: the raw URL supplied by the caller."""

    url: str | None = None


@dataclass(frozen=True)
class ScrapeResult:
    """Outcome of one extraction, successful or not."""

    success: bool
    source: Source
    data: dict[str, Any] | None = None
    error: str | None = None
    original_source: Source | None = None
    fallback: bool | None = None

    def __post_init__(self) -> None:
        if self.success and self.data is None:
            raise ValueError("successful result requires data")
        if not self.success and (self.error is None or self.data is not None):
            raise ValueError("failed result requires an error and no data")

    @classmethod
    def ok(cls, source: Source, data: dict[str, Any]) -> ScrapeResult:
        return cls(success=True, source=source, data=data)

    @classmethod
    def failed(cls, source: Source, error: str) -> ScrapeResult:
        return cls(success=False, source=source, error=error)

    def as_fallback(self, original_source: Source) -> ScrapeResult:
        return ScrapeResult(
            success=self.success,
            source=self.source,
            data=self.data,
            error=self.error,
            original_source=original_source,
            fallback=True,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "success": self.success,
            "source": self.source.value,
            "data": self.data,
        }
        if self.error is not None:
            out["error"] = self.error
        if self.original_source is not None:
            out["originalSource"] = self.original_source.value
        if self.fallback is not None:
            out["fallback"] = self.fallback
        return out
