"""In-memory, process-lifetime state owned by the HTTP layer."""

from __future__ import annotations

import time
from collections import Counter, deque
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any


class LaunchCooldown:
    """Allows one launch per client within each cooldown window."""

    def __init__(
        self,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window = window_seconds
        self._clock = clock
        self._last_allowed: dict[str, float] = {}

    def allow(self, client: str) -> bool:
        now = self._clock()
        last = self._last_allowed.get(client)
        if last is not None and now - last < self._window:
            return False
        self._last_allowed[client] = now
        return True


class RequestLog:
    """Most recent requests first, capped at ``max_size`` entries."""

    def __init__(self, max_size: int = 100) -> None:
        self._entries: deque[dict[str, Any]] = deque(maxlen=max_size)
        self._started = time.monotonic()

    def record(self, **entry: Any) -> None:
        entry["timestamp"] = datetime.now(timezone.utc).isoformat()
        self._entries.appendleft(entry)

    @property
    def uptime(self) -> float:
        return time.monotonic() - self._started

    def entries(self, limit: int | None = None) -> list[dict[str, Any]]:
        items = list(self._entries)
        return items if limit is None else items[:limit]

    def stats(self) -> dict[str, Any]:
        entries = self.entries()
        return {
            "totalRequests": len(entries),
            "byEndpoint": dict(Counter(e["endpoint"] for e in entries)),
            "bySource": dict(Counter(e["source"] for e in entries if e.get("source"))),
            "byIP": dict(Counter(e["ip"] for e in entries if e.get("ip"))),
            "recentLaunches": [e for e in entries if e["endpoint"] == "/launch"][:10],
        }
