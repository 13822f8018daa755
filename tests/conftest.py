"""Shared test fixtures and dummy classes."""

from __future__ import annotations

import json
from typing import Any

from homepage.fetch import RemoteFetcher
from homepage.models.fetch_result import FetchFailure, FetchResult, FetchSuccess


class DummyResponse:
    """Dummy HTTP response for testing."""

    def __init__(
        self, data: object = None, status: int = 200, content: bytes | None = None
    ) -> None:
        if content is None:
            content = b"" if data is None else json.dumps(data).encode("utf-8")
        self.content = content
        self.text = content.decode("utf-8", errors="replace")
        self.status_code = status
        self.ok = 200 <= status < 300

    def json(self) -> object:
        return json.loads(self.content)


class DummySession:
    """Dummy requests session returning canned responses (or raising)."""

    def __init__(self, response: DummyResponse | Exception) -> None:
        self.response = response
        self.calls: list[dict[str, Any]] = []
        self.auth = None

    def get(self, url: str, **kwargs: Any) -> DummyResponse:
        self.calls.append({"url": url, **kwargs})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubFetcher(RemoteFetcher):
    """Fetcher returning a fixed payload or failure and counting calls."""

    name = "stub"

    def __init__(self, payload: object = None, reason: str = "boom") -> None:
        self.payload = payload
        self.reason = reason
        self.calls = 0

    def fetch(self) -> FetchResult:
        self.calls += 1
        if self.payload is None:
            return FetchFailure(self.reason)
        if isinstance(self.payload, bytes):
            return FetchSuccess(self.payload)
        return FetchSuccess(json.dumps(self.payload).encode("utf-8"))
