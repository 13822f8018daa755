"""Remote fetchers: one external JSON endpoint per instance.

A fetcher never raises for network or HTTP problems; it reports them as a
`FetchFailure` so the cached provider can decide what to serve instead.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

import requests

from .cache_store import CorruptRead
from .models.fetch_result import FetchFailure, FetchResult, FetchSuccess

logger = logging.getLogger(__name__)

USER_AGENT = "homepage-feeds/1.0 (+https://github.com/arian)"
DEFAULT_TIMEOUT_S = 10.0


class RemoteFetcher(ABC):
    """Abstract base class for a single remote data source."""

    name: str = "remote"

    @abstractmethod
    def fetch(self) -> FetchResult:
        """Call the endpoint once and return the raw payload or a failure."""


class JsonArrayFetcher(RemoteFetcher):
    """GET a URL through a ``requests.Session`` and expect a JSON array."""

    def __init__(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self.url = url
        self.params = dict(params or {})
        self.headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        if headers:
            self.headers.update(headers)
        self.session = session
        self.timeout = timeout

    def fetch(self) -> FetchResult:
        if self.session is None:
            self.session = requests.Session()
        try:
            resp = self.session.get(
                self.url,
                params=self.params,
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.info("%s fetch failed: %s", self.name, exc)
            return FetchFailure(f"transport error: {exc}")
        return check_response(self.name, resp)


def check_response(name: str, resp: requests.Response) -> FetchResult:
    """Map an HTTP response to a fetch result.

    Only a 2xx response whose body is a JSON array counts as success.
    """
    if not resp.ok:
        snippet = (resp.text or "")[:200].replace("\n", " ")
        logger.info("%s fetch failed: HTTP %s %s", name, resp.status_code, snippet)
        return FetchFailure(f"HTTP {resp.status_code}")

    body = resp.content or b""
    if not body.strip():
        logger.info("%s fetch returned an empty body", name)
        return FetchFailure("empty body")

    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as exc:
        logger.info("%s fetch returned invalid JSON: %s", name, exc)
        return FetchFailure("invalid JSON")

    if not isinstance(data, list):
        return FetchFailure(f"expected a JSON array, got {type(data).__name__}")
    return FetchSuccess(body)


def load_array(payload: bytes, what: str) -> list[Any]:
    """Decode ``payload`` as a JSON array or raise CorruptRead."""
    try:
        data = json.loads(payload)
    except (ValueError, RecursionError) as exc:
        raise CorruptRead(f"{what}: invalid JSON ({exc})") from exc
    if not isinstance(data, list):
        raise CorruptRead(f"{what}: expected a JSON array")
    return data
