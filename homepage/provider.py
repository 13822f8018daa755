"""Cache-or-fetch policy shared by every homepage data source.

A provider serves its cache entry while it is younger than the TTL. Past
that it refetches; on a failed refetch it falls back to the stale entry, and
with no usable entry at all it returns an empty list. ``get()`` never raises
for cache, network or parse problems so the page always renders.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .cache_store import CacheError, CacheStore
from .fetch import RemoteFetcher
from .models.fetch_result import FetchSuccess
from .models.outcome import ServeOutcome

logger = logging.getLogger(__name__)

DEFAULT_TTL_S = 6 * 60 * 60


class CachedProvider:
    """One cache key, one fetcher and one TTL."""

    def __init__(
        self,
        key: str,
        store: CacheStore,
        fetcher: RemoteFetcher,
        parse: Callable[[bytes], list[Any]],
        ttl_s: float = DEFAULT_TTL_S,
    ) -> None:
        self.key = key
        self.store = store
        self.fetcher = fetcher
        self.parse = parse
        self.ttl_s = ttl_s
        self.last_outcome: ServeOutcome | None = None

    def _needs_refresh(self) -> bool:
        if not self.store.exists(self.key):
            return True
        try:
            return self.store.age(self.key) > self.ttl_s
        except CacheError:
            return True

    def _refresh(self) -> list[Any] | None:
        """Fetch, validate and persist. Returns None if nothing new was obtained."""
        result = self.fetcher.fetch()
        if not isinstance(result, FetchSuccess):
            logger.info("%s: refetch failed (%s)", self.key, result.reason)
            return None
        try:
            items = self.parse(result.payload)
        except CacheError as exc:
            logger.warning("%s: fetched payload rejected: %s", self.key, exc)
            return None
        try:
            self.store.write(self.key, result.payload)
        except OSError as exc:
            logger.warning("%s: could not write cache: %s", self.key, exc)
        return items

    def _read_cached(self) -> list[Any] | None:
        try:
            return self.parse(self.store.read(self.key))
        except CacheError as exc:
            logger.warning("%s: cached entry unusable: %s", self.key, exc)
            return None

    def _serve(self, outcome: ServeOutcome, items: list[Any]) -> list[Any]:
        self.last_outcome = outcome
        if outcome in (ServeOutcome.STALE, ServeOutcome.EMPTY):
            logger.warning(
                "%s: served %s (%d items)", self.key, outcome.value, len(items)
            )
        else:
            logger.debug(
                "%s: served %s (%d items)", self.key, outcome.value, len(items)
            )
        return items

    def get(self) -> list[Any]:
        refetched = False
        if self._needs_refresh():
            refetched = True
            items = self._refresh()
            if items is not None:
                return self._serve(ServeOutcome.FRESH, items)
            if not self.store.exists(self.key):
                return self._serve(ServeOutcome.EMPTY, [])

        cached = self._read_cached()
        if cached is None:
            return self._serve(ServeOutcome.EMPTY, [])
        if refetched:
            return self._serve(ServeOutcome.STALE, cached)
        return self._serve(ServeOutcome.CACHED, cached)
