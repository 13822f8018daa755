"""Durable key -> raw payload storage with write timestamps.

Every logical key ("tweets", "repos") maps to the last successfully fetched
response body. `FileCacheStore` keeps one file per key and uses the file
modification time as the write timestamp; `MemoryCacheStore` offers the same
contract without touching disk.
"""

from __future__ import annotations

import logging
import math
import os
import re
import time
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Callable

from .models.cache import CacheEntry

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class CacheError(Exception):
    """Base class for cache store errors."""


class CacheNotFound(CacheError):
    """No entry has been written for the key."""


class CorruptRead(CacheError):
    """The entry exists but cannot be read or parsed."""


def _check_key(key: str) -> str:
    if not key or not _KEY_RE.match(key) or key in {".", ".."}:
        raise ValueError(f"invalid cache key: {key!r}")
    return key


def _age_since(written_at: float, now: float) -> float:
    age = now - written_at
    if age < 0:
        # Clock skew: treat as stale rather than as fresh forever.
        return math.inf
    return age


class CacheStore(ABC):
    """Abstract key -> bytes store used by cached providers."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True iff an entry has ever been written for ``key``."""

    @abstractmethod
    def age(self, key: str) -> float:
        """Seconds since the last write; ``math.inf`` if unknowable.

        Raises:
            CacheNotFound: If no entry exists.
        """

    @abstractmethod
    def read(self, key: str) -> bytes:
        """Return the raw payload.

        Raises:
            CacheNotFound: If no entry exists.
            CorruptRead: If the entry cannot be read.
        """

    @abstractmethod
    def write(self, key: str, payload: bytes) -> None:
        """Atomically replace the entry and stamp it with the current time."""

    @abstractmethod
    def entry(self, key: str) -> CacheEntry:
        """Return the stored payload together with its write timestamp.

        Raises:
            CacheNotFound: If no entry exists.
        """


class FileCacheStore(CacheStore):
    """One ``<key>.json`` file per key under ``base_dir``."""

    def __init__(
        self, base_dir: str | Path, clock: Callable[[], float] = time.time
    ) -> None:
        self.base_dir = Path(base_dir)
        self._clock = clock
        self._write_lock = Lock()

    def path_for(self, key: str) -> Path:
        return self.base_dir / f"{_check_key(key)}.json"

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def age(self, key: str) -> float:
        path = self.path_for(key)
        if not path.is_file():
            raise CacheNotFound(key)
        try:
            mtime = path.stat().st_mtime
        except OSError as exc:
            logger.debug("Cannot stat cache entry %s: %s", path, exc)
            return math.inf
        return _age_since(mtime, self._clock())

    def read(self, key: str) -> bytes:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise CacheNotFound(key) from exc
        except OSError as exc:
            raise CorruptRead(f"{key}: {exc}") from exc

    def write(self, key: str, payload: bytes) -> None:
        path = self.path_for(key)
        with self._write_lock:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            tmp = path.with_name(f".{path.name}.tmp.{os.getpid()}")
            try:
                tmp.write_bytes(payload)
                now = self._clock()
                os.utime(tmp, (now, now))
                os.replace(tmp, path)
            finally:
                if tmp.exists():
                    tmp.unlink()
        logger.debug("Wrote %d bytes to %s", len(payload), path)

    def entry(self, key: str) -> CacheEntry:
        path = self.path_for(key)
        payload = self.read(key)
        try:
            written_at = path.stat().st_mtime
        except OSError as exc:
            raise CorruptRead(f"{key}: {exc}") from exc
        return CacheEntry(key=key, payload=payload, written_at=written_at)


class MemoryCacheStore(CacheStore):
    """Process-local store with the same contract as FileCacheStore."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = Lock()

    def exists(self, key: str) -> bool:
        return _check_key(key) in self._entries

    def age(self, key: str) -> float:
        entry = self._entries.get(_check_key(key))
        if entry is None:
            raise CacheNotFound(key)
        return _age_since(entry.written_at, self._clock())

    def read(self, key: str) -> bytes:
        entry = self._entries.get(_check_key(key))
        if entry is None:
            raise CacheNotFound(key)
        return entry.payload

    def write(self, key: str, payload: bytes) -> None:
        entry = CacheEntry(
            key=_check_key(key), payload=bytes(payload), written_at=self._clock()
        )
        with self._lock:
            self._entries[key] = entry

    def entry(self, key: str) -> CacheEntry:
        entry = self._entries.get(_check_key(key))
        if entry is None:
            raise CacheNotFound(key)
        return entry
