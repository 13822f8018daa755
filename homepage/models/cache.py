"""Cache-related dataclasses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CacheEntry:
    """Raw payload stored under a logical key with its write timestamp."""

    key: str
    payload: bytes
    written_at: float
