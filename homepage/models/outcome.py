"""Which path a provider took to produce its output."""

from __future__ import annotations

from enum import Enum


class ServeOutcome(str, Enum):
    FRESH = "fresh"
    CACHED = "cached"
    STALE = "stale"
    EMPTY = "empty"
