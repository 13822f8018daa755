"""Outcome of a single remote fetch."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FetchSuccess:
    payload: bytes


@dataclass(frozen=True)
class FetchFailure:
    reason: str


FetchResult = FetchSuccess | FetchFailure
