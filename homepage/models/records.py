"""Typed records handed to the page renderer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Tweet:
    id: str
    text: str


@dataclass(frozen=True)
class Repo:
    name: str
    url: str
    description: str | None = None
