"""GitHub repository listing fetcher and repo parsing."""

from __future__ import annotations

import logging
from typing import Any

import requests

from .cache_store import CorruptRead
from .fetch import DEFAULT_TIMEOUT_S, JsonArrayFetcher, load_array
from .models.records import Repo

logger = logging.getLogger(__name__)

GITHUB_API_BASE = "https://api.github.com"


class ReposFetcher(JsonArrayFetcher):
    """Anonymous listing of one user's repositories, most recently pushed first."""

    name = "repos"

    def __init__(
        self,
        user: str,
        session: requests.Session | None = None,
        api_base: str = GITHUB_API_BASE,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self.user = user
        super().__init__(
            f"{api_base.rstrip('/')}/users/{user}/repos",
            params={"sort": "pushed"},
            headers={"Accept": "application/vnd.github+json"},
            session=session,
            timeout=timeout,
        )


def _parse_repo(entry: Any) -> Repo:
    if not isinstance(entry, dict):
        raise CorruptRead("repos: record is not an object")
    name = entry.get("name")
    url = entry.get("html_url")
    if not isinstance(name, str) or not name or not isinstance(url, str) or not url:
        raise CorruptRead("repos: record is missing name or html_url")
    description = entry.get("description")
    if not isinstance(description, str):
        description = None
    return Repo(name=name, url=url, description=description)


def parse_repos(payload: bytes) -> list[Repo]:
    """Parse a raw repository listing, keeping API order."""
    return [_parse_repo(entry) for entry in load_array(payload, "repos")]
