"""Entrypoint for rendering the homepage.

This module wires the cache store, fetchers and providers together, renders
the page and writes it to the configured output path.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from . import config
from .cache_store import CacheStore, FileCacheStore
from .github import ReposFetcher, parse_repos
from .logger import setup_logging
from .models.settings import Settings
from .provider import CachedProvider
from .twitter import TweetsFetcher, build_session, parse_tweets
from .view import render_page

logger = logging.getLogger(__name__)

TWEETS_KEY = "tweets"
REPOS_KEY = "repos"


def build_providers(
    settings: Settings, store: CacheStore | None = None
) -> tuple[CachedProvider, CachedProvider]:
    """Return (tweets_provider, repos_provider) sharing one cache store."""
    if store is None:
        store = FileCacheStore(settings.CACHE_DIR)

    session = build_session(
        settings.TWITTER_CONSUMER_KEY,
        settings.TWITTER_CONSUMER_SECRET,
        settings.TWITTER_ACCESS_TOKEN,
        settings.TWITTER_ACCESS_SECRET,
    )
    tweets = CachedProvider(
        TWEETS_KEY,
        store,
        TweetsFetcher(
            settings.TWITTER_SCREEN_NAME,
            session,
            count=settings.TWEETS_COUNT,
            api_base=settings.TWITTER_API_BASE,
            timeout=settings.HTTP_TIMEOUT_S,
        ),
        parse_tweets,
        ttl_s=settings.TWEETS_TTL_S,
    )
    repos = CachedProvider(
        REPOS_KEY,
        store,
        ReposFetcher(
            settings.GITHUB_USER,
            api_base=settings.GITHUB_API_BASE,
            timeout=settings.HTTP_TIMEOUT_S,
        ),
        parse_repos,
        ttl_s=settings.REPOS_TTL_S,
    )
    return tweets, repos


def render_homepage(
    settings: Settings,
    tweets_provider: CachedProvider,
    repos_provider: CachedProvider,
) -> str:
    tweets = tweets_provider.get()
    repos = repos_provider.get()
    logger.info(
        "Rendering homepage: %d tweets (%s), %d repos (%s)",
        len(tweets),
        tweets_provider.last_outcome.value if tweets_provider.last_outcome else "-",
        len(repos),
        repos_provider.last_outcome.value if repos_provider.last_outcome else "-",
    )
    return render_page(
        tweets,
        repos,
        screen_name=settings.TWITTER_SCREEN_NAME,
        github_user=settings.GITHUB_USER,
        featured=settings.FEATURED_REPOS,
        tweets_limit=settings.TWEETS_LIMIT,
    )


def write_page(path: str | Path, page: str) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    tmp = out.with_name(f".{out.name}.tmp.{os.getpid()}")
    try:
        tmp.write_text(page, encoding="utf-8")
        os.replace(tmp, out)
    finally:
        if tmp.exists():
            tmp.unlink()
    return out


def run() -> None:
    setup_logging()
    logger.info("Starting homepage render")
    settings = config.settings
    config.validate_settings(settings)
    tweets, repos = build_providers(settings)
    out = write_page(settings.OUTPUT_PATH, render_homepage(settings, tweets, repos))
    logger.info("Wrote %s", out)


if __name__ == "__main__":
    run()
