"""Central configuration for the homepage generator."""

from __future__ import annotations

import logging
import math
import os
from typing import List

from .models.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_FEATURED_REPOS = "CoverJS,wrapup,prime,mootools-core,elements"


def _split_names(s: str) -> List[str]:
    """Parse comma-separated string into a list of names.

    Example:
        >>> _split_names("prime, wrapup,,elements")
        ['prime', 'wrapup', 'elements']
    """
    return [p.strip() for p in (s or "").split(",") if p.strip()]


def _float_env(name: str, default: float) -> float:
    try:
        value = float(os.environ.get(name, str(default)) or default)
    except ValueError:
        return default
    if not math.isfinite(value):
        logger.warning("%s must be a finite number; using %s", name, default)
        return default
    return value


def _int_env(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _read_settings() -> Settings:
    """Read all configuration from environment variables.

    Returns:
        Settings object with all configuration values.

    Note:
        Invalid numeric values fall back to the defaults.
    """
    six_hours = 6 * 60 * 60.0
    return Settings(
        CACHE_DIR=os.environ.get("CACHE_DIR") or "./tmp",
        OUTPUT_PATH=os.environ.get("OUTPUT_PATH") or "./index.html",
        TWEETS_TTL_S=_float_env("TWEETS_TTL_S", six_hours),
        REPOS_TTL_S=_float_env("REPOS_TTL_S", six_hours),
        HTTP_TIMEOUT_S=_float_env("HTTP_TIMEOUT_S", 10.0),
        TWITTER_SCREEN_NAME=os.environ.get("TWITTER_SCREEN_NAME") or "astolwijk",
        TWITTER_CONSUMER_KEY=os.environ.get("TWITTER_CONSUMER_KEY") or None,
        TWITTER_CONSUMER_SECRET=os.environ.get("TWITTER_CONSUMER_SECRET") or None,
        TWITTER_ACCESS_TOKEN=os.environ.get("TWITTER_ACCESS_TOKEN") or None,
        TWITTER_ACCESS_SECRET=os.environ.get("TWITTER_ACCESS_SECRET") or None,
        TWITTER_API_BASE=(
            os.environ.get("TWITTER_API_BASE") or "https://api.twitter.com/1.1"
        ).rstrip("/"),
        TWEETS_COUNT=_int_env("TWEETS_COUNT", 20),
        TWEETS_LIMIT=_int_env("TWEETS_LIMIT", 5),
        GITHUB_USER=os.environ.get("GITHUB_USER") or "arian",
        GITHUB_API_BASE=(
            os.environ.get("GITHUB_API_BASE") or "https://api.github.com"
        ).rstrip("/"),
        FEATURED_REPOS=_split_names(
            os.environ.get("FEATURED_REPOS", DEFAULT_FEATURED_REPOS)
        ),
    )


settings = _read_settings()


def validate_settings(current: Settings | None = None) -> None:
    """Log warnings for configuration that will make a section come out empty."""
    current = current or settings
    if not current.twitter_credentials_complete():
        logger.warning(
            "Twitter credentials are incomplete; "
            "tweets will only be served from cache."
        )
    if current.TWEETS_TTL_S <= 0 or current.REPOS_TTL_S <= 0:
        logger.warning("A non-positive TTL refetches on every render.")
