"""Configuration dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass
class Settings:
    """Configuration settings for the homepage generator."""

    CACHE_DIR: str
    OUTPUT_PATH: str
    TWEETS_TTL_S: float
    REPOS_TTL_S: float
    HTTP_TIMEOUT_S: float
    TWITTER_SCREEN_NAME: str
    TWITTER_CONSUMER_KEY: str | None
    TWITTER_CONSUMER_SECRET: str | None
    TWITTER_ACCESS_TOKEN: str | None
    TWITTER_ACCESS_SECRET: str | None
    TWITTER_API_BASE: str
    TWEETS_COUNT: int
    TWEETS_LIMIT: int
    GITHUB_USER: str
    GITHUB_API_BASE: str
    FEATURED_REPOS: List[str]

    def twitter_credentials_complete(self) -> bool:
        return all(
            (
                self.TWITTER_CONSUMER_KEY,
                self.TWITTER_CONSUMER_SECRET,
                self.TWITTER_ACCESS_TOKEN,
                self.TWITTER_ACCESS_SECRET,
            )
        )
