"""Twitter user timeline fetcher and tweet parsing."""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests_oauthlib import OAuth1

from .cache_store import CorruptRead
from .fetch import DEFAULT_TIMEOUT_S, JsonArrayFetcher, load_array
from .models.fetch_result import FetchFailure, FetchResult
from .models.records import Tweet

logger = logging.getLogger(__name__)

TWITTER_API_BASE = "https://api.twitter.com/1.1"


def build_session(
    consumer_key: str | None,
    consumer_secret: str | None,
    access_token: str | None,
    access_secret: str | None,
) -> requests.Session | None:
    """Return a session signing requests with OAuth 1.0a user credentials.

    Returns None when any of the four credentials is missing.
    """
    if not all((consumer_key, consumer_secret, access_token, access_secret)):
        return None
    session = requests.Session()
    session.auth = OAuth1(
        consumer_key,
        client_secret=consumer_secret,
        resource_owner_key=access_token,
        resource_owner_secret=access_secret,
    )
    return session


class TweetsFetcher(JsonArrayFetcher):
    """Fetch the recent timeline of one screen name."""

    name = "tweets"

    def __init__(
        self,
        screen_name: str,
        session: requests.Session | None,
        count: int = 20,
        api_base: str = TWITTER_API_BASE,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self.screen_name = screen_name
        self._authenticated = session is not None
        super().__init__(
            f"{api_base.rstrip('/')}/statuses/user_timeline.json",
            params={"screen_name": screen_name, "count": count},
            session=session,
            timeout=timeout,
        )

    def fetch(self) -> FetchResult:
        if not self._authenticated:
            logger.debug("No credentials; skipping timeline for %s", self.screen_name)
            return FetchFailure("twitter credentials not configured")
        return super().fetch()


def _parse_tweet(entry: Any) -> Tweet:
    if not isinstance(entry, dict):
        raise CorruptRead("tweets: record is not an object")
    tweet_id = entry.get("id_str") or entry.get("id")
    text = entry.get("text")
    if text is None:
        text = entry.get("full_text")
    valid_id = (isinstance(tweet_id, str) and tweet_id != "") or (
        isinstance(tweet_id, int) and not isinstance(tweet_id, bool)
    )
    if not valid_id or not isinstance(text, str):
        raise CorruptRead("tweets: record is missing id or text")
    return Tweet(id=str(tweet_id), text=text)


def parse_tweets(payload: bytes) -> list[Tweet]:
    """Parse a raw timeline response into tweets, keeping API order."""
    return [_parse_tweet(entry) for entry in load_array(payload, "tweets")]
