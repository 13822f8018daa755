"""Tests for the Twitter timeline fetcher."""

import pytest
import requests
from requests_oauthlib import OAuth1

from homepage import twitter
from homepage.cache_store import CorruptRead
from homepage.models.fetch_result import FetchFailure, FetchSuccess
from homepage.models.records import Tweet

from conftest import DummyResponse, DummySession


def test_build_session_requires_all_credentials() -> None:
    assert twitter.build_session("key", "secret", "token", None) is None
    session = twitter.build_session("key", "secret", "token", "token-secret")
    assert isinstance(session, requests.Session)
    assert isinstance(session.auth, OAuth1)


def test_fetch_without_credentials_makes_no_request() -> None:
    fetcher = twitter.TweetsFetcher("astolwijk", None)
    result = fetcher.fetch()
    assert isinstance(result, FetchFailure)
    assert "credentials" in result.reason


def test_fetch_success_returns_raw_body() -> None:
    body = b'[{"id_str":"1","text":"hi"}]'
    session = DummySession(DummyResponse(content=body))
    fetcher = twitter.TweetsFetcher(
        "astolwijk", session, count=7, api_base="https://api.example/1.1/", timeout=3
    )

    result = fetcher.fetch()

    assert result == FetchSuccess(body)
    call = session.calls[0]
    assert call["url"] == "https://api.example/1.1/statuses/user_timeline.json"
    assert call["params"] == {"screen_name": "astolwijk", "count": 7}
    assert call["timeout"] == 3


@pytest.mark.parametrize(
    "response",
    [
        DummyResponse({"errors": []}, status=401),
        DummyResponse(content=b""),
        DummyResponse(content=b"   "),
        DummyResponse(content=b"<html>"),
        DummyResponse({"errors": [{"code": 88}]}),
    ],
)
def test_fetch_maps_bad_responses_to_failure(response) -> None:
    fetcher = twitter.TweetsFetcher("astolwijk", DummySession(response))
    assert isinstance(fetcher.fetch(), FetchFailure)


def test_fetch_maps_transport_errors_to_failure() -> None:
    session = DummySession(requests.exceptions.ConnectTimeout("timed out"))
    result = twitter.TweetsFetcher("astolwijk", session).fetch()
    assert isinstance(result, FetchFailure)
    assert "timed out" in result.reason


def test_parse_tweets_keeps_order_and_prefers_id_str() -> None:
    payload = (
        b'[{"id": 12345678901234567, "id_str": "12345678901234567", "text": "a"},'
        b' {"id": 2, "full_text": "b"}]'
    )
    assert twitter.parse_tweets(payload) == [
        Tweet(id="12345678901234567", text="a"),
        Tweet(id="2", text="b"),
    ]


@pytest.mark.parametrize(
    "payload",
    [b"not json", b'{"id": "1"}', b'[{"text": "no id"}]', b'[{"id": "1"}]', b"[1]"],
)
def test_parse_tweets_rejects_bad_shapes(payload) -> None:
    with pytest.raises(CorruptRead):
        twitter.parse_tweets(payload)


def test_fetch_deeply_nested_body_is_failure() -> None:
    session = DummySession(DummyResponse(content=b"[" * 200000))
    result = twitter.TweetsFetcher("astolwijk", session).fetch()
    assert result == FetchFailure("invalid JSON")


def test_parse_tweets_deeply_nested_is_corrupt() -> None:
    with pytest.raises(CorruptRead):
        twitter.parse_tweets(b"[" * 200000)


def test_fetch_without_credentials_opens_no_session() -> None:
    fetcher = twitter.TweetsFetcher("astolwijk", None)
    fetcher.fetch()
    assert fetcher.session is None


@pytest.mark.parametrize(
    "payload",
    [
        b'[{"id": true, "text": "x"}]',
        b'[{"id_str": {"a": 1}, "text": "x"}]',
        b'[{"id": 1.5, "text": "x"}]',
        b'[{"id": [1], "text": "x"}]',
    ],
)
def test_parse_tweets_rejects_non_scalar_ids(payload) -> None:
    with pytest.raises(CorruptRead):
        twitter.parse_tweets(payload)


def test_parse_tweets_accepts_integer_id() -> None:
    tweets = twitter.parse_tweets(b'[{"id": 0, "text": "x"}]')
    assert tweets == [Tweet(id="0", text="x")]
