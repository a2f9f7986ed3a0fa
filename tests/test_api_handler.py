"""Tests for the polled authorization handoff."""

from __future__ import annotations

import threading
from concurrent.futures import wait
from urllib.parse import parse_qs, urlparse

import pytest

from hextwitch.auth import ApiHandler, ApiState, TokenInfo, authorization_url
from hextwitch.config import Preferences, PreferenceStore
from hextwitch.errors import NetworkError, OAuthError

INFO = TokenInfo(login="asdfqwert", user_id="1", client_id="cid")


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def validator_accepting(*good: str):
    def validate(token: str) -> TokenInfo:
        if token not in good:
            raise OAuthError("rejected")
        return INFO

    return validate


def finish(handler: ApiHandler) -> None:
    """Block until the background job completes."""
    pending = handler._pending
    assert pending is not None
    wait([pending.future], timeout=5)


@pytest.fixture
def handlers():
    created: list[ApiHandler] = []

    def make(store: PreferenceStore, **kwargs) -> ApiHandler:
        handler = ApiHandler(store, **kwargs)
        created.append(handler)
        return handler

    yield make
    for handler in created:
        handler.shutdown()


def store_with(token: str | None = None) -> PreferenceStore:
    return PreferenceStore(Preferences(client_id="cid", oauth_token=token))


def test_authorization_url():
    url = urlparse(authorization_url("cid", "xyz"))
    query = parse_qs(url.query)
    assert url.netloc == "id.twitch.tv"
    assert query["client_id"] == ["cid"]
    assert query["response_type"] == ["token"]
    assert query["state"] == ["xyz"]
    assert "chat:read" in query["scope"][0].split()


def test_stored_token_becomes_active(handlers):
    store = store_with("tok")
    handler = handlers(store, validator=validator_accepting("tok"))
    assert handler.validate() is False
    assert handler.is_waiting
    assert handler.url is not None
    finish(handler)
    assert handler.validate() is True
    assert handler.is_valid
    assert handler.info == INFO
    assert store.get_token() == "tok"
    assert handler.url is None
    assert handler.validate() is True


def test_rejected_token_falls_back_to_authorizer(handlers):
    seen: list[str] = []

    def authorizer(url: str) -> str:
        seen.append(url)
        return "fresh"

    store = store_with("stale")
    handler = handlers(
        store, authorizer=authorizer, validator=validator_accepting("fresh")
    )
    handler.validate()
    finish(handler)
    assert handler.validate() is True
    assert store.get_token() == "fresh"
    assert "client_id=cid" in seen[0]


def test_no_token_and_no_authorizer_goes_offline(handlers):
    store = store_with(None)
    handler = handlers(store, validator=validator_accepting())
    handler.validate()
    finish(handler)
    assert handler.validate() is False
    assert handler.state is ApiState.OFFLINE
    assert store.get_token() is None


def test_abandoned_authorization_goes_offline(handlers):
    store = store_with(None)
    handler = handlers(store, authorizer=lambda url: None, validator=validator_accepting())
    handler.validate()
    finish(handler)
    assert handler.validate() is False
    assert handler.state is ApiState.OFFLINE


def test_network_failure_keeps_token(handlers):
    def unreachable(token: str) -> TokenInfo:
        raise NetworkError("down")

    store = store_with("tok")
    handler = handlers(store, validator=unreachable)
    handler.validate()
    finish(handler)
    assert handler.validate() is False
    assert handler.state is ApiState.OFFLINE
    assert store.get_token() == "tok"


def test_authorizer_crash_goes_offline(handlers):
    def authorizer(url: str) -> str:
        raise OSError("address in use")

    store = store_with(None)
    handler = handlers(store, authorizer=authorizer, validator=validator_accepting())
    handler.validate()
    finish(handler)
    assert handler.validate() is False
    assert handler.state is ApiState.OFFLINE
    assert handler.is_waiting is False


def test_offline_validate_restarts_job(handlers):
    calls: list[str] = []

    def validate(token: str) -> TokenInfo:
        calls.append(token)
        if len(calls) == 1:
            raise NetworkError("down")
        return INFO

    handler = handlers(store_with("tok"), validator=validate)
    handler.validate()
    finish(handler)
    handler.validate()
    assert handler.state is ApiState.OFFLINE
    handler.validate()
    finish(handler)
    assert handler.validate() is True
    assert calls == ["tok", "tok"]


def test_wait_times_out(handlers):
    release = threading.Event()
    clock = FakeClock()

    def authorizer(url: str) -> str | None:
        release.wait(5)
        return None

    handler = handlers(
        store_with(None),
        authorizer=authorizer,
        validator=validator_accepting(),
        clock=clock,
        timeout=10,
    )
    try:
        handler.validate()
        clock.now = 5
        assert handler.validate() is False
        assert handler.is_waiting
        clock.now = 11
        assert handler.validate() is False
        assert handler.state is ApiState.OFFLINE
        assert handler.url is None
    finally:
        release.set()


def test_clear_forgets_token(handlers):
    store = store_with("tok")
    handler = handlers(store, validator=validator_accepting("tok"))
    handler.validate()
    finish(handler)
    handler.validate()
    handler.clear()
    assert store.get_token() is None
    assert handler.state is ApiState.OFFLINE
    assert handler.info is None
