from __future__ import annotations

import threading

import pytest

from shopfront.entrypoint.models import DegradeReason, SessionPhase
from shopfront.entrypoint.remote_config import StaticRemoteConfigStore
from shopfront.entrypoint.session import (
    EntrypointSession,
    InvalidSessionTransition,
    ResolutionInProgressError,
)


class _GatedStore:
    """Remote store that blocks until the test lets it answer."""

    def __init__(self, url: str) -> None:
        self.url = url
        self.entered = threading.Event()
        self.release = threading.Event()

    def fetch_url(self) -> str | None:
        self.entered.set()
        self.release.wait(timeout=5)
        return self.url


def test_new_session_is_uninitialized(make_resolver) -> None:
    session = EntrypointSession(make_resolver())
    assert session.phase is SessionPhase.UNINITIALIZED
    assert session.current is None
    assert session.is_resolving is False


def test_start_moves_to_remote(make_resolver) -> None:
    session = EntrypointSession(make_resolver(remote=StaticRemoteConfigStore("https://shop.example/app")))

    result = session.start()

    assert result.is_remote
    assert session.phase is SessionPhase.REMOTE
    assert session.current == result


def test_start_moves_to_native_when_offline(make_resolver) -> None:
    session = EntrypointSession(make_resolver(reachable=False))
    session.start()
    assert session.phase is SessionPhase.NATIVE


def test_start_twice_is_rejected(make_resolver) -> None:
    session = EntrypointSession(make_resolver())
    session.start()
    with pytest.raises(InvalidSessionTransition, match="Cannot start"):
        session.start()


def test_background_start_reports_resolving_and_rejects_duplicates(make_resolver) -> None:
    remote = _GatedStore("https://shop.example/app")
    session = EntrypointSession(make_resolver(remote=remote, timeout=5))

    future = session.start_in_background()
    assert remote.entered.wait(timeout=5)
    assert session.is_resolving
    with pytest.raises(ResolutionInProgressError):
        session.start()

    remote.release.set()
    result = future.result(timeout=5)

    assert result.url == "https://shop.example/app"
    assert session.phase is SessionPhase.REMOTE


def test_load_failure_switches_remote_to_native(make_resolver, state) -> None:
    state.last_loaded_url = "https://x"
    session = EntrypointSession(make_resolver())
    session.start()

    result = session.record_load_failure("https://x", "net error")

    assert result.reason is DegradeReason.MAIN_FRAME_LOAD_FAILED
    assert session.phase is SessionPhase.NATIVE
    assert session.current == result
    assert state.last_loaded_url == ""


def test_load_callbacks_require_remote_phase(make_resolver) -> None:
    session = EntrypointSession(make_resolver(reachable=False))
    with pytest.raises(InvalidSessionTransition):
        session.record_successful_load("https://x")
    session.start()
    with pytest.raises(InvalidSessionTransition):
        session.record_load_failure("https://x", "net error")


def test_successful_load_is_recorded(make_resolver, state) -> None:
    session = EntrypointSession(make_resolver(remote=StaticRemoteConfigStore("https://shop.example/app")))
    session.start()
    session.record_successful_load("https://shop.example/app")
    assert state.last_loaded_url == "https://shop.example/app"
    assert session.phase is SessionPhase.REMOTE


def test_retry_requires_a_finished_resolution(make_resolver) -> None:
    session = EntrypointSession(make_resolver())
    with pytest.raises(InvalidSessionTransition, match="Cannot retry"):
        session.retry()


def test_native_stays_native_until_retry(make_resolver) -> None:
    remote = StaticRemoteConfigStore("")
    session = EntrypointSession(make_resolver(remote=remote))
    session.start()
    assert session.phase is SessionPhase.NATIVE

    remote.url = "https://shop.example/app"
    assert session.phase is SessionPhase.NATIVE

    result = session.retry()
    assert result.is_remote
    assert session.phase is SessionPhase.REMOTE
    assert remote.calls == 2
