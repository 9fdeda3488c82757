from __future__ import annotations

from pathlib import Path
from typing import Generator

import sys

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from shopfront.config import Settings
from shopfront.entrypoint.connectivity import StaticConnectivityProbe
from shopfront.entrypoint.remote_config import StaticRemoteConfigStore
from shopfront.entrypoint.resolver import RemoteEntrypointResolver
from shopfront.entrypoint.state import InMemoryKeyValueStore, PersistedUrlState


@pytest.fixture
def settings(tmp_path: Path) -> Generator[Settings, None, None]:
    """Return a fresh Settings instance isolated from the developer's .env."""

    yield Settings(
        _env_file=None,
        state_database_url=f"sqlite:///{tmp_path / 'state.db'}",
    )


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def state(store: InMemoryKeyValueStore) -> PersistedUrlState:
    return PersistedUrlState(store)


@pytest.fixture
def make_resolver(state: PersistedUrlState):
    """Factory for resolvers wired to in-memory fakes."""

    def _make(
        *,
        remote: StaticRemoteConfigStore | None = None,
        reachable: bool = True,
        region_gate=None,
        timeout: float = 1.0,
    ) -> RemoteEntrypointResolver:
        return RemoteEntrypointResolver(
            remote_config=remote if remote is not None else StaticRemoteConfigStore(None),
            state=state,
            connectivity=StaticConnectivityProbe(reachable),
            region_gate=region_gate,
            lookup_timeout_seconds=timeout,
        )

    return _make
