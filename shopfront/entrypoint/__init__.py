"""Startup entrypoint resolution: remote web storefront or native UI."""

from shopfront.entrypoint.models import (
    DegradeReason,
    EntrypointKind,
    ResolvedEntrypoint,
    SessionPhase,
    UrlSource,
)
from shopfront.entrypoint.resolver import RemoteEntrypointResolver
from shopfront.entrypoint.session import (
    EntrypointSession,
    InvalidSessionTransition,
    ResolutionInProgressError,
)
from shopfront.entrypoint.state import InMemoryKeyValueStore, KeyValueStore, PersistedUrlState

__all__ = [
    "DegradeReason",
    "EntrypointKind",
    "EntrypointSession",
    "InMemoryKeyValueStore",
    "InvalidSessionTransition",
    "KeyValueStore",
    "PersistedUrlState",
    "RemoteEntrypointResolver",
    "ResolutionInProgressError",
    "ResolvedEntrypoint",
    "SessionPhase",
    "UrlSource",
]
