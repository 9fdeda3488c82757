from __future__ import annotations

import pytest

from shopfront.entrypoint.models import (
    DegradeReason,
    EntrypointKind,
    LookupStatus,
    RemoteLookup,
    ResolvedEntrypoint,
    UrlSource,
)


def test_remote_requires_url() -> None:
    with pytest.raises(ValueError, match="non-empty URL"):
        ResolvedEntrypoint.remote("  ", UrlSource.REMOTE_CONFIG)


def test_remote_strips_url_and_compares_by_value() -> None:
    a = ResolvedEntrypoint.remote(" https://x ", UrlSource.LAST_LOADED)
    b = ResolvedEntrypoint.remote("https://x", UrlSource.LAST_LOADED)
    assert a == b
    assert a.kind is EntrypointKind.REMOTE
    assert a.is_remote and not a.is_native


def test_native_carries_reason_only() -> None:
    result = ResolvedEntrypoint.native(DegradeReason.NO_CONNECTIVITY)
    assert result.is_native
    assert result.url is None
    assert result.describe() == "native reason=no_connectivity"


def test_remote_lookup_constructors() -> None:
    assert RemoteLookup.found("https://x").status is LookupStatus.FOUND
    assert RemoteLookup.not_configured().url is None
    failed = RemoteLookup.failed("timeout")
    assert failed.status is LookupStatus.FAILED
    assert failed.error == "timeout"
