"""Value types produced and consumed by the entrypoint resolver."""

from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = [
    "DegradeReason",
    "EntrypointKind",
    "LookupStatus",
    "RemoteLookup",
    "ResolvedEntrypoint",
    "SessionPhase",
    "UrlSource",
]


class EntrypointKind(str, enum.Enum):
    """Top-level surface shown at launch."""

    NATIVE = "native"
    REMOTE = "remote"


class UrlSource(str, enum.Enum):
    """Where a remote entrypoint URL came from."""

    LAST_LOADED = "last_loaded"
    REMOTE_CONFIG = "remote_config"
    CACHED_REMOTE = "cached_remote"


class DegradeReason(str, enum.Enum):
    """Why the native UI was chosen."""

    NO_CONNECTIVITY = "no_connectivity"
    REGION_NOT_ELIGIBLE = "region_not_eligible"
    NOT_CONFIGURED = "not_configured"
    REMOTE_LOOKUP_FAILED = "remote_lookup_failed"
    MAIN_FRAME_LOAD_FAILED = "main_frame_load_failed"


class SessionPhase(str, enum.Enum):
    """Lifecycle of one application session."""

    UNINITIALIZED = "uninitialized"
    RESOLVING = "resolving"
    NATIVE = "native"
    REMOTE = "remote"


@dataclass(frozen=True, slots=True)
class ResolvedEntrypoint:
    """Either ``Native`` or ``Remote(url)``.

    Build instances with :meth:`native` or :meth:`remote`; the extra ``source``
    and ``reason`` fields are diagnostics and never change the decision.
    """

    kind: EntrypointKind
    url: str | None = None
    source: UrlSource | None = None
    reason: DegradeReason | None = None

    @classmethod
    def native(cls, reason: DegradeReason | None = None) -> "ResolvedEntrypoint":
        return cls(kind=EntrypointKind.NATIVE, reason=reason)

    @classmethod
    def remote(cls, url: str, source: UrlSource) -> "ResolvedEntrypoint":
        cleaned = (url or "").strip()
        if not cleaned:
            raise ValueError("A remote entrypoint requires a non-empty URL.")
        return cls(kind=EntrypointKind.REMOTE, url=cleaned, source=source)

    @property
    def is_native(self) -> bool:
        return self.kind is EntrypointKind.NATIVE

    @property
    def is_remote(self) -> bool:
        return self.kind is EntrypointKind.REMOTE

    def describe(self) -> str:
        """Return a short human readable label, e.g. for logs or the CLI."""
        if self.is_remote:
            return f"remote url={self.url} source={self.source.value if self.source else '-'}"
        return f"native reason={self.reason.value if self.reason else '-'}"


class LookupStatus(str, enum.Enum):
    FOUND = "found"
    NOT_CONFIGURED = "not_configured"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RemoteLookup:
    """Outcome of a single remote configuration call."""

    status: LookupStatus
    url: str | None = None
    error: str | None = None

    @classmethod
    def found(cls, url: str) -> "RemoteLookup":
        return cls(status=LookupStatus.FOUND, url=url)

    @classmethod
    def not_configured(cls) -> "RemoteLookup":
        return cls(status=LookupStatus.NOT_CONFIGURED)

    @classmethod
    def failed(cls, error: str) -> "RemoteLookup":
        return cls(status=LookupStatus.FAILED, error=error)
