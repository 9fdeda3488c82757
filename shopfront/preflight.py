"""Fast environment checks used by ``script/doctor.py``.

Each check returns a :class:`CheckResult` instead of raising so the doctor can
render every problem at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from shopfront.config import Settings
from shopfront.db.base import sanitize_dsn
from shopfront.entrypoint.factory import build_region_gate
from shopfront.entrypoint.kv_sql import SqlKeyValueStore
from shopfront.entrypoint.remote_config import HttpRemoteConfigStore, RemoteLookupError
from shopfront.net.http import HttpClient

if TYPE_CHECKING:
    import httpx

__all__ = [
    "CheckResult",
    "Status",
    "check_connectivity",
    "check_region_gate",
    "check_remote_config",
    "check_state_store",
    "run_all",
]

Status = Literal["ok", "warn", "fail"]

_PROBE_KEY = "__shopfront_doctor__"


@dataclass(slots=True)
class CheckResult:
    name: str
    status: Status
    details: str


def check_remote_config(
    settings: Settings,
    *,
    transport: "httpx.BaseTransport | None" = None,
) -> CheckResult:
    if not settings.remote_config_url:
        return CheckResult(
            "remote_config",
            "warn",
            "REMOTE_CONFIG_URL is not set; every session will use the native UI.",
        )
    store = HttpRemoteConfigStore(
        settings.remote_config_url,
        key=settings.remote_config_key,
        timeout_seconds=settings.remote_config_timeout_seconds,
        user_agent=settings.http_user_agent,
        transport=transport,
    )
    try:
        url = store.fetch_url()
    except RemoteLookupError as exc:
        return CheckResult("remote_config", "fail", f"lookup failed: {exc}")
    if not url:
        return CheckResult(
            "remote_config",
            "warn",
            f"reachable, but {settings.remote_config_key!r} is empty (native UI will be shown).",
        )
    return CheckResult("remote_config", "ok", f"{settings.remote_config_key}={url}")


def check_connectivity(
    settings: Settings,
    *,
    transport: "httpx.BaseTransport | None" = None,
) -> CheckResult:
    client = HttpClient(
        timeout_seconds=settings.connectivity_timeout_seconds,
        user_agent=settings.http_user_agent,
        transport=transport,
    )
    if client.is_reachable(settings.connectivity_probe_url):
        return CheckResult("connectivity", "ok", f"reachable: {settings.connectivity_probe_url}")
    return CheckResult("connectivity", "fail", f"unreachable: {settings.connectivity_probe_url}")


def check_state_store(settings: Settings) -> CheckResult:
    safe = sanitize_dsn(settings.state_database_url)
    try:
        store = SqlKeyValueStore.from_dsn(settings.state_database_url)
        try:
            store.set(_PROBE_KEY, "ok")
            value = store.get(_PROBE_KEY)
            store.delete(_PROBE_KEY)
        finally:
            store.close()
    except Exception as exc:  # noqa: BLE001 - reported, not raised
        return CheckResult("state_store", "fail", f"not writable: {safe} ({exc})")
    if value != "ok":
        return CheckResult("state_store", "fail", f"read-back mismatch: {safe}")
    return CheckResult("state_store", "ok", f"writable: {safe}")


def check_region_gate(settings: Settings) -> CheckResult:
    gate = build_region_gate(settings)
    if gate is None:
        return CheckResult("region_gate", "ok", "disabled")
    country = gate.detect_country()
    allowed = ", ".join(sorted(gate.allowed_countries)) or "(none)"
    if country is None:
        return CheckResult("region_gate", "warn", f"no country detected; allowed: {allowed}")
    status: Status = "ok" if country in gate.allowed_countries else "warn"
    return CheckResult("region_gate", status, f"country={country} allowed: {allowed}")


def run_all(
    settings: Settings,
    *,
    transport: "httpx.BaseTransport | None" = None,
) -> list[CheckResult]:
    return [
        check_remote_config(settings, transport=transport),
        check_connectivity(settings, transport=transport),
        check_state_store(settings),
        check_region_gate(settings),
    ]
