"""Production wiring of the resolver from :class:`shopfront.config.Settings`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from shopfront.config import Settings, get_settings
from shopfront.entrypoint.connectivity import ConnectivityProbe, HttpConnectivityProbe
from shopfront.entrypoint.kv_sql import SqlKeyValueStore
from shopfront.entrypoint.region import RegionGate, fixed_country, locale_country_code
from shopfront.entrypoint.remote_config import (
    HttpRemoteConfigStore,
    RemoteConfigStore,
    StaticRemoteConfigStore,
)
from shopfront.entrypoint.resolver import RemoteEntrypointResolver
from shopfront.entrypoint.session import EntrypointSession
from shopfront.entrypoint.state import KeyValueStore, PersistedUrlState

if TYPE_CHECKING:
    import httpx

__all__ = [
    "build_region_gate",
    "build_remote_config",
    "build_resolver",
    "build_session",
    "build_state_store",
]

log = logger.bind(module="entrypoint.factory")


def build_remote_config(
    settings: Settings,
    *,
    transport: "httpx.BaseTransport | None" = None,
) -> RemoteConfigStore:
    if not settings.remote_config_url:
        # Without an endpoint the app behaves as if the operator cleared the URL.
        log.warning("REMOTE_CONFIG_URL is not set; the remote storefront is disabled")
        return StaticRemoteConfigStore(None)
    return HttpRemoteConfigStore(
        settings.remote_config_url,
        key=settings.remote_config_key,
        timeout_seconds=settings.remote_config_timeout_seconds,
        user_agent=settings.http_user_agent,
        transport=transport,
    )


def build_region_gate(settings: Settings) -> RegionGate | None:
    if not settings.region_gate_enabled:
        return None
    detectors = []
    if settings.region_country_code:
        detectors.append(fixed_country(settings.region_country_code))
    detectors.append(locale_country_code)
    return RegionGate(settings.region_allowed_countries, detectors)


def build_state_store(settings: Settings) -> SqlKeyValueStore:
    return SqlKeyValueStore.from_dsn(settings.state_database_url, echo=settings.state_db_echo)


def build_resolver(
    settings: Settings | None = None,
    *,
    store: KeyValueStore | None = None,
    connectivity: ConnectivityProbe | None = None,
    transport: "httpx.BaseTransport | None" = None,
) -> RemoteEntrypointResolver:
    """Assemble a resolver; any collaborator can be overridden."""
    settings = settings or get_settings()
    if store is None:
        store = build_state_store(settings)
    if connectivity is None:
        connectivity = HttpConnectivityProbe(
            settings.connectivity_probe_url,
            timeout_seconds=settings.connectivity_timeout_seconds,
            user_agent=settings.http_user_agent,
            transport=transport,
        )
    return RemoteEntrypointResolver(
        remote_config=build_remote_config(settings, transport=transport),
        state=PersistedUrlState(store),
        connectivity=connectivity,
        region_gate=build_region_gate(settings),
        lookup_timeout_seconds=settings.remote_config_timeout_seconds,
    )


def build_session(
    settings: Settings | None = None,
    *,
    store: KeyValueStore | None = None,
    connectivity: ConnectivityProbe | None = None,
    transport: "httpx.BaseTransport | None" = None,
) -> EntrypointSession:
    return EntrypointSession(
        build_resolver(settings, store=store, connectivity=connectivity, transport=transport)
    )
