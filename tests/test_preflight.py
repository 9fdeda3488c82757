from __future__ import annotations

import httpx

from shopfront.config import Settings
from shopfront.preflight import (
    check_connectivity,
    check_region_gate,
    check_remote_config,
    check_state_store,
    run_all,
)


def _transport(*, config_status: int = 200, payload: dict | None = None, probe_ok: bool = True) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "probe.local":
            if not probe_ok:
                raise httpx.ConnectError("offline", request=request)
            return httpx.Response(204, request=request)
        return httpx.Response(config_status, json=payload if payload is not None else {}, request=request)

    return httpx.MockTransport(handler)


def _configured(settings: Settings) -> Settings:
    return settings.model_copy(
        update={
            "remote_config_url": "http://config.local/settings/webview",
            "connectivity_probe_url": "http://probe.local/generate_204",
        }
    )


def test_remote_config_warns_when_unset(settings: Settings) -> None:
    result = check_remote_config(settings.model_copy(update={"remote_config_url": None}))
    assert result.status == "warn"


def test_remote_config_ok(settings: Settings) -> None:
    result = check_remote_config(
        _configured(settings),
        transport=_transport(payload={"url": "https://shop.example/app"}),
    )
    assert result.status == "ok"
    assert "https://shop.example/app" in result.details


def test_remote_config_warns_on_empty_value(settings: Settings) -> None:
    result = check_remote_config(_configured(settings), transport=_transport(payload={"url": ""}))
    assert result.status == "warn"


def test_remote_config_fails_on_http_error(settings: Settings) -> None:
    result = check_remote_config(_configured(settings), transport=_transport(config_status=500))
    assert result.status == "fail"


def test_connectivity(settings: Settings) -> None:
    assert check_connectivity(_configured(settings), transport=_transport()).status == "ok"
    assert check_connectivity(_configured(settings), transport=_transport(probe_ok=False)).status == "fail"


def test_state_store_writable(settings: Settings) -> None:
    assert check_state_store(settings).status == "ok"


def test_state_store_unwritable(settings: Settings, tmp_path) -> None:
    broken = settings.model_copy(
        update={"state_database_url": f"sqlite:///{tmp_path / 'missing' / 'dir' / 'state.db'}"}
    )
    assert check_state_store(broken).status == "fail"


def test_region_gate_summary(settings: Settings) -> None:
    assert check_region_gate(settings).details == "disabled"
    enabled = settings.model_copy(update={"region_gate_enabled": True, "region_country_code": "US"})
    result = check_region_gate(enabled)
    assert result.status == "warn"
    assert "country=US" in result.details


def test_run_all_returns_every_check(settings: Settings) -> None:
    results = run_all(_configured(settings), transport=_transport(payload={"url": "https://x"}))
    assert [r.name for r in results] == ["remote_config", "connectivity", "state_store", "region_gate"]
