from __future__ import annotations

import httpx
import pytest

from shopfront.net.http import HttpCallError, HttpClient


def test_get_json_sends_accept_and_user_agent() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.host == "config.local"
        assert request.url.path == "/settings/webview"
        assert dict(request.url.params) == {"v": "2"}
        assert request.headers.get("accept") == "application/json"
        assert request.headers.get("user-agent") == "test-agent"
        return httpx.Response(200, json={"url": "https://shop.example/app"}, request=request)

    client = HttpClient(user_agent="test-agent", transport=httpx.MockTransport(handler))
    payload = client.get_json("http://config.local/settings/webview", params={"v": 2})
    assert payload == {"url": "https://shop.example/app"}


def test_get_json_returns_none_on_empty_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"", request=request)

    client = HttpClient(transport=httpx.MockTransport(handler))
    assert client.get_json("http://config.local/empty") is None


def test_get_json_raises_on_invalid_json() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"{", request=request)

    client = HttpClient(transport=httpx.MockTransport(handler))
    with pytest.raises(HttpCallError, match="Invalid JSON response"):
        client.get_json("http://config.local/broken")


def test_request_maps_status_errors_with_body_text() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, content=b"maintenance", request=request)

    client = HttpClient(transport=httpx.MockTransport(handler))
    with pytest.raises(HttpCallError) as excinfo:
        client.request("GET", "http://config.local/down")
    assert excinfo.value.status_code == 503
    assert "maintenance" in str(excinfo.value)


def test_request_maps_transport_errors_without_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    client = HttpClient(transport=httpx.MockTransport(handler))
    with pytest.raises(HttpCallError, match="HTTP request failed") as excinfo:
        client.request("GET", "http://config.local/")
    assert excinfo.value.status_code is None


def test_request_rejects_empty_url() -> None:
    with pytest.raises(ValueError):
        HttpClient().request("GET", "   ")


def test_is_reachable_true_for_2xx_false_for_non_2xx_and_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/generate_204":
            return httpx.Response(204, request=request)
        if request.url.path == "/bad":
            return httpx.Response(500, request=request)
        raise httpx.ConnectError("boom", request=request)

    client = HttpClient(transport=httpx.MockTransport(handler))
    assert client.is_reachable("http://probe.local/generate_204") is True
    assert client.is_reachable("http://probe.local/bad") is False
    assert client.is_reachable("http://probe.local/error") is False
    assert client.is_reachable("") is False
