"""HTTP helpers built on top of httpx.

Every network call made by shopfront (remote configuration lookups,
connectivity probes, main-frame checks in the UI shell) goes through
`HttpClient`, so timeouts, redirects and error mapping behave the same way at
each call site.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

import httpx

__all__ = ["HttpCallError", "HttpClient"]

_MIN_TIMEOUT_SECONDS = 0.1
_MAX_ERROR_TEXT_CHARS = 512


class HttpCallError(RuntimeError):
    """Raised when an HTTP request fails or returns a non-success response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = str(message)
        self.status_code = int(status_code) if status_code is not None else None

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.status_code is None:
            return self.message
        return f"{self.message} (status={self.status_code})"


def _short_body(response: httpx.Response) -> str:
    """Return a trimmed response body suitable for an error message."""
    try:
        text = (response.text or "").strip()
    except UnicodeDecodeError:
        text = response.content.decode("utf-8", errors="replace").strip()
    if len(text) <= _MAX_ERROR_TEXT_CHARS:
        return text
    return text[: _MAX_ERROR_TEXT_CHARS - 3].rstrip() + "..."


class HttpClient:
    """Small sync HTTP client with consistent defaults and error mapping.

    A short-lived `httpx.Client` is created per call. Shopfront issues at most
    a couple of requests per session, so pooling is not worth the lifecycle
    bookkeeping. Timeouts are clamped to at least `_MIN_TIMEOUT_SECONDS`.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 5.0,
        follow_redirects: bool = True,
        user_agent: str | None = None,
        headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.timeout_seconds = float(max(_MIN_TIMEOUT_SECONDS, timeout_seconds))
        self.follow_redirects = bool(follow_redirects)
        self.transport = transport

        merged: dict[str, str] = dict(headers or {})
        if user_agent and "User-Agent" not in merged:
            merged["User-Agent"] = user_agent
        self.headers = merged

    def _build_client(self, *, timeout_seconds: float | None = None) -> httpx.Client:
        timeout = self.timeout_seconds
        if timeout_seconds is not None:
            timeout = float(max(_MIN_TIMEOUT_SECONDS, timeout_seconds))
        kwargs: dict[str, object] = {
            "timeout": timeout,
            "follow_redirects": self.follow_redirects,
            "headers": self.headers,
        }
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.Client(**kwargs)  # type: ignore[arg-type]

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Send an HTTP request and return the response.

        Raises:
            HttpCallError: When the request fails or returns a 4xx/5xx response.
        """
        method = (method or "GET").strip().upper()
        target = (url or "").strip()
        if not target:
            raise ValueError("url must be non-empty.")

        try:
            with self._build_client() as client:
                response = client.request(
                    method,
                    target,
                    params=dict(params) if params else None,
                    headers=dict(headers) if headers else None,
                )
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as exc:
            message = _short_body(exc.response) or "HTTP request failed"
            raise HttpCallError(message, status_code=int(exc.response.status_code)) from exc
        except httpx.RequestError as exc:
            raise HttpCallError(f"HTTP request failed: {exc}") from exc

    def get_json(
        self,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """GET a JSON response, returning the parsed payload (or None on empty body)."""
        merged_headers: dict[str, str] = {"Accept": "application/json"}
        if headers:
            merged_headers.update(dict(headers))
        response = self.request("GET", url, params=params, headers=merged_headers)
        if not response.content:
            return None
        try:
            return json.loads(response.content.decode("utf-8", errors="replace"))
        except json.JSONDecodeError as exc:
            raise HttpCallError(
                f"Invalid JSON response: {exc}",
                status_code=int(response.status_code),
            ) from exc

    def is_reachable(self, url: str, *, timeout_seconds: float | None = None) -> bool:
        """Return True when a GET request returns a 2xx response."""
        target = (url or "").strip()
        if not target:
            return False
        try:
            with self._build_client(timeout_seconds=timeout_seconds) as client:
                response = client.get(target)
                return 200 <= int(response.status_code) < 300
        except httpx.HTTPError:
            return False
