"""Remote configuration stores returning the operator-controlled storefront URL."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from loguru import logger

from shopfront.net.http import HttpCallError, HttpClient

if TYPE_CHECKING:
    import httpx

__all__ = [
    "HttpRemoteConfigStore",
    "RemoteConfigStore",
    "RemoteLookupError",
    "StaticRemoteConfigStore",
]

log = logger.bind(module="entrypoint.remote_config")


class RemoteLookupError(HttpCallError):
    """Raised when the remote configuration cannot be read or is malformed."""


@runtime_checkable
class RemoteConfigStore(Protocol):
    def fetch_url(self) -> str | None:
        """Return the configured URL, ``None``/``""`` when unset.

        Raises:
            RemoteLookupError: transport failure or malformed payload.
        """
        ...


class HttpRemoteConfigStore:
    """Reads a JSON document over HTTP and returns the string under ``key``.

    The document is expected to be a JSON object such as
    ``{"url": "https://shop.example/app"}``. A missing key, ``null`` or a blank
    string all mean that no remote experience is configured.
    """

    def __init__(
        self,
        url: str,
        *,
        key: str = "url",
        timeout_seconds: float = 5.0,
        user_agent: str | None = "shopfront",
        transport: "httpx.BaseTransport | None" = None,
    ) -> None:
        url = (url or "").strip()
        if not url:
            raise ValueError("Remote configuration URL must be non-empty.")
        key = (key or "").strip()
        if not key:
            raise ValueError("Remote configuration key must be non-empty.")
        self.url = url
        self.key = key
        self._http = HttpClient(
            timeout_seconds=timeout_seconds,
            user_agent=user_agent,
            transport=transport,
        )

    def fetch_url(self) -> str | None:
        try:
            payload = self._http.get_json(self.url)
        except HttpCallError as exc:
            raise RemoteLookupError(exc.message, status_code=exc.status_code) from exc
        return self._extract(payload)

    def _extract(self, payload: Any) -> str | None:
        if not isinstance(payload, dict):
            raise RemoteLookupError(
                f"Malformed remote configuration: expected a JSON object, got {type(payload).__name__}."
            )
        value = payload.get(self.key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise RemoteLookupError(
                f"Malformed remote configuration: {self.key!r} must be a string, "
                f"got {type(value).__name__}."
            )
        return value.strip() or None


class StaticRemoteConfigStore:
    """Fixed answer; raises ``error`` instead when one is given."""

    def __init__(self, url: str | None = None, *, error: BaseException | None = None) -> None:
        self.url = url
        self.error = error
        self.calls = 0

    def fetch_url(self) -> str | None:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.url
