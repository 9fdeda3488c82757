"""Connectivity probes answering "can we reach the network at all?"."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from loguru import logger

from shopfront.net.http import HttpClient

if TYPE_CHECKING:
    import httpx

__all__ = ["ConnectivityProbe", "HttpConnectivityProbe", "StaticConnectivityProbe"]

log = logger.bind(module="entrypoint.connectivity")


@runtime_checkable
class ConnectivityProbe(Protocol):
    def is_reachable(self) -> bool: ...


class HttpConnectivityProbe:
    """Reachable when a GET against ``url`` answers 2xx within the timeout."""

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = 3.0,
        user_agent: str | None = "shopfront",
        transport: "httpx.BaseTransport | None" = None,
    ) -> None:
        url = (url or "").strip()
        if not url:
            raise ValueError("Connectivity probe URL must be non-empty.")
        self.url = url
        self._http = HttpClient(
            timeout_seconds=timeout_seconds,
            user_agent=user_agent,
            transport=transport,
        )

    def is_reachable(self) -> bool:
        reachable = self._http.is_reachable(self.url)
        log.debug("Connectivity probe {} reachable={}", self.url, reachable)
        return reachable


class StaticConnectivityProbe:
    def __init__(self, reachable: bool = True) -> None:
        self.reachable = bool(reachable)
        self.calls = 0

    def is_reachable(self) -> bool:
        self.calls += 1
        return self.reachable
