from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeout

from loguru import logger
from rich.console import Console

from shopfront.entrypoint.connectivity import ConnectivityProbe
from shopfront.entrypoint.models import (
    DegradeReason,
    LookupStatus,
    RemoteLookup,
    ResolvedEntrypoint,
    UrlSource,
)
from shopfront.entrypoint.region import RegionGate
from shopfront.entrypoint.remote_config import RemoteConfigStore, RemoteLookupError
from shopfront.entrypoint.state import PersistedUrlState

console = Console()
log = logger.bind(module="entrypoint.resolver")

__all__ = ["RemoteEntrypointResolver"]


class RemoteEntrypointResolver:
    """Decide between the remote web storefront and the native UI.

    Resolution order, first match wins:

    1. region gate (when configured) says no -> native
    2. no connectivity -> native, the remote store is not contacted
    3. a previously rendered URL exists -> remote with that URL
    4. one bounded remote configuration lookup:
       found -> remote (and remembered), unset -> native,
       failed -> last remote URL if any, else native

    Nothing here raises to the caller; every failure degrades to native.
    """

    def __init__(
        self,
        *,
        remote_config: RemoteConfigStore,
        state: PersistedUrlState,
        connectivity: ConnectivityProbe,
        region_gate: RegionGate | None = None,
        lookup_timeout_seconds: float = 5.0,
    ) -> None:
        self.remote_config = remote_config
        self.state = state
        self.connectivity = connectivity
        self.region_gate = region_gate
        self.lookup_timeout_seconds = max(0.1, float(lookup_timeout_seconds))

    def resolve_entrypoint(self) -> ResolvedEntrypoint:
        result = self._resolve()
        console.log(f"[bold cyan]Entrypoint[/] {result.describe()}")
        log.info("Resolved entrypoint: {}", result.describe())
        return result

    def record_successful_load(self, url: str) -> None:
        """Remember ``url`` as the last page that rendered without a transport error."""
        url = (url or "").strip()
        if not url:
            log.warning("Ignoring successful load report with an empty URL")
            return
        if self._read_slot("last_loaded_url") == url:
            return
        try:
            self.state.last_loaded_url = url
        except Exception as exc:  # noqa: BLE001 - an unsaved URL only costs the fast path
            log.warning("Could not persist last loaded url={}: {}", url, exc)
            return
        log.info("Recorded successful load url={}", url)

    def record_load_failure(self, url: str, reason: str) -> ResolvedEntrypoint:
        """Handle a main-frame load error and return the corrective entrypoint."""
        url = (url or "").strip()
        if url and self._read_slot("last_loaded_url") == url:
            try:
                self.state.clear_last_loaded_url()
                log.info("Cleared last loaded url={} after load failure", url)
            except Exception as exc:  # noqa: BLE001 - native is returned regardless
                log.warning("Could not clear last loaded url={}: {}", url, exc)
        log.warning("Main frame failed to load url={} reason={}", url or "-", reason)
        return ResolvedEntrypoint.native(DegradeReason.MAIN_FRAME_LOAD_FAILED)

    # Internal helpers -------------------------------------------------

    def _resolve(self) -> ResolvedEntrypoint:
        if self.region_gate is not None and not self.region_gate.is_eligible():
            return ResolvedEntrypoint.native(DegradeReason.REGION_NOT_ELIGIBLE)

        if not self._is_reachable():
            return ResolvedEntrypoint.native(DegradeReason.NO_CONNECTIVITY)

        last_loaded = self._read_slot("last_loaded_url")
        if last_loaded:
            return ResolvedEntrypoint.remote(last_loaded, UrlSource.LAST_LOADED)

        lookup = self._lookup_remote()
        if lookup.status is LookupStatus.FOUND and lookup.url:
            try:
                self.state.last_remote_url = lookup.url
            except Exception as exc:  # noqa: BLE001 - the fresh URL is still usable
                log.warning("Could not persist last remote url={}: {}", lookup.url, exc)
            return ResolvedEntrypoint.remote(lookup.url, UrlSource.REMOTE_CONFIG)
        if lookup.status is LookupStatus.NOT_CONFIGURED:
            return ResolvedEntrypoint.native(DegradeReason.NOT_CONFIGURED)

        cached = self._read_slot("last_remote_url")
        if cached:
            log.info("Remote lookup failed ({}); using cached remote url", lookup.error)
            return ResolvedEntrypoint.remote(cached, UrlSource.CACHED_REMOTE)
        return ResolvedEntrypoint.native(DegradeReason.REMOTE_LOOKUP_FAILED)

    def _is_reachable(self) -> bool:
        try:
            return bool(self.connectivity.is_reachable())
        except Exception as exc:  # noqa: BLE001 - an unusable probe means offline
            log.warning("Connectivity probe raised: {}", exc)
            return False

    def _read_slot(self, name: str) -> str:
        """Read a persisted URL slot; an unreadable store reads as empty."""
        try:
            return getattr(self.state, name)
        except Exception as exc:  # noqa: BLE001 - persistence errors degrade
            log.warning("Could not read {} from the state store: {}", name, exc)
            return ""

    def _lookup_remote(self) -> RemoteLookup:
        # The pool is shut down without waiting so a hung lookup cannot hold
        # up the decision past the timeout. Its worker thread is not a daemon
        # and is still joined at interpreter exit, so stores should use their
        # own timeout no longer than ``lookup_timeout_seconds``.
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="remote-config")
        try:
            future = executor.submit(self.remote_config.fetch_url)
            try:
                url = future.result(timeout=self.lookup_timeout_seconds)
            except FuturesTimeout:
                future.cancel()
                log.warning("Remote configuration lookup timed out after {}s", self.lookup_timeout_seconds)
                return RemoteLookup.failed(f"timed out after {self.lookup_timeout_seconds}s")
            except RemoteLookupError as exc:
                log.warning("Remote configuration lookup failed: {}", exc)
                return RemoteLookup.failed(str(exc))
            except Exception as exc:  # noqa: BLE001 - any store failure degrades
                log.opt(exception=exc).warning("Remote configuration store raised unexpectedly")
                return RemoteLookup.failed(f"{type(exc).__name__}: {exc}")
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        if url is not None and not isinstance(url, str):
            log.warning("Remote configuration store returned {}", type(url).__name__)
            return RemoteLookup.failed(f"malformed value of type {type(url).__name__}")
        url = (url or "").strip()
        if not url:
            return RemoteLookup.not_configured()
        return RemoteLookup.found(url)
