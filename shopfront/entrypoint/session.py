"""Per-session state machine around :class:`RemoteEntrypointResolver`.

``uninitialized -> resolving -> {native | remote}``. ``remote`` moves to
``native`` only through a main-frame load failure; leaving ``native`` needs
an explicit :meth:`EntrypointSession.retry`.
"""

from __future__ import annotations

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor

from loguru import logger

from shopfront.entrypoint.models import ResolvedEntrypoint, SessionPhase
from shopfront.entrypoint.resolver import RemoteEntrypointResolver

__all__ = [
    "EntrypointSession",
    "InvalidSessionTransition",
    "ResolutionInProgressError",
]

log = logger.bind(module="entrypoint.session")


class InvalidSessionTransition(RuntimeError):
    """Raised when an operation is not allowed in the current phase."""


class ResolutionInProgressError(InvalidSessionTransition):
    """Raised when a resolution is requested while another one is pending."""


class EntrypointSession:
    def __init__(self, resolver: RemoteEntrypointResolver) -> None:
        self.resolver = resolver
        self._lock = threading.Lock()
        self._phase = SessionPhase.UNINITIALIZED
        self._current: ResolvedEntrypoint | None = None

    @property
    def phase(self) -> SessionPhase:
        with self._lock:
            return self._phase

    @property
    def current(self) -> ResolvedEntrypoint | None:
        """The active entrypoint, ``None`` until the first resolution completes."""
        with self._lock:
            return self._current

    @property
    def is_resolving(self) -> bool:
        return self.phase is SessionPhase.RESOLVING

    def start(self) -> ResolvedEntrypoint:
        """Resolve the entrypoint for this session on the calling thread."""
        self._begin(allowed=(SessionPhase.UNINITIALIZED,), action="start")
        return self._run()

    def start_in_background(self, executor: Executor | None = None) -> "Future[ResolvedEntrypoint]":
        """Resolve on a worker thread so the caller can keep rendering a loading state."""
        self._begin(allowed=(SessionPhase.UNINITIALIZED,), action="start")
        if executor is not None:
            return executor.submit(self._run)

        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="entrypoint")
        future = pool.submit(self._run)
        pool.shutdown(wait=False)
        return future

    def retry(self) -> ResolvedEntrypoint:
        """Re-run resolution after an explicit user request."""
        self._begin(allowed=(SessionPhase.NATIVE, SessionPhase.REMOTE), action="retry")
        return self._run()

    def record_successful_load(self, url: str) -> None:
        self._require(SessionPhase.REMOTE, action="record_successful_load")
        self.resolver.record_successful_load(url)

    def record_load_failure(self, url: str, reason: str) -> ResolvedEntrypoint:
        self._require(SessionPhase.REMOTE, action="record_load_failure")
        result = self.resolver.record_load_failure(url, reason)
        with self._lock:
            self._phase = SessionPhase.NATIVE
            self._current = result
        log.info("Session switched to native after load failure url={}", url)
        return result

    # Internal helpers -------------------------------------------------

    def _begin(self, *, allowed: tuple[SessionPhase, ...], action: str) -> None:
        with self._lock:
            if self._phase is SessionPhase.RESOLVING:
                raise ResolutionInProgressError(f"Cannot {action}: a resolution is already in flight.")
            if self._phase not in allowed:
                raise InvalidSessionTransition(f"Cannot {action} from phase {self._phase.value!r}.")
            self._phase = SessionPhase.RESOLVING

    def _require(self, phase: SessionPhase, *, action: str) -> None:
        with self._lock:
            if self._phase is not phase:
                raise InvalidSessionTransition(
                    f"Cannot {action} in phase {self._phase.value!r}; expected {phase.value!r}."
                )

    def _run(self) -> ResolvedEntrypoint:
        try:
            result = self.resolver.resolve_entrypoint()
        except BaseException:
            # Leave the session in a phase that accepts retry().
            with self._lock:
                self._phase = SessionPhase.NATIVE if self._current is None else self._phase_for(self._current)
            log.exception("Entrypoint resolution crashed")
            raise
        with self._lock:
            self._current = result
            self._phase = self._phase_for(result)
        return result

    @staticmethod
    def _phase_for(result: ResolvedEntrypoint) -> SessionPhase:
        return SessionPhase.REMOTE if result.is_remote else SessionPhase.NATIVE
