"""Streamlit entrypoint for the Shopfront shell.

The shell stands in for the mobile UI layer: a spinner while the entrypoint
resolves, then either the remote storefront embedded in an iframe or the
native placeholder with a retry button.
"""

from __future__ import annotations

import streamlit as st
import streamlit.components.v1 as components

from shopfront.config import get_settings
from shopfront.entrypoint.factory import build_session
from shopfront.entrypoint.models import ResolvedEntrypoint, SessionPhase
from shopfront.entrypoint.session import EntrypointSession, InvalidSessionTransition
from shopfront.logs import configure_logging
from shopfront.net.http import HttpCallError, HttpClient
from shopfront.ui.state import CHECKED_URL_KEY, ENTRYPOINT_SESSION_KEY

_IFRAME_HEIGHT = 900


def _get_session() -> EntrypointSession:
    session = st.session_state.get(ENTRYPOINT_SESSION_KEY)
    if session is None:
        settings = get_settings()
        configure_logging(settings.log_level)
        session = build_session(settings)
        st.session_state[ENTRYPOINT_SESSION_KEY] = session
        st.session_state[CHECKED_URL_KEY] = None
    return session


def _check_main_frame(session: EntrypointSession, url: str) -> bool:
    """Load the main frame once and report the outcome to the session."""

    if st.session_state.get(CHECKED_URL_KEY) == url:
        return True
    settings = get_settings()
    client = HttpClient(
        timeout_seconds=settings.remote_config_timeout_seconds,
        user_agent=settings.http_user_agent,
    )
    try:
        response = client.request("GET", url)
    except HttpCallError as exc:
        session.record_load_failure(url, str(exc))
        st.session_state[CHECKED_URL_KEY] = None
        return False
    # Remember the URL after redirects, the way a web view reports it.
    session.record_successful_load(str(response.url))
    st.session_state[CHECKED_URL_KEY] = url
    return True


def _render_remote(session: EntrypointSession, entrypoint: ResolvedEntrypoint) -> None:
    url = entrypoint.url or ""
    with st.spinner("Loading storefront..."):
        loaded = _check_main_frame(session, url)
    if not loaded:
        st.rerun()
    components.iframe(url, height=_IFRAME_HEIGHT, scrolling=True)


def _render_native(session: EntrypointSession, entrypoint: ResolvedEntrypoint | None) -> None:
    st.header("Shop")
    st.write("The native catalogue is shown while the online storefront is unavailable.")
    if entrypoint is not None and entrypoint.reason is not None:
        st.caption(f"Reason: {entrypoint.reason.value}")
    if st.button("Retry", key="retry_entrypoint", disabled=session.is_resolving):
        try:
            with st.spinner("Checking storefront..."):
                session.retry()
        except InvalidSessionTransition as exc:
            st.warning(str(exc))
            return
        st.session_state[CHECKED_URL_KEY] = None
        st.rerun()


def main() -> None:
    """Main Streamlit entrypoint."""

    st.set_page_config(page_title="Shopfront", layout="wide")
    session = _get_session()

    if session.phase is SessionPhase.UNINITIALIZED:
        with st.spinner("Loading..."):
            session.start()

    entrypoint = session.current
    if session.phase is SessionPhase.REMOTE and entrypoint is not None:
        _render_remote(session, entrypoint)
    else:
        _render_native(session, entrypoint)


if __name__ == "__main__":  # pragma: no cover
    main()
