"""Session state keys for the Streamlit shell."""

from __future__ import annotations

ENTRYPOINT_SESSION_KEY = "shopfront_entrypoint_session"

# URL whose main frame has already been checked in this browser session.
CHECKED_URL_KEY = "shopfront_checked_url"
