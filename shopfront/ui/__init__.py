"""Streamlit shell acting as the UI layer for the entrypoint resolver."""
