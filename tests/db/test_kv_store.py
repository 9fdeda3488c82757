from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine, inspect

from shopfront.db.base import ensure_state_schema, sanitize_dsn
from shopfront.entrypoint.kv_sql import SqlKeyValueStore
from shopfront.entrypoint.state import KeyValueStore, PersistedUrlState


def _dsn(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'state.db'}"


def test_ensure_state_schema_creates_table_and_is_repeatable(tmp_path: Path) -> None:
    engine = create_engine(_dsn(tmp_path))
    try:
        ensure_state_schema(engine)
        ensure_state_schema(engine)
        assert "kv_entries" in inspect(engine).get_table_names()
    finally:
        engine.dispose()


def test_store_built_from_plain_engine_creates_its_table(tmp_path: Path) -> None:
    store = SqlKeyValueStore(create_engine(_dsn(tmp_path)))
    try:
        assert store.get("lastLoadedUrl") is None
        store.set("lastLoadedUrl", "https://x")
        assert store.get("lastLoadedUrl") == "https://x"
    finally:
        store.close()


def test_set_get_delete_round_trip(tmp_path: Path) -> None:
    store = SqlKeyValueStore.from_dsn(_dsn(tmp_path))
    try:
        assert isinstance(store, KeyValueStore)
        assert store.get("lastLoadedUrl") is None
        store.set("lastLoadedUrl", "https://x")
        store.set("lastLoadedUrl", "https://y")
        assert store.get("lastLoadedUrl") == "https://y"
        store.delete("lastLoadedUrl")
        store.delete("lastLoadedUrl")
        assert store.get("lastLoadedUrl") is None
    finally:
        store.close()


def test_values_survive_a_new_engine(tmp_path: Path) -> None:
    first = SqlKeyValueStore.from_dsn(_dsn(tmp_path))
    PersistedUrlState(first).last_remote_url = "https://shop.example/app"
    first.close()

    second = SqlKeyValueStore.from_dsn(_dsn(tmp_path))
    try:
        state = PersistedUrlState(second)
        assert state.last_remote_url == "https://shop.example/app"
        assert state.last_loaded_url == ""
    finally:
        second.close()


def test_sanitize_dsn_hides_password() -> None:
    assert "***" in sanitize_dsn("postgresql+psycopg://user:secret@db:5432/shop")
    assert "secret" not in sanitize_dsn("postgresql+psycopg://user:secret@db:5432/shop")
