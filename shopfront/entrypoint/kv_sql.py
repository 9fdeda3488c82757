"""Key-value store persisted through SQLAlchemy (SQLite by default)."""

from __future__ import annotations

from loguru import logger
from sqlalchemy import Engine, create_engine, delete

from shopfront.db.base import ensure_state_schema, make_session_factory, session_scope
from shopfront.db.models import KeyValueEntry

__all__ = ["SqlKeyValueStore"]

log = logger.bind(module="entrypoint.kv_sql")


class SqlKeyValueStore:
    """`KeyValueStore` backed by the ``kv_entries`` table."""

    def __init__(self, engine: Engine) -> None:
        ensure_state_schema(engine)
        self.engine = engine
        self._sessions = make_session_factory(engine)

    @classmethod
    def from_dsn(cls, dsn: str, *, echo: bool = False) -> "SqlKeyValueStore":
        return cls(create_engine(dsn, pool_pre_ping=True, echo=echo, future=True))

    def get(self, key: str) -> str | None:
        with session_scope(self._sessions) as session:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        with session_scope(self._sessions) as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
        log.debug("Stored key={}", key)

    def delete(self, key: str) -> None:
        with session_scope(self._sessions) as session:
            session.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))

    def close(self) -> None:
        self.engine.dispose()
