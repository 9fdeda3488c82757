from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from loguru import logger
from rich.console import Console
from sqlalchemy import Engine
from sqlalchemy.engine import URL
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

console = Console()
log = logger.bind(module="db.base")


def sanitize_dsn(raw_dsn: str) -> str:
    """Hide sensitive parts of the DSN when logging."""
    url: URL = make_url(raw_dsn)
    if url.password:
        url = url.set(password="***")
    return str(url)


class Base(DeclarativeBase):
    """Declarative base for ORM models."""

    pass


def ensure_state_schema(engine: Engine) -> None:
    """Ensure that all shopfront state tables exist on ``engine``.

    Safe to call repeatedly against the same database; tables are created
    with ``CREATE TABLE IF NOT EXISTS`` semantics.
    """

    safe_dsn = engine.url.render_as_string(hide_password=True)
    try:
        # Import models so that all ORM tables are registered on ``Base.metadata``.
        import shopfront.db.models  # noqa: F401  # pylint: disable=unused-import

        Base.metadata.create_all(bind=engine)
    except Exception as exc:
        console.log(f"[bold red]Failed to prepare state database[/] url={safe_dsn} reason={exc}")
        log.exception("Failed to ensure state schema for {}: {}", safe_dsn, exc)
        raise
    log.info("State database ready at {}", safe_dsn)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """Provide a transactional scope for DB operations."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        log.exception("Session rollback triggered")
        raise
    finally:
        session.close()
