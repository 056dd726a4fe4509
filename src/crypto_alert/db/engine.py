"""Database engine and session management."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine, Engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from crypto_alert.db.base import Base

_engine: Engine | None = None
_SessionLocal: sessionmaker[Session] | None = None


def _ensure_sqlite_dir(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    database = parsed.database
    if not database or database == ":memory:":
        return
    Path(database).expanduser().parent.mkdir(parents=True, exist_ok=True)


def init_engine(url: str, **kwargs) -> Engine:
    """Create the global engine and session factory."""
    global _engine, _SessionLocal
    _ensure_sqlite_dir(url)
    _engine = create_engine(url, **kwargs)
    _SessionLocal = sessionmaker(bind=_engine)
    return _engine


def create_tables(engine: Engine) -> None:
    """Create any missing tables (there are no migrations)."""
    import crypto_alert.db.tables  # noqa: F401  registers KeyValueRow on Base.metadata

    Base.metadata.create_all(engine)


def get_session_factory() -> sessionmaker[Session]:
    """Return the global session factory (must call init_engine first)."""
    if _SessionLocal is None:
        raise RuntimeError("Database engine not initialised — call init_engine() first")
    return _SessionLocal

