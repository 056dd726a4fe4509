"""Database layer — engine, session, ORM base, key-value store."""

from crypto_alert.db.base import Base
from crypto_alert.db.engine import (
    create_tables,
    get_session_factory,
    init_engine,
)
from crypto_alert.db.kv_store import KeyValueStore, SqlKeyValueStore

__all__ = [
    "Base",
    "KeyValueStore",
    "SqlKeyValueStore",
    "create_tables",
    "get_session_factory",
    "init_engine",
]
