"""Durable key-value store — whole-value reads and overwrites keyed by a string."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from crypto_alert.db.tables.kv import KeyValueRow
from crypto_alert.errors import PersistenceFailure

log = structlog.get_logger("kv_store")


class KeyValueStore(ABC):
    """Minimal persistence contract used by the alert store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never written."""
        ...

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Overwrite the value for *key*. Raises PersistenceFailure on error."""
        ...


class SqlKeyValueStore(KeyValueStore):
    """Key-value store backed by the ``kv_entries`` table.

    Every call opens its own short-lived session and commits before
    returning, so a successful ``put`` is durable.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        try:
            with self._session_factory() as session:
                row = session.get(KeyValueRow, key)
                return row.value if row is not None else None
        except SQLAlchemyError as exc:
            raise PersistenceFailure(f"failed to read key {key!r}") from exc

    def put(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        try:
            with self._session_factory() as session:
                row = session.get(KeyValueRow, key)
                if row is None:
                    session.add(KeyValueRow(key=key, value=value, updated_at=now))
                else:
                    row.value = value
                    row.updated_at = now
                session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceFailure(f"failed to write key {key!r}") from exc
        log.debug("kv_written", key=key, size=len(value))
