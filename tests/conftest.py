"""Shared test fixtures."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from crypto_alert.alerts import AlertEvaluator, AlertStore
from crypto_alert.db.engine import create_tables
from crypto_alert.db.kv_store import SqlKeyValueStore
from crypto_alert.ingest import PriceIngestor
from crypto_alert.presentation import PresentationListener


class RecordingPresenter(PresentationListener):
    """Collects every event as (hook, *args) tuples."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def on_price_update(self, asset, quote):
        self.events.append(("price", asset, quote))

    def on_series_update(self, asset, values):
        self.events.append(("series", asset, list(values)))

    def on_alert_triggered(self, alert, price):
        self.events.append(("triggered", alert, price))

    def on_alert_list_changed(self, active_alerts):
        self.events.append(("alerts", list(active_alerts)))

    def on_notice(self, message):
        self.events.append(("notice", message))

    def of(self, kind: str) -> list[tuple]:
        return [e for e in self.events if e[0] == kind]


@pytest.fixture
def engine():
    """In-memory SQLite engine with the kv table created.

    StaticPool keeps one connection so every session sees the same database.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def kv(session_factory):
    return SqlKeyValueStore(session_factory)


@pytest.fixture
def store(kv):
    return AlertStore(kv)


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def ingestor(store, presenter):
    return PriceIngestor(
        AlertEvaluator(store),
        presenter=presenter,
        capacity=20,
        assets=["bitcoin", "ethereum"],
    )
