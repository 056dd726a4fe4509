"""Monitor runner — wires config, storage, source and presenter together."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

import structlog

from crypto_alert.alerts import AlertEvaluator, AlertStore
from crypto_alert.config.loader import load_config
from crypto_alert.config.schema import AppConfig
from crypto_alert.db.engine import create_tables, get_session_factory, init_engine
from crypto_alert.db.kv_store import SqlKeyValueStore
from crypto_alert.exchange import CoinGeckoClient, CoinGeckoSource
from crypto_alert.ingest import PriceIngestor
from crypto_alert.logging.setup import setup_logging
from crypto_alert.monitor.service import AlertMonitor, PriceSource
from crypto_alert.presentation import ListenerGroup, LoggingPresenter, PresentationListener

log = structlog.get_logger("monitor_runner")


def open_store(config: AppConfig) -> AlertStore:
    """Initialise the database and load the alert store from it."""
    engine = init_engine(config.storage.url)
    create_tables(engine)
    return AlertStore(SqlKeyValueStore(get_session_factory()), key=config.storage.key)


def build_monitor(
    config: AppConfig,
    store: AlertStore,
    source: PriceSource,
    listeners: Iterable[PresentationListener] = (),
) -> AlertMonitor:
    """Assemble evaluator, ingestor and monitor around an existing store."""
    presenter = ListenerGroup(listeners)
    ingestor = PriceIngestor(
        AlertEvaluator(store),
        presenter=presenter,
        capacity=config.monitor.history_size,
        assets=config.assets,
    )
    return AlertMonitor(store, ingestor, source, assets=config.assets)


async def run(config: AppConfig) -> None:
    """Main entry point — load alerts, then poll until cancelled."""
    store = open_store(config)
    source = CoinGeckoSource(
        CoinGeckoClient(base_url=config.source.base_url, timeout_s=config.source.timeout_s),
        vs_currency=config.source.vs_currency,
    )
    monitor = build_monitor(config, store, source, listeners=[LoggingPresenter()])
    monitor.start()

    try:
        await monitor.run_forever(config.monitor.poll_interval_s)
    finally:
        await source.close()
        log.info("monitor_stopped")


def main(config_path: str | None = None) -> None:
    """Entry point — load config, set up logging, run the async loop."""
    config = load_config(config_path)
    setup_logging(level=config.logging.level, log_format=config.logging.format)
    asyncio.run(run(config))
