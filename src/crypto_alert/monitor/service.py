"""AlertMonitor — drives polling cycles and handles user intents."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any, Protocol

import structlog

from crypto_alert.alerts.store import AlertStore
from crypto_alert.errors import InvalidAsset, InvalidThreshold, SourceUnavailable
from crypto_alert.ingest.ingestor import PriceIngestor
from crypto_alert.models import Alert, MarketQuote
from crypto_alert.presentation.formatting import describe_alert

log = structlog.get_logger("monitor")


class PriceSource(Protocol):
    async def fetch_quotes(self, assets: Iterable[str]) -> dict[str, MarketQuote]: ...


class AlertMonitor:
    """Owns the polling cadence and the one-cycle-at-a-time guard.

    The engine underneath (store, ingestor, evaluator) is purely reactive;
    this class decides when a cycle runs. A refresh requested while another
    is still fetching is skipped rather than queued.
    """

    def __init__(
        self,
        store: AlertStore,
        ingestor: PriceIngestor,
        source: PriceSource,
        assets: Iterable[str],
    ) -> None:
        self.store = store
        self.ingestor = ingestor
        self.source = source
        self.assets = list(assets)
        self.presenter = ingestor.presenter
        self.last_updated: datetime | None = None
        self._cycle_lock = asyncio.Lock()

    def start(self) -> None:
        """Publish the persisted active alerts so the presentation can render them."""
        self.presenter.on_alert_list_changed(self.store.list(include_triggered=False))
        log.info("monitor_started", assets=self.assets)

    # ── Polling ───────────────────────────────────────────────

    async def refresh(self) -> bool:
        """Run one cycle. Returns False if skipped or the source failed."""
        if self._cycle_lock.locked():
            log.info("cycle_skipped", reason="cycle_in_flight")
            return False

        async with self._cycle_lock:
            try:
                quotes = await self.source.fetch_quotes(self.assets)
            except SourceUnavailable as exc:
                log.warning("source_unavailable", error=str(exc))
                return False

            for asset, quote in quotes.items():
                self.presenter.on_price_update(asset, quote)

            samples = [q.to_sample() for q in quotes.values()]
            result = self.ingestor.ingest_samples(s for s in samples if s is not None)
            self.last_updated = datetime.now(timezone.utc)
            log.info(
                "cycle_complete",
                assets=sorted(quotes),
                updated=result.updated_assets,
                triggered=len(result.triggered),
            )
            return True

    async def run_forever(self, interval_s: float) -> None:
        """Refresh on a fixed cadence until cancelled."""
        log.info("polling_started", interval_s=interval_s)
        while True:
            try:
                await self.refresh()
            except Exception:
                log.exception("tick_error")
            await asyncio.sleep(interval_s)

    # ── User intents ──────────────────────────────────────────

    def request_create_alert(self, asset: str, condition: str, threshold: Any) -> Alert | None:
        """Create an alert; validation failures become a notice, not an exception."""
        try:
            alert = self.store.create(asset, condition, threshold)
        except InvalidThreshold as exc:
            log.info("alert_rejected", asset=asset, reason=str(exc))
            self.presenter.on_notice("Please enter a valid price!")
            return None
        except InvalidAsset as exc:
            log.info("alert_rejected", asset=asset, reason=str(exc))
            self.presenter.on_notice("Please choose a coin!")
            return None
        except ValueError as exc:
            log.info("alert_rejected", asset=asset, reason=str(exc))
            self.presenter.on_notice(f"Unknown alert condition: {condition!r}")
            return None

        if alert.asset not in self.assets:
            log.warning("alert_asset_untracked", asset=alert.asset, tracked=self.assets)
        self.presenter.on_alert_list_changed(self.store.list(include_triggered=False))
        self.presenter.on_notice(f"Alert set for {describe_alert(alert)}")
        return alert

    def request_remove_alert(self, alert_id: int) -> bool:
        removed = self.store.remove(alert_id)
        if removed:
            self.presenter.on_alert_list_changed(self.store.list(include_triggered=False))
            self.presenter.on_notice("Alert removed")
        return removed

    async def request_manual_refresh(self) -> bool:
        return await self.refresh()
