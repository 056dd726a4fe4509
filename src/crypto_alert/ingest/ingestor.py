"""PriceIngestor — one polling cycle: series update, alert check, fan-out."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal

import structlog

from crypto_alert.alerts.evaluator import AlertEvaluator, usable_price
from crypto_alert.ingest.series import DEFAULT_CAPACITY, RollingSeries
from crypto_alert.models import Alert, PriceSample
from crypto_alert.presentation.listener import PresentationListener

log = structlog.get_logger("ingestor")


@dataclass
class IngestResult:
    """What a single ``ingest`` call changed."""

    updated_assets: list[str] = field(default_factory=list)
    triggered: list[Alert] = field(default_factory=list)


def _coerce_price(value: Decimal | float | int | None) -> Decimal | None:
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class PriceIngestor:
    """Feeds price batches into per-asset RollingSeries and the evaluator.

    Series are created on first use (or up front for *assets*) and live as
    long as the ingestor. Events go to *presenter*; wrap several listeners
    in a ListenerGroup.
    """

    def __init__(
        self,
        evaluator: AlertEvaluator,
        presenter: PresentationListener | None = None,
        capacity: int = DEFAULT_CAPACITY,
        assets: Iterable[str] = (),
    ) -> None:
        self._evaluator = evaluator
        self.presenter = presenter if presenter is not None else PresentationListener()
        self._capacity = capacity
        self._series: dict[str, RollingSeries] = {}
        for asset in assets:
            self._series_for(asset)

    def series(self, asset: str) -> list[Decimal]:
        """Current window for *asset*, oldest first (empty if never seen)."""
        s = self._series.get(asset)
        return s.values() if s is not None else []

    def ingest(self, samples: Mapping[str, Decimal | float | int | None]) -> IngestResult:
        prices = {asset: _coerce_price(price) for asset, price in samples.items()}
        result = IngestResult()

        for asset, price in prices.items():
            if not usable_price(price):
                log.debug("price_skipped", asset=asset, price=None if price is None else str(price))
                continue
            self._series_for(asset).push(price)
            result.updated_assets.append(asset)

        result.triggered = self._evaluator.evaluate(prices)
        for alert in result.triggered:
            self.presenter.on_alert_triggered(alert, prices[alert.asset])
        if result.triggered:
            self.presenter.on_alert_list_changed(self._evaluator.active_alerts())

        for asset in result.updated_assets:
            self.presenter.on_series_update(asset, self._series[asset].values())

        log.debug(
            "ingest_complete",
            assets=result.updated_assets,
            triggered=[a.id for a in result.triggered],
        )
        return result

    def ingest_samples(self, samples: Iterable[PriceSample]) -> IngestResult:
        """Convenience wrapper: later samples for the same asset win."""
        return self.ingest({s.asset: s.price for s in samples})

    def _series_for(self, asset: str) -> RollingSeries:
        series = self._series.get(asset)
        if series is None:
            series = RollingSeries(capacity=self._capacity)
            self._series[asset] = series
        return series

