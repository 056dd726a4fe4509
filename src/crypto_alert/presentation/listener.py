"""Presentation observer interface and a structlog-backed implementation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

import structlog

from crypto_alert.models import Alert, MarketQuote
from crypto_alert.presentation.formatting import (
    describe_alert,
    format_change,
    format_currency,
    triggered_message,
)


class PresentationListener:
    """Receives display and notification events from the engine.

    Every hook is a no-op by default; subclasses override what they render.
    """

    def on_price_update(self, asset: str, quote: MarketQuote) -> None:
        pass

    def on_series_update(self, asset: str, values: Sequence[Decimal]) -> None:
        pass

    def on_alert_triggered(self, alert: Alert, price: Decimal) -> None:
        pass

    def on_alert_list_changed(self, active_alerts: Sequence[Alert]) -> None:
        pass

    def on_notice(self, message: str) -> None:
        """A short user-facing confirmation or validation message."""


class LoggingPresenter(PresentationListener):
    """Renders every event as a structured log line."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._log = logger or structlog.get_logger("presenter")

    def on_price_update(self, asset: str, quote: MarketQuote) -> None:
        self._log.info(
            "price",
            asset=asset,
            price=format_currency(quote.current_price),
            change_24h=format_change(quote.price_change_percentage_24h),
            high_24h=format_currency(quote.high_24h),
            low_24h=format_currency(quote.low_24h),
            volume_24h=format_currency(quote.total_volume),
            market_cap=format_currency(quote.market_cap),
        )

    def on_series_update(self, asset: str, values: Sequence[Decimal]) -> None:
        self._log.debug(
            "series",
            asset=asset,
            points=len(values),
            low=format_currency(min(values)) if values else None,
            high=format_currency(max(values)) if values else None,
        )

    def on_alert_triggered(self, alert: Alert, price: Decimal) -> None:
        self._log.warning(
            "alert",
            alert_id=alert.id,
            message=triggered_message(alert, price),
        )

    def on_alert_list_changed(self, active_alerts: Sequence[Alert]) -> None:
        self._log.info(
            "active_alerts",
            count=len(active_alerts),
            alerts=[describe_alert(a) for a in active_alerts],
        )

    def on_notice(self, message: str) -> None:
        self._log.info("notice", message=message)


class ListenerGroup(PresentationListener):
    """Fans each event out to several listeners.

    A listener that raises is logged and skipped; the rest still run.
    """

    def __init__(self, listeners: Iterable[PresentationListener] = ()) -> None:
        self._listeners = list(listeners)
        self._log = structlog.get_logger("presentation")

    def add(self, listener: PresentationListener) -> None:
        self._listeners.append(listener)

    def __len__(self) -> int:
        return len(self._listeners)

    def _emit(self, hook: str, *args) -> None:
        for listener in self._listeners:
            try:
                getattr(listener, hook)(*args)
            except Exception:
                self._log.exception("listener_error", hook=hook, listener=type(listener).__name__)

    def on_price_update(self, asset: str, quote: MarketQuote) -> None:
        self._emit("on_price_update", asset, quote)

    def on_series_update(self, asset: str, values: Sequence[Decimal]) -> None:
        self._emit("on_series_update", asset, values)

    def on_alert_triggered(self, alert: Alert, price: Decimal) -> None:
        self._emit("on_alert_triggered", alert, price)

    def on_alert_list_changed(self, active_alerts: Sequence[Alert]) -> None:
        self._emit("on_alert_list_changed", active_alerts)

    def on_notice(self, message: str) -> None:
        self._emit("on_notice", message)
