"""AlertEvaluator — checks active alerts against the latest prices."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

import structlog

from crypto_alert.alerts.store import AlertStore
from crypto_alert.models import Alert

log = structlog.get_logger("alert_evaluator")


def usable_price(price: Decimal | None) -> bool:
    """A price counts only if it is present, finite and strictly positive."""
    return price is not None and price.is_finite() and price > 0


class AlertEvaluator:
    """Fires each alert at most once.

    Holds no alert state of its own: reads active alerts from the store and
    asks the store to flip them to triggered.
    """

    def __init__(self, store: AlertStore) -> None:
        self._store = store

    def active_alerts(self) -> list[Alert]:
        return self._store.list(include_triggered=False)

    def evaluate(self, samples: Mapping[str, Decimal | None]) -> list[Alert]:
        """Return the alerts newly triggered by *samples*, in creation order.

        Assets missing from *samples* (or without a usable price) are skipped
        and stay eligible for the next call.
        """
        fired: list[Alert] = []
        for alert in self._store.list(include_triggered=False):
            price = samples.get(alert.asset)
            if not usable_price(price):
                continue
            if not alert.matches(price):
                continue

            updated = self._store.mark_triggered(alert.id)
            if updated is None:
                continue
            fired.append(updated)
            log.info(
                "alert_triggered",
                alert_id=alert.id,
                asset=alert.asset,
                condition=alert.condition.value,
                threshold=str(alert.threshold),
                price=str(price),
            )
        return fired
