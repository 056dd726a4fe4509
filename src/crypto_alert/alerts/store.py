"""AlertStore — in-memory alert list with write-through to a key-value store."""

from __future__ import annotations

import json
import time
from decimal import Decimal, InvalidOperation
from typing import Any

import structlog
from pydantic import ValidationError

from crypto_alert.db.kv_store import KeyValueStore
from crypto_alert.errors import InvalidAsset, InvalidThreshold, PersistenceFailure
from crypto_alert.models import Alert, AlertCondition

log = structlog.get_logger("alert_store")

DEFAULT_STORAGE_KEY = "cryptoAlerts"


def parse_threshold(value: Any) -> Decimal:
    """Coerce user input to a positive, finite Decimal or raise InvalidThreshold."""
    if isinstance(value, bool) or value is None:
        raise InvalidThreshold(value)
    try:
        threshold = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidThreshold(value) from None
    if not threshold.is_finite() or threshold <= 0:
        raise InvalidThreshold(value)
    return threshold


class AlertStore:
    """Owns every Alert record.

    The full list is loaded once from *kv* at construction and rewritten
    wholesale after each mutation. A failed write is logged and the
    in-memory state stays authoritative.
    """

    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._kv = kv
        self._key = key
        self._alerts: list[Alert] = self._load()
        self._last_id = max((a.id for a in self._alerts), default=0)
        log.info("alerts_loaded", key=key, count=len(self._alerts))

    # ── Public API ────────────────────────────────────────────

    def create(
        self,
        asset: str,
        condition: AlertCondition | str,
        threshold: Any,
    ) -> Alert:
        """Add a new untriggered alert and persist it."""
        value = parse_threshold(threshold)
        name = asset.strip().lower() if isinstance(asset, str) else ""
        if not name:
            raise InvalidAsset(asset)
        alert = Alert(
            id=self._next_id(),
            asset=name,
            condition=AlertCondition(condition),
            threshold=value,
        )
        self._alerts.append(alert)
        self._persist()
        log.info(
            "alert_created",
            alert_id=alert.id,
            asset=alert.asset,
            condition=alert.condition.value,
            threshold=str(alert.threshold),
        )
        return alert

    def list(self, include_triggered: bool = True) -> list[Alert]:
        """Alerts in creation order; only active ones unless *include_triggered*."""
        if include_triggered:
            return list(self._alerts)
        return [a for a in self._alerts if not a.triggered]

    def get(self, alert_id: int) -> Alert | None:
        for alert in self._alerts:
            if alert.id == alert_id:
                return alert
        return None

    def mark_triggered(self, alert_id: int) -> Alert | None:
        """Flip ``triggered`` to True. No-op for unknown or already-triggered ids."""
        for i, alert in enumerate(self._alerts):
            if alert.id != alert_id:
                continue
            if alert.triggered:
                return alert
            updated = alert.model_copy(update={"triggered": True})
            self._alerts[i] = updated
            self._persist()
            log.info("alert_marked_triggered", alert_id=alert_id, asset=alert.asset)
            return updated
        return None

    def remove(self, alert_id: int) -> bool:
        """Delete an alert. Returns False (and writes nothing) if it was absent."""
        remaining = [a for a in self._alerts if a.id != alert_id]
        if len(remaining) == len(self._alerts):
            return False
        self._alerts = remaining
        self._persist()
        log.info("alert_removed", alert_id=alert_id)
        return True

    def dump(self) -> str:
        """Serialize every alert to the stored JSON layout."""
        return json.dumps([a.to_record() for a in self._alerts])

    # ── Internals ─────────────────────────────────────────────

    def _next_id(self) -> int:
        # Millisecond clock, bumped when two alerts land in the same tick.
        candidate = time.time_ns() // 1_000_000
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def _persist(self) -> None:
        try:
            self._kv.put(self._key, self.dump())
        except PersistenceFailure:
            log.exception("alert_persist_failed", key=self._key, count=len(self._alerts))

    def _load(self) -> list[Alert]:
        raw = self._kv.get(self._key)
        if not raw:
            return []
        try:
            records = json.loads(raw)
        except json.JSONDecodeError:
            log.error("alert_payload_corrupt", key=self._key)
            return []
        if not isinstance(records, list):
            log.error("alert_payload_corrupt", key=self._key, type=type(records).__name__)
            return []

        alerts: list[Alert] = []
        seen: set[int] = set()
        for record in records:
            try:
                alert = Alert.from_record(record)
            except ValidationError:
                log.warning("alert_record_skipped", record=record)
                continue
            if alert.id in seen:
                log.warning("alert_record_duplicate", alert_id=alert.id)
                continue
            seen.add(alert.id)
            alerts.append(alert)
        return alerts
