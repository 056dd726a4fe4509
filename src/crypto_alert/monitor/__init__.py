"""Polling driver — runs cycles on a cadence and routes user intents."""

from crypto_alert.monitor.service import AlertMonitor, PriceSource

__all__ = ["AlertMonitor", "PriceSource"]
