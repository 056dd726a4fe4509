"""
Alert engine.

Structure:
    alerts/
    ├── store.py      → AlertStore (durable CRUD, write-through)
    └── evaluator.py  → AlertEvaluator (fire-once threshold checks)

Usage:
    store = AlertStore(SqlKeyValueStore(session_factory))
    store.create("bitcoin", "above", "50000")

    evaluator = AlertEvaluator(store)
    fired = evaluator.evaluate({"bitcoin": Decimal("50100")})
"""

from crypto_alert.alerts.evaluator import AlertEvaluator
from crypto_alert.alerts.store import DEFAULT_STORAGE_KEY, AlertStore, parse_threshold

__all__ = [
    "AlertEvaluator",
    "AlertStore",
    "DEFAULT_STORAGE_KEY",
    "parse_threshold",
]
