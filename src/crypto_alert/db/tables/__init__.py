"""Import all table modules so Base.metadata knows about them."""

from crypto_alert.db.tables.kv import KeyValueRow

__all__ = ["KeyValueRow"]
