"""Pydantic domain models."""

from crypto_alert.models.alert import Alert, AlertCondition
from crypto_alert.models.market import MarketQuote, PriceSample

__all__ = [
    "Alert",
    "AlertCondition",
    "MarketQuote",
    "PriceSample",
]
