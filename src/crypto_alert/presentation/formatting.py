"""Display formatting for prices, volumes and percentage moves."""

from __future__ import annotations

from decimal import Decimal

from crypto_alert.models import Alert

_SCALES = (
    (Decimal("1e12"), "T"),
    (Decimal("1e9"), "B"),
    (Decimal("1e6"), "M"),
)

MISSING = "n/a"


def format_currency(value: Decimal | float | None) -> str:
    """Compact USD string: ``$1.23T``, ``$4.56B``, ``$7.89M``, else ``$1,234.50``."""
    if value is None:
        return MISSING
    amount = Decimal(str(value))
    for scale, suffix in _SCALES:
        if amount >= scale:
            return f"${amount / scale:.2f}{suffix}"
    return f"${amount:,.2f}"


def format_change(pct: Decimal | float | None) -> str:
    """Signed percentage with two decimals, e.g. ``+1.25%``."""
    if pct is None:
        return MISSING
    change = Decimal(str(pct))
    sign = "+" if change >= 0 else ""
    return f"{sign}{change:.2f}%"


def describe_alert(alert: Alert) -> str:
    """``BITCOIN above $50,000.00``"""
    return f"{alert.asset.upper()} {alert.condition.value} {format_currency(alert.threshold)}"


def triggered_message(alert: Alert, price: Decimal) -> str:
    return (
        f"{alert.asset.upper()} is now {alert.condition.value} "
        f"{format_currency(alert.threshold)}! Current: {format_currency(price)}"
    )
