"""Market data models — price samples and 24h quote snapshots."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class PriceSample(BaseModel):
    """One observed price for an asset."""

    model_config = ConfigDict(frozen=True)

    asset: str
    price: Decimal = Field(gt=0)
    ts: datetime


class MarketQuote(BaseModel):
    """Per-asset market snapshot from the price source, used for display."""

    asset: str
    ts: datetime
    current_price: Decimal | None = None
    high_24h: Decimal | None = None
    low_24h: Decimal | None = None
    total_volume: Decimal | None = None
    price_change_percentage_24h: Decimal | None = None
    market_cap: Decimal | None = None

    def to_sample(self) -> PriceSample | None:
        """Return a PriceSample, or None if the quote carries no usable price."""
        price = self.current_price
        if price is None or not price.is_finite() or price <= 0:
            return None
        return PriceSample(asset=self.asset, price=price, ts=self.ts)
