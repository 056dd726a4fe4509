"""Tests for Pydantic domain models."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from crypto_alert.models import Alert, AlertCondition, MarketQuote, PriceSample

NOW = datetime.now(timezone.utc)


class TestAlertCondition:
    def test_values(self):
        assert AlertCondition("above") is AlertCondition.ABOVE
        assert AlertCondition("below") is AlertCondition.BELOW

    def test_lookup_ignores_case(self):
        assert AlertCondition("Above") is AlertCondition.ABOVE
        assert AlertCondition(" BELOW ") is AlertCondition.BELOW

    def test_unknown_value(self):
        with pytest.raises(ValueError):
            AlertCondition("sideways")

    def test_above_is_inclusive(self):
        assert AlertCondition.ABOVE.is_met(Decimal(100), Decimal(100))
        assert AlertCondition.ABOVE.is_met(Decimal(101), Decimal(100))
        assert not AlertCondition.ABOVE.is_met(Decimal(99), Decimal(100))

    def test_below_is_inclusive(self):
        assert AlertCondition.BELOW.is_met(Decimal(100), Decimal(100))
        assert AlertCondition.BELOW.is_met(Decimal(99), Decimal(100))
        assert not AlertCondition.BELOW.is_met(Decimal(101), Decimal(100))


class TestAlert:
    def test_construct_by_field_name(self):
        a = Alert(id=1, asset="bitcoin", condition="above", threshold=Decimal("50000"))
        assert a.triggered is False
        assert a.condition is AlertCondition.ABOVE

    def test_construct_from_record(self):
        a = Alert.from_record(
            {"id": 7, "coin": "ethereum", "condition": "below", "price": 1800, "triggered": True}
        )
        assert a.asset == "ethereum"
        assert a.threshold == Decimal("1800")
        assert a.triggered is True

    def test_record_uses_stored_field_names(self):
        a = Alert(id=1, asset="bitcoin", condition="above", threshold=Decimal("1.5"))
        assert a.to_record() == {
            "id": 1,
            "coin": "bitcoin",
            "condition": "above",
            "price": "1.5",
            "triggered": False,
        }

    def test_frozen(self):
        a = Alert(id=1, asset="bitcoin", condition="above", threshold=Decimal("1"))
        with pytest.raises(ValidationError):
            a.triggered = True

    @pytest.mark.parametrize("threshold", [Decimal(0), Decimal(-1)])
    def test_threshold_must_be_positive(self, threshold):
        with pytest.raises(ValidationError):
            Alert(id=1, asset="bitcoin", condition="above", threshold=threshold)

    def test_asset_required(self):
        with pytest.raises(ValidationError):
            Alert(id=1, asset="", condition="above", threshold=Decimal(1))

    def test_matches(self):
        a = Alert(id=1, asset="bitcoin", condition="below", threshold=Decimal(10))
        assert a.matches(Decimal(10))
        assert not a.matches(Decimal(11))


class TestPriceSample:
    def test_valid(self):
        s = PriceSample(asset="bitcoin", price=Decimal("64000"), ts=NOW)
        assert s.price == Decimal("64000")

    @pytest.mark.parametrize("price", [Decimal(0), Decimal("-0.1")])
    def test_price_must_be_positive(self, price):
        with pytest.raises(ValidationError):
            PriceSample(asset="bitcoin", price=price, ts=NOW)


class TestMarketQuote:
    def test_to_sample(self):
        q = MarketQuote(asset="bitcoin", ts=NOW, current_price=Decimal("64000"))
        s = q.to_sample()
        assert s == PriceSample(asset="bitcoin", price=Decimal("64000"), ts=NOW)

    @pytest.mark.parametrize("price", [None, Decimal(0), Decimal("-3")])
    def test_to_sample_without_usable_price(self, price):
        assert MarketQuote(asset="bitcoin", ts=NOW, current_price=price).to_sample() is None

    def test_optional_fields_default_to_none(self):
        q = MarketQuote(asset="ethereum", ts=NOW)
        assert q.high_24h is None
        assert q.market_cap is None
