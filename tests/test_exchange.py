"""Tests for the CoinGecko client and price source."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from decimal import Decimal

import httpx
import pytest

from crypto_alert.errors import SourceUnavailable
from crypto_alert.exchange import CoinGeckoClient, CoinGeckoSource

BTC_ROW = {
    "id": "bitcoin",
    "symbol": "btc",
    "current_price": 64123.5,
    "high_24h": 65000,
    "low_24h": 63000.25,
    "total_volume": 28500000000,
    "price_change_percentage_24h": -1.2345,
    "market_cap": 1260000000000,
}

ETH_ROW = {
    "id": "ethereum",
    "symbol": "eth",
    "current_price": 3100.1,
    "high_24h": None,
    "low_24h": None,
    "total_volume": 12000000000,
    "price_change_percentage_24h": 2.5,
    "market_cap": 372000000000,
}


def _source(handler) -> CoinGeckoSource:
    client = CoinGeckoClient(transport=httpx.MockTransport(handler))
    return CoinGeckoSource(client)


def _fetch(source: CoinGeckoSource, assets=("bitcoin", "ethereum")):
    async def go():
        try:
            return await source.fetch_quotes(assets)
        finally:
            await source.close()

    return asyncio.run(go())


class TestCoinGeckoClient:
    def test_default_url(self):
        c = CoinGeckoClient()
        assert c.base_url == "https://api.coingecko.com/api/v3"
        assert c.timeout_s == 15.0

    def test_custom_url_strips_trailing_slash(self):
        c = CoinGeckoClient(base_url="https://proxy.local/api/")
        assert c.base_url == "https://proxy.local/api"

    def test_parse_quote(self):
        ts = datetime(2026, 1, 1, tzinfo=timezone.utc)
        q = CoinGeckoClient.parse_quote(BTC_ROW, ts=ts)
        assert q.asset == "bitcoin"
        assert q.ts == ts
        assert q.current_price == Decimal("64123.5")
        assert q.high_24h == Decimal("65000")
        assert q.low_24h == Decimal("63000.25")
        assert q.total_volume == Decimal("28500000000")
        assert q.price_change_percentage_24h == Decimal("-1.2345")
        assert q.market_cap == Decimal("1260000000000")

    def test_parse_quote_null_fields(self):
        q = CoinGeckoClient.parse_quote(ETH_ROW)
        assert q.high_24h is None
        assert q.low_24h is None
        assert q.current_price == Decimal("3100.1")

    def test_parse_quote_garbage_fields(self):
        q = CoinGeckoClient.parse_quote({"id": "bitcoin", "current_price": "n/a", "market_cap": True})
        assert q.current_price is None
        assert q.market_cap is None

    def test_request_parameters(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        _fetch(_source(handler))
        (request,) = seen
        assert request.url.path == "/api/v3/coins/markets"
        assert request.url.params["ids"] == "bitcoin,ethereum"
        assert request.url.params["vs_currency"] == "usd"
        assert request.url.params["sparkline"] == "false"
        assert request.url.params["price_change_percentage"] == "24h"


class TestCoinGeckoSource:
    def test_fetch_quotes(self):
        quotes = _fetch(_source(lambda r: httpx.Response(200, json=[BTC_ROW, ETH_ROW])))
        assert set(quotes) == {"bitcoin", "ethereum"}
        assert quotes["bitcoin"].current_price == Decimal("64123.5")
        assert quotes["ethereum"].ts == quotes["bitcoin"].ts

    def test_partial_response(self):
        quotes = _fetch(_source(lambda r: httpx.Response(200, json=[ETH_ROW])))
        assert list(quotes) == ["ethereum"]

    def test_ignores_unrequested_coins(self):
        extra = {"id": "dogecoin", "current_price": 0.1}
        quotes = _fetch(_source(lambda r: httpx.Response(200, json=[BTC_ROW, extra])))
        assert list(quotes) == ["bitcoin"]

    def test_http_error_is_source_unavailable(self):
        with pytest.raises(SourceUnavailable):
            _fetch(_source(lambda r: httpx.Response(429, json={"status": "rate limited"})))

    def test_transport_error_is_source_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SourceUnavailable):
            _fetch(_source(handler))

    def test_non_json_body_is_source_unavailable(self):
        with pytest.raises(SourceUnavailable):
            _fetch(_source(lambda r: httpx.Response(200, text="<html>oops</html>")))

    def test_unexpected_shape_is_source_unavailable(self):
        with pytest.raises(SourceUnavailable):
            _fetch(_source(lambda r: httpx.Response(200, json={"error": "bad ids"})))
