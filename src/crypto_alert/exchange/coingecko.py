"""CoinGecko client — REST market snapshots for the tracked coins."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx
import structlog

from crypto_alert.errors import SourceUnavailable
from crypto_alert.models import MarketQuote

log = structlog.get_logger("coingecko")

# /coins/markets fields copied onto MarketQuote under the same name
_QUOTE_FIELDS = (
    "current_price",
    "high_24h",
    "low_24h",
    "total_volume",
    "price_change_percentage_24h",
    "market_cap",
)


class CoinGeckoClient:
    """Async client for CoinGecko's public REST API."""

    def __init__(
        self,
        base_url: str = "https://api.coingecko.com/api/v3",
        timeout_s: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def _get_http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)
        return self._http

    async def close(self) -> None:
        if self._http and not self._http.is_closed:
            await self._http.aclose()

    async def get_markets(self, ids: Iterable[str], vs_currency: str = "usd") -> list[dict]:
        """Fetch market rows for the given coin ids.

        Returns the raw list of coin dicts with keys id, current_price,
        high_24h, low_24h, total_volume, price_change_percentage_24h,
        market_cap, ...
        """
        http = await self._get_http()
        resp = await http.get(
            f"{self.base_url}/coins/markets",
            params={
                "vs_currency": vs_currency,
                "ids": ",".join(ids),
                "order": "market_cap_desc",
                "sparkline": "false",
                "price_change_percentage": "24h",
            },
        )
        resp.raise_for_status()
        body = resp.json()
        if not isinstance(body, list):
            raise ValueError(f"unexpected /coins/markets payload: {type(body).__name__}")
        return body

    @staticmethod
    def parse_quote(raw: dict[str, Any], ts: datetime | None = None) -> MarketQuote:
        """Convert one /coins/markets row into a MarketQuote.

        Null or non-numeric fields become None rather than failing the row.
        """
        values = {name: _to_decimal(raw.get(name)) for name in _QUOTE_FIELDS}
        return MarketQuote(
            asset=raw["id"],
            ts=ts or datetime.now(timezone.utc),
            **values,
        )


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        return None
    return result if result.is_finite() else None


class CoinGeckoSource:
    """Price source collaborator: one call per polling cycle.

    Any transport, HTTP or payload error surfaces as SourceUnavailable.
    Coins missing from the response are simply absent from the result.
    """

    def __init__(self, client: CoinGeckoClient, vs_currency: str = "usd") -> None:
        self.client = client
        self.vs_currency = vs_currency

    async def fetch_quotes(self, assets: Iterable[str]) -> dict[str, MarketQuote]:
        wanted = list(assets)
        try:
            rows = await self.client.get_markets(wanted, vs_currency=self.vs_currency)
        except (httpx.HTTPError, ValueError) as exc:
            raise SourceUnavailable(f"coingecko fetch failed: {exc}") from exc

        ts = datetime.now(timezone.utc)
        quotes: dict[str, MarketQuote] = {}
        for raw in rows:
            if not isinstance(raw, dict) or raw.get("id") not in wanted:
                continue
            quotes[raw["id"]] = self.client.parse_quote(raw, ts=ts)

        missing = [a for a in wanted if a not in quotes]
        if missing:
            log.warning("quotes_missing", assets=missing)
        return quotes

    async def close(self) -> None:
        await self.client.close()
