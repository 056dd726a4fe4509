"""Price source clients."""

from crypto_alert.exchange.coingecko import CoinGeckoClient, CoinGeckoSource

__all__ = ["CoinGeckoClient", "CoinGeckoSource"]
