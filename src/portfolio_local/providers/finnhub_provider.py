"""Finnhub quote API provider for stocks and crypto."""

from typing import Optional

from portfolio_local.domain.views import Quote
from portfolio_local.providers.price_provider import HttpPriceProvider, to_decimal


class FinnhubPriceProvider(HttpPriceProvider):
    """
    Prices from Finnhub's /quote endpoint.

    Crypto uses exchange-qualified symbols such as BINANCE:BTCUSDT.
    """

    name = "Finnhub"

    def _url(self) -> str:
        return f"{self._base_url}/quote"

    def _params(self, symbol: str, currency: str) -> dict[str, str]:
        return {"symbol": symbol, "token": self._api_key}

    def _parse(self, symbol: str, payload: dict) -> Optional[Quote]:
        # c = current price, dp = percent change since previous close
        price = to_decimal(payload.get("c"))
        if price is None or price <= 0:
            return None
        return Quote(symbol=symbol, price=price, change_percent=to_decimal(payload.get("dp")))

