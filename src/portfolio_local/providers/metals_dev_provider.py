"""metals.dev spot price provider."""

from decimal import Decimal
from typing import Optional

from portfolio_local.domain.views import Quote
from portfolio_local.providers.price_provider import HttpPriceProvider, to_decimal


class MetalsDevPriceProvider(HttpPriceProvider):
    """Spot prices from metals.dev, quoted in the household's base currency."""

    name = "metals.dev"

    def _url(self) -> str:
        return f"{self._base_url}/metal/spot"

    def _params(self, symbol: str, currency: str) -> dict[str, str]:
        return {"api_key": self._api_key, "metal": symbol, "currency": currency}

    def _parse(self, symbol: str, payload: dict) -> Optional[Quote]:
        price = extract_spot_price(payload)
        if price is None or price <= 0:
            return None
        return Quote(symbol=symbol, price=price)


def extract_spot_price(payload: dict) -> Optional[Decimal]:
    """
    Pull the spot price out of a metals.dev response.

    The documented shape is {"rate": {"price": ...}}; older responses carry a
    bare numeric rate, or price/spot/value at the top level.
    """
    rate = payload.get("rate")
    if isinstance(rate, dict) and rate.get("price") is not None:
        return to_decimal(rate["price"])
    if isinstance(rate, (int, float)) and not isinstance(rate, bool):
        return to_decimal(rate)
    for field_name in ("price", "spot", "value"):
        if payload.get(field_name) is not None:
            return to_decimal(payload[field_name])
    return None
