"""Stub price provider for offline/testing use."""

from decimal import Decimal
import random

from portfolio_local.domain.models import AssetType
from portfolio_local.domain.views import Quote


# Deterministic fake prices and daily change for common symbols
_STUB_PRICES: dict[str, tuple[Decimal, Decimal]] = {
    "AAPL": (Decimal("185.50"), Decimal("0.68")),
    "MSFT": (Decimal("378.25"), Decimal("0.38")),
    "NVDA": (Decimal("485.25"), Decimal("0.57")),
    "TSLA": (Decimal("248.75"), Decimal("-0.54")),
    "VTI": (Decimal("252.30"), Decimal("0.20")),
    "BINANCE:BTCUSDT": (Decimal("67250.00"), Decimal("1.85")),
    "BINANCE:ETHUSDT": (Decimal("3420.50"), Decimal("-1.12")),
    "gold": (Decimal("2345.60"), Decimal("0.31")),
    "silver": (Decimal("29.45"), Decimal("-0.42")),
}


class StubPriceProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; generates seeded random
    prices for anything else.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._rng = random.Random(seed)

    async def fetch_prices(
        self,
        asset_type: AssetType,
        symbols: list[str],
        currency: str = "USD",
    ) -> dict[str, Quote]:
        """Return stub quotes for requested symbols."""
        result: dict[str, Quote] = {}

        for symbol in symbols:
            if symbol in _STUB_PRICES:
                price, change_percent = _STUB_PRICES[symbol]
            else:
                price = Decimal(str(50 + self._rng.random() * 200)).quantize(Decimal("0.01"))
                change_percent = Decimal(str((self._rng.random() - 0.5) * 4)).quantize(Decimal("0.01"))

            result[symbol] = Quote(symbol=symbol, price=price, change_percent=change_percent)

        return result
