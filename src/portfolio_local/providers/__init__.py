"""Price providers module."""

from portfolio_local.providers.price_provider import PriceProvider, HttpPriceProvider
from portfolio_local.providers.finnhub_provider import FinnhubPriceProvider
from portfolio_local.providers.metals_dev_provider import MetalsDevPriceProvider
from portfolio_local.providers.stub_provider import StubPriceProvider

__all__ = [
    "PriceProvider",
    "HttpPriceProvider",
    "FinnhubPriceProvider",
    "MetalsDevPriceProvider",
    "StubPriceProvider",
]
