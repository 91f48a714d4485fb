"""Price provider protocol and shared HTTP plumbing."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Protocol

import httpx

from portfolio_local.core.exceptions import PriceFetchError
from portfolio_local.domain.models import AssetType
from portfolio_local.domain.views import Quote

logger = logging.getLogger(__name__)

PLACEHOLDER_KEY = "PASTE_KEY_HERE"


def to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce a JSON number to Decimal; None for missing, non-numeric or non-finite."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        return None
    return result if result.is_finite() else None


class PriceProvider(Protocol):
    """
    Protocol for price providers.

    One request per instrument. A symbol that cannot be priced is left out
    of the result; it never fails the whole batch.
    """

    async def fetch_prices(
        self,
        asset_type: AssetType,
        symbols: list[str],
        currency: str = "USD",
    ) -> dict[str, Quote]:
        """Return symbol -> Quote for every symbol that could be priced."""
        ...


class HttpPriceProvider:
    """
    Base for API-key authenticated JSON price APIs.

    Symbols are requested one after another on a shared AsyncClient.
    """

    name = "http"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key) and self._api_key != PLACEHOLDER_KEY

    async def fetch_prices(
        self,
        asset_type: AssetType,
        symbols: list[str],
        currency: str = "USD",
    ) -> dict[str, Quote]:
        if not symbols:
            return {}
        if not self.is_configured:
            logger.warning("%s API key not configured; skipping %d symbols", self.name, len(symbols))
            return {}

        client = self._client or httpx.AsyncClient(timeout=self._timeout)
        prices: dict[str, Quote] = {}
        try:
            for symbol in symbols:
                try:
                    prices[symbol] = await self._fetch_one(client, symbol, currency)
                except PriceFetchError as e:
                    logger.warning(e.message)
        finally:
            if self._client is None:
                await client.aclose()
        return prices

    async def _fetch_one(self, client: httpx.AsyncClient, symbol: str, currency: str) -> Quote:
        try:
            response = await client.get(self._url(), params=self._params(symbol, currency))
        except httpx.HTTPError as e:
            raise PriceFetchError(symbol, f"{self.name} request failed: {e}") from e

        if response.status_code != 200:
            raise PriceFetchError(symbol, f"{self.name} returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise PriceFetchError(symbol, f"{self.name} returned invalid JSON") from e
        if not isinstance(payload, dict):
            raise PriceFetchError(symbol, f"{self.name} returned unexpected payload")

        quote = self._parse(symbol, payload)
        if quote is None:
            raise PriceFetchError(symbol, f"no usable price in {self.name} response")
        return quote

    def _url(self) -> str:
        raise NotImplementedError

    def _params(self, symbol: str, currency: str) -> dict[str, str]:
        raise NotImplementedError

    def _parse(self, symbol: str, payload: dict) -> Optional[Quote]:
        raise NotImplementedError
