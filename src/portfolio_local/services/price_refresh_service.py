"""Price refresh: fetch quotes for every held instrument and update the cache."""

import asyncio
import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from portfolio_local.core.exceptions import RefreshInProgressError
from portfolio_local.core.timezone import now_local
from portfolio_local.domain.models import AssetType, PortfolioState, PriceEntry, PriceKey
from portfolio_local.domain.views import Quote, RefreshSummary
from portfolio_local.providers.price_provider import PriceProvider

logger = logging.getLogger(__name__)

# Fetched concurrently with each other; symbols within a type go one by one
FETCHED_TYPES = (AssetType.STOCK, AssetType.CRYPTO, AssetType.METAL)

SAVINGS_PRICE = Decimal("1")


class PriceRefreshService:
    """
    Service for refreshing the price cache from the configured providers.

    Only one refresh may run at a time. Results are applied to whatever
    assets exist once the fetch completes, so an asset deleted mid-refresh
    never gets its cache entry written back.
    """

    def __init__(
        self,
        providers: dict[AssetType, PriceProvider],
        clock: Callable[[], datetime] = now_local,
    ):
        self._providers = providers
        self._clock = clock
        self._in_progress = False

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    async def refresh(self, state: PortfolioState) -> RefreshSummary:
        """
        Refresh prices for all assets in state.

        Raises RefreshInProgressError if a refresh is already running.
        """
        if self._in_progress:
            raise RefreshInProgressError()

        self._in_progress = True
        try:
            return await self._refresh(state)
        finally:
            self._in_progress = False

    async def _refresh(self, state: PortfolioState) -> RefreshSummary:
        currency = state.settings.base_currency
        requested = {
            asset_type: _unique_symbols(state, asset_type) for asset_type in FETCHED_TYPES
        }
        logger.info(
            "Refreshing prices: %s",
            ", ".join(f"{t.value}={len(s)}" for t, s in requested.items()),
        )

        results = await asyncio.gather(
            *(self._fetch(asset_type, symbols, currency) for asset_type, symbols in requested.items())
        )
        fetched = dict(zip(requested, results))

        summary = RefreshSummary(total=len(state.assets))
        updated_keys: set[PriceKey] = set()

        for asset in state.assets:
            key = asset.price_key
            quote = _quote_for(asset.known_type, asset.symbol, fetched)
            if quote is None:
                summary.errors += 1
                summary.failed_symbols.append(str(key))
                logger.debug("No price for %s", key)
                continue

            if key not in updated_keys:
                _apply_quote(state, key, quote)
                updated_keys.add(key)
            summary.updated += 1

        state.price_cache.last_updated = self._clock()
        summary.finished_at = state.price_cache.last_updated
        logger.info("Priced %d/%d assets, errors: %d", summary.updated, summary.total, summary.errors)
        return summary

    async def _fetch(
        self,
        asset_type: AssetType,
        symbols: list[str],
        currency: str,
    ) -> dict[str, Quote]:
        provider = self._providers.get(asset_type)
        if not symbols:
            return {}
        if provider is None:
            logger.warning("No price provider configured for %s", asset_type.value)
            return {}
        try:
            return await provider.fetch_prices(asset_type, symbols, currency)
        except Exception:
            # A broken provider leaves its asset class unpriced for this round
            logger.exception("Price provider for %s failed", asset_type.value)
            return {}


def _unique_symbols(state: PortfolioState, asset_type: AssetType) -> list[str]:
    seen: dict[str, None] = {}
    for asset in state.assets:
        if asset.known_type == asset_type:
            seen.setdefault(asset.symbol, None)
    return list(seen)


def _quote_for(
    asset_type: Optional[AssetType],
    symbol: str,
    fetched: dict[AssetType, dict[str, Quote]],
) -> Optional[Quote]:
    if asset_type == AssetType.SAVINGS:
        return Quote(symbol=symbol, price=SAVINGS_PRICE)
    if asset_type is None:
        return None
    return fetched.get(asset_type, {}).get(symbol)


def _apply_quote(state: PortfolioState, key: PriceKey, quote: Quote) -> None:
    """Overwrite the cache entry, keeping the old price as previous_price."""
    existing = state.price_cache.get(key)
    previous = existing.price if existing else None

    change_percent = quote.change_percent
    if change_percent is None and previous:
        change_percent = (quote.price - previous) / previous * 100

    state.price_cache.entries[key] = PriceEntry(
        price=quote.price,
        previous_price=previous,
        change_percent=change_percent,
    )
