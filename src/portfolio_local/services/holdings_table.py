"""Filtering, searching and sorting of the holdings table."""

from typing import Any, Callable, Optional, Union

from portfolio_local.domain.models import (
    Asset,
    AssetType,
    PortfolioState,
    PriceCache,
    PriceDirection,
    SortColumn,
)
from portfolio_local.domain.views import HoldingRow, PriceChange, SortState
from portfolio_local.services.aggregator import compute_totals, percent_of, value_asset

ALL_TYPES = "all"


def price_change(asset: Asset, price_cache: PriceCache) -> Optional[PriceChange]:
    """
    Move of the current price against the previous refresh.

    None when there is no previous price, it is zero, or nothing moved.
    """
    entry = price_cache.get(asset.price_key)
    if entry is None or not entry.previous_price or entry.previous_price == entry.price:
        return None
    change = entry.price - entry.previous_price
    return PriceChange(
        direction=PriceDirection.UP if change > 0 else PriceDirection.DOWN,
        percent=change / entry.previous_price * 100,
    )


def matches(asset: Asset, type_filter: Union[AssetType, str], search: str) -> bool:
    """Type filter plus case-insensitive search on name or symbol."""
    if type_filter != ALL_TYPES and asset.type_value != type_filter:
        return False
    if search:
        needle = search.lower()
        return needle in asset.name.lower() or needle in asset.symbol.lower()
    return True


def _sort_key(column: SortColumn, price_cache: PriceCache) -> Callable[[Asset], Any]:
    if column == SortColumn.NAME:
        return lambda a: a.name.lower()
    if column == SortColumn.TYPE:
        return lambda a: a.type_value
    if column == SortColumn.PRICE:
        return lambda a: price_cache.price_for(a.price_key)
    return lambda a: value_asset(a, price_cache).combined_value


def toggle_sort(current: SortState, column: Union[SortColumn, str]) -> SortState:
    """Clicking the active column flips direction; a new column starts ascending."""
    column = SortColumn(column).value
    if current.column == column:
        return SortState(column=column, ascending=not current.ascending)
    return SortState(column=column, ascending=True)


def holdings_rows(
    state: PortfolioState,
    type_filter: Union[AssetType, str] = ALL_TYPES,
    search: str = "",
    sort: Optional[SortState] = None,
) -> list[HoldingRow]:
    """
    Build table rows for the assets matching the filter and search.

    Without a sort column, rows keep insertion order. Shares are taken
    against the combined total of all assets, not just the visible ones.
    """
    if isinstance(type_filter, AssetType):
        type_filter = type_filter.value

    assets = [a for a in state.assets if matches(a, type_filter, search)]

    if sort is not None and sort.column:
        assets.sort(
            key=_sort_key(SortColumn(sort.column), state.price_cache),
            reverse=not sort.ascending,
        )

    total_value = compute_totals(state.assets, state.price_cache).combined
    rows: list[HoldingRow] = []
    for asset in assets:
        valuation = value_asset(asset, state.price_cache)
        rows.append(
            HoldingRow(
                asset=asset,
                valuation=valuation,
                price_change=price_change(asset, state.price_cache) if valuation.has_price else None,
                share_percent=percent_of(valuation.combined_value, total_value),
            )
        )
    return rows

