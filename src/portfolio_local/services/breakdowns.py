"""Summary breakdowns of current totals."""

from decimal import Decimal
from typing import Iterable

from portfolio_local.domain.models import Asset, AssetType, HouseholdSettings, PriceCache
from portfolio_local.domain.views import (
    AllocationItem,
    AllocationView,
    PersonComparison,
    SavingsVsInvested,
    ScatterPoint,
    Totals,
)
from portfolio_local.services.aggregator import percent_of

MARKET_EXPOSED = (AssetType.STOCK, AssetType.CRYPTO, AssetType.METAL)


def allocation_by_type(totals: Totals) -> AllocationView:
    """
    Value and share of combined total for each asset type.

    Shares are 0 when the combined total is 0.
    """
    items = [
        AllocationItem(
            asset_type=asset_type,
            value=totals.by_type[asset_type],
            percentage=percent_of(totals.by_type[asset_type], totals.combined),
        )
        for asset_type in AssetType
    ]
    return AllocationView(items=items, total_value=totals.combined)


def person_comparison(totals: Totals, settings: HouseholdSettings) -> PersonComparison:
    return PersonComparison(
        people=settings.people,
        p1_by_type=dict(totals.p1_by_type),
        p2_by_type=dict(totals.p2_by_type),
    )


def savings_vs_invested(totals: Totals) -> SavingsVsInvested:
    invested = sum((totals.by_type[t] for t in MARKET_EXPOSED), Decimal("0"))
    return SavingsVsInvested(invested=invested, savings=totals.by_type[AssetType.SAVINGS])


def performance_scatter(assets: Iterable[Asset], price_cache: PriceCache) -> list[ScatterPoint]:
    """Non-savings assets with a positive value and a known change percent."""
    points: list[ScatterPoint] = []
    for asset in assets:
        asset_type = asset.known_type
        if asset_type is None or asset_type == AssetType.SAVINGS:
            continue
        entry = price_cache.get(asset.price_key)
        if entry is None or entry.price <= 0 or entry.change_percent is None:
            continue
        value = asset.total_qty * entry.price
        if value > 0:
            points.append(
                ScatterPoint(
                    symbol=asset.symbol,
                    asset_type=asset_type,
                    change_percent=entry.change_percent,
                    value=value,
                )
            )
    return points
