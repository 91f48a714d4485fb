"""Aggregation of holdings and prices into portfolio totals."""

from decimal import Decimal
from typing import Iterable

from portfolio_local.domain.models import Asset, PriceCache
from portfolio_local.domain.views import AssetValuation, Totals


def value_asset(asset: Asset, price_cache: PriceCache) -> AssetValuation:
    """
    Value one asset at its cached price.

    A missing price values the asset at 0.
    """
    key = asset.price_key
    price = price_cache.price_for(key)
    return AssetValuation(
        price=price,
        has_price=price_cache.has_price(key),
        p1_qty=asset.p1.qty,
        p1_value=asset.p1.qty * price,
        p2_qty=asset.p2.qty,
        p2_value=asset.p2.qty * price,
    )


def compute_totals(assets: Iterable[Asset], price_cache: PriceCache) -> Totals:
    """
    Compute totals by person, by asset type, and combined.

    Assets with an unrecognised type count toward person and combined totals
    but toward no by-type bucket. No rounding is applied.
    """
    totals = Totals()

    for asset in assets:
        valuation = value_asset(asset, price_cache)
        totals.p1 += valuation.p1_value
        totals.p2 += valuation.p2_value

        asset_type = asset.known_type
        if asset_type is not None:
            totals.by_type[asset_type] += valuation.combined_value
            totals.p1_by_type[asset_type] += valuation.p1_value
            totals.p2_by_type[asset_type] += valuation.p2_value

    totals.combined = totals.p1 + totals.p2
    return totals


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """part / whole * 100, or 0 when whole is not positive."""
    if whole <= 0:
        return Decimal("0")
    return part / whole * 100
