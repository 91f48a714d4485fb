"""Ranking of assets by today's price change."""

from typing import Iterable

from portfolio_local.domain.models import Asset, PriceCache
from portfolio_local.domain.views import Performer, PerformersView

DEFAULT_PERFORMER_COUNT = 5


def rank_performers(assets: Iterable[Asset], price_cache: PriceCache) -> list[Performer]:
    """
    Sort priced assets by change percent, highest first.

    Assets without a current price or without a change percent are left out.
    """
    performers: list[Performer] = []
    for asset in assets:
        entry = price_cache.get(asset.price_key)
        if entry is None or not entry.price or entry.change_percent is None:
            continue
        quantity = asset.total_qty
        performers.append(
            Performer(
                name=asset.name,
                symbol=asset.symbol,
                asset_type=asset.type_value,
                current_price=entry.price,
                change_percent=entry.change_percent,
                quantity=quantity,
                value=quantity * entry.price,
            )
        )

    performers.sort(key=lambda p: p.change_percent, reverse=True)
    return performers


def top_performers(ranked: list[Performer], count: int = DEFAULT_PERFORMER_COUNT) -> list[Performer]:
    return ranked[:count]


def bottom_performers(ranked: list[Performer], count: int = DEFAULT_PERFORMER_COUNT) -> list[Performer]:
    """Worst `count` performers, worst first."""
    if count <= 0:
        return []
    return list(reversed(ranked[-count:]))


def performers_view(
    assets: Iterable[Asset],
    price_cache: PriceCache,
    count: int = DEFAULT_PERFORMER_COUNT,
) -> PerformersView:
    """Top and bottom lists from one ranking. Short lists overlap."""
    ranked = rank_performers(assets, price_cache)
    return PerformersView(
        top=top_performers(ranked, count),
        bottom=bottom_performers(ranked, count),
    )
