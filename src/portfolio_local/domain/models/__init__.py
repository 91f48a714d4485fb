"""Domain models package."""

from portfolio_local.domain.models.enums import AssetType, RangeWindow, SortColumn, PriceDirection
from portfolio_local.domain.models.price_cache import PriceKey, PriceEntry, PriceCache
from portfolio_local.domain.models.asset import Asset, Holding
from portfolio_local.domain.models.snapshot import Snapshot
from portfolio_local.domain.models.state import HouseholdSettings, PortfolioState, DEFAULT_PEOPLE

__all__ = [
    "AssetType",
    "RangeWindow",
    "SortColumn",
    "PriceDirection",
    "PriceKey",
    "PriceEntry",
    "PriceCache",
    "Asset",
    "Holding",
    "Snapshot",
    "HouseholdSettings",
    "PortfolioState",
    "DEFAULT_PEOPLE",
]
