"""Domain layer - pure business models with no external dependencies."""

from portfolio_local.domain.models import (
    AssetType,
    RangeWindow,
    SortColumn,
    PriceDirection,
    PriceKey,
    PriceEntry,
    PriceCache,
    Asset,
    Holding,
    Snapshot,
    HouseholdSettings,
    PortfolioState,
)

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
]
