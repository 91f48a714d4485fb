"""View models for service outputs."""

from portfolio_local.domain.views.portfolio import (
    Totals,
    AssetValuation,
    PriceChange,
    HoldingRow,
    SortState,
    AllocationItem,
    AllocationView,
    PersonComparison,
    SavingsVsInvested,
    Quote,
    RefreshSummary,
    ImportSummary,
)
from portfolio_local.domain.views.charts import (
    SeriesPoint,
    ChartSeries,
    Performer,
    PerformersView,
    ScatterPoint,
)

__all__ = [
    "Totals",
    "AssetValuation",
    "PriceChange",
    "HoldingRow",
    "SortState",
    "AllocationItem",
    "AllocationView",
    "PersonComparison",
    "SavingsVsInvested",
    "Quote",
    "RefreshSummary",
    "ImportSummary",
    "SeriesPoint",
    "ChartSeries",
    "Performer",
    "PerformersView",
    "ScatterPoint",
]
