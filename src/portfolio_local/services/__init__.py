"""Service layer - business logic orchestration."""

from portfolio_local.services.aggregator import compute_totals, value_asset
from portfolio_local.services.snapshot_history import (
    append_snapshot,
    build_snapshot,
    clear_snapshots,
    remove_snapshot,
)
from portfolio_local.services.range_filter import filter_by_range
from portfolio_local.services.series import (
    delta_series,
    cumulative_return_series,
    composition_series,
)
from portfolio_local.services.performers import (
    rank_performers,
    top_performers,
    bottom_performers,
)
from portfolio_local.services.price_refresh_service import PriceRefreshService
from portfolio_local.services.portfolio_service import PortfolioService, AssetInput
from portfolio_local.services.report_service import ReportService

__all__ = [
    "compute_totals",
    "value_asset",
    "append_snapshot",
    "build_snapshot",
    "clear_snapshots",
    "remove_snapshot",
    "filter_by_range",
    "delta_series",
    "cumulative_return_series",
    "composition_series",
    "rank_performers",
    "top_performers",
    "bottom_performers",
    "PriceRefreshService",
    "PortfolioService",
    "AssetInput",
    "ReportService",
]
