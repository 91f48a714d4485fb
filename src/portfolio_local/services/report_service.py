"""Report service: read-only views of the current portfolio state."""

from datetime import datetime
from typing import Callable, Optional, Union

from portfolio_local.core.timezone import now_local
from portfolio_local.domain.models import AssetType, PortfolioState, RangeWindow, Snapshot
from portfolio_local.domain.views import (
    AllocationView,
    ChartSeries,
    HoldingRow,
    PerformersView,
    PersonComparison,
    SavingsVsInvested,
    ScatterPoint,
    SortState,
    Totals,
)
from portfolio_local.services.aggregator import compute_totals
from portfolio_local.services.breakdowns import (
    allocation_by_type,
    performance_scatter,
    person_comparison,
    savings_vs_invested,
)
from portfolio_local.services.holdings_table import ALL_TYPES, holdings_rows
from portfolio_local.services.performers import DEFAULT_PERFORMER_COUNT, performers_view
from portfolio_local.services.range_filter import filter_by_range
from portfolio_local.services.series import (
    composition_series,
    cumulative_return_series,
    delta_series,
)


class ReportService:
    """
    Service for portfolio reporting.

    Every call recomputes from the state it is handed, so results always
    reflect the latest prices and holdings. Nothing here mutates state.
    """

    def __init__(
        self,
        state_provider: Callable[[], PortfolioState],
        clock: Callable[[], datetime] = now_local,
        performer_count: int = DEFAULT_PERFORMER_COUNT,
    ):
        self._state = state_provider
        self._clock = clock
        self._performer_count = performer_count

    def totals(self) -> Totals:
        state = self._state()
        return compute_totals(state.assets, state.price_cache)

    def allocation(self) -> AllocationView:
        return allocation_by_type(self.totals())

    def person_comparison(self) -> PersonComparison:
        return person_comparison(self.totals(), self._state().settings)

    def savings_vs_invested(self) -> SavingsVsInvested:
        return savings_vs_invested(self.totals())

    def holdings(
        self,
        type_filter: Union[AssetType, str] = ALL_TYPES,
        search: str = "",
        sort: Optional[SortState] = None,
    ) -> list[HoldingRow]:
        return holdings_rows(self._state(), type_filter=type_filter, search=search, sort=sort)

    def performers(self) -> PerformersView:
        state = self._state()
        return performers_view(state.assets, state.price_cache, self._performer_count)

    def scatter(self) -> list[ScatterPoint]:
        state = self._state()
        return performance_scatter(state.assets, state.price_cache)

    def snapshots_in_window(self, window: Union[RangeWindow, str] = RangeWindow.ALL) -> list[Snapshot]:
        return filter_by_range(self._state().snapshots, window, self._clock())

    def daily_change_chart(self, window: Union[RangeWindow, str] = RangeWindow.ALL) -> ChartSeries:
        """Period-over-period change of total value within window."""
        return delta_series(
            self.snapshots_in_window(window),
            window=window,
            history_size=len(self._state().snapshots),
        )

    def cumulative_return_chart(self, window: Union[RangeWindow, str] = RangeWindow.ALL) -> ChartSeries:
        """Return against the first snapshot of window."""
        return cumulative_return_series(
            self.snapshots_in_window(window),
            window=window,
            history_size=len(self._state().snapshots),
        )

    def composition_chart(self, window: Union[RangeWindow, str] = RangeWindow.ALL) -> ChartSeries:
        return composition_series(
            self.snapshots_in_window(window),
            window=window,
            history_size=len(self._state().snapshots),
        )
