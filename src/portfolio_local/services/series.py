"""Chart series derived from a filtered snapshot window.

Every value here is computed on read against the window it is given, so
the same snapshot can show a different change depending on where the
window starts.
"""

from decimal import Decimal
from typing import Optional, Union

from portfolio_local.domain.models import AssetType, RangeWindow, Snapshot
from portfolio_local.domain.views import ChartSeries, SeriesPoint
from portfolio_local.services.range_filter import WINDOW_LABELS, parse_window

MIN_SNAPSHOTS = 2

DELTA_SERIES = "change_from_previous"
RETURN_SERIES = "cumulative_return_percent"


def insufficient_data_message(
    subject: str,
    window: Union[RangeWindow, str],
    history_size: int,
) -> str:
    """Explain why a chart has nothing to show."""
    parsed = parse_window(window)
    if parsed in WINDOW_LABELS and history_size >= MIN_SNAPSHOTS:
        return f"No snapshots found for the {WINDOW_LABELS[parsed]}."
    return f"Save at least {MIN_SNAPSHOTS} snapshots to see {subject}."


def _insufficient(
    title: str,
    subject: str,
    window: Union[RangeWindow, str],
    history_size: int,
) -> ChartSeries:
    return ChartSeries(
        title=title,
        insufficient_data=True,
        message=insufficient_data_message(subject, window, history_size),
    )


def delta_series(
    snapshots: list[Snapshot],
    window: Union[RangeWindow, str] = RangeWindow.ALL,
    history_size: Optional[int] = None,
) -> ChartSeries:
    """
    Period-over-period change of total value.

    One point per snapshot after the first in the window, valued
    total[i] - total[i-1].
    """
    title = "Daily Gain / Loss"
    if len(snapshots) < MIN_SNAPSHOTS:
        size = len(snapshots) if history_size is None else history_size
        return _insufficient(title, "daily gain/loss", window, size)

    points = [
        SeriesPoint(
            timestamp=current.timestamp,
            date=current.date,
            value=current.total_value - previous.total_value,
        )
        for previous, current in zip(snapshots, snapshots[1:])
    ]
    return ChartSeries(title=title, series={DELTA_SERIES: points})


def cumulative_return_series(
    snapshots: list[Snapshot],
    window: Union[RangeWindow, str] = RangeWindow.ALL,
    history_size: Optional[int] = None,
) -> ChartSeries:
    """
    Percent return of each snapshot against the first one in the window.

    A non-positive base yields 0 for every point.
    """
    title = "Cumulative Return"
    if len(snapshots) < MIN_SNAPSHOTS:
        size = len(snapshots) if history_size is None else history_size
        return _insufficient(title, "cumulative return", window, size)

    base = snapshots[0].total_value
    points = [
        SeriesPoint(
            timestamp=s.timestamp,
            date=s.date,
            value=(s.total_value - base) / base * 100 if base > 0 else Decimal("0"),
        )
        for s in snapshots
    ]
    return ChartSeries(title=title, series={RETURN_SERIES: points})


def composition_series(
    snapshots: list[Snapshot],
    window: Union[RangeWindow, str] = RangeWindow.ALL,
    history_size: Optional[int] = None,
) -> ChartSeries:
    """Value of each asset type per snapshot, read straight from the snapshot."""
    title = "Portfolio Composition"
    if len(snapshots) < MIN_SNAPSHOTS:
        size = len(snapshots) if history_size is None else history_size
        return _insufficient(title, "composition over time", window, size)

    series = {
        asset_type.value: [
            SeriesPoint(timestamp=s.timestamp, date=s.date, value=s.type_value(asset_type))
            for s in snapshots
        ]
        for asset_type in AssetType
    }
    return ChartSeries(title=title, series=series)
