"""Time-window filtering of snapshot history."""

from datetime import datetime, timedelta
from typing import Optional, Union

from portfolio_local.core.timezone import start_of_year, to_epoch_ms
from portfolio_local.domain.models import RangeWindow, Snapshot

WINDOW_DURATIONS: dict[RangeWindow, timedelta] = {
    RangeWindow.LAST_DAY: timedelta(days=1),
    RangeWindow.LAST_WEEK: timedelta(days=7),
    RangeWindow.LAST_MONTH: timedelta(days=30),
}

WINDOW_LABELS: dict[RangeWindow, str] = {
    RangeWindow.LAST_DAY: "last 24 hours",
    RangeWindow.LAST_WEEK: "last 7 days",
    RangeWindow.LAST_MONTH: "last 30 days",
    RangeWindow.YEAR_TO_DATE: "year to date",
}


def parse_window(window: Union[RangeWindow, str, None]) -> Optional[RangeWindow]:
    """Return the RangeWindow for a value, or None when it is unrecognised."""
    if isinstance(window, RangeWindow):
        return window
    try:
        return RangeWindow(window)
    except ValueError:
        return None


def window_start(window: Union[RangeWindow, str], now: datetime) -> Optional[int]:
    """Inclusive lower bound in epoch ms, or None when nothing is filtered."""
    parsed = parse_window(window)
    if parsed in WINDOW_DURATIONS:
        return to_epoch_ms(now - WINDOW_DURATIONS[parsed])
    if parsed == RangeWindow.YEAR_TO_DATE:
        return to_epoch_ms(start_of_year(now))
    return None


def filter_by_range(
    snapshots: list[Snapshot],
    window: Union[RangeWindow, str],
    now: datetime,
) -> list[Snapshot]:
    """
    Keep snapshots with timestamp >= the window's start.

    "all" and unrecognised windows pass the input through unchanged.
    Order is preserved; nothing is sorted.
    """
    lower_bound = window_start(window, now)
    if lower_bound is None:
        return snapshots
    return [s for s in snapshots if s.timestamp >= lower_bound]
