"""
Unit tests for derived chart series.

Tests cover:
- Delta (change from previous) series
- Cumulative return series
- Composition series
- Insufficient data messages
"""

from datetime import timedelta
from decimal import Decimal

from portfolio_local.domain.models import AssetType
from portfolio_local.services.series import (
    DELTA_SERIES,
    RETURN_SERIES,
    composition_series,
    cumulative_return_series,
    delta_series,
    insufficient_data_message,
)

from tests.conftest import make_snapshot


def _history(fixed_now, *totals: str):
    return [make_snapshot(fixed_now + timedelta(days=i), t) for i, t in enumerate(totals)]


class TestDeltaSeries:
    """Tests for delta_series."""

    def test_change_from_previous(self, fixed_now):
        """
        GIVEN totals 100, 120, 90
        WHEN the delta series is built
        THEN points are +20 and -30, one per snapshot after the first
        """
        chart = delta_series(_history(fixed_now, "100", "120", "90"))

        assert not chart.insufficient_data
        assert [p.value for p in chart.series[DELTA_SERIES]] == [Decimal("20"), Decimal("-30")]

    def test_first_point_depends_on_window_start(self, fixed_now):
        """
        GIVEN the same snapshot in two different windows
        WHEN deltas are computed
        THEN its change is relative to whatever precedes it in the window
        """
        history = _history(fixed_now, "100", "120", "150")

        full = delta_series(history)
        trimmed = delta_series(history[1:])

        assert full.series[DELTA_SERIES][-1].value == Decimal("30")
        assert len(trimmed.series[DELTA_SERIES]) == 1

    def test_single_snapshot_is_insufficient(self, fixed_now):
        chart = delta_series(_history(fixed_now, "100"))

        assert chart.insufficient_data
        assert chart.series == {}
        assert "at least 2 snapshots" in chart.message


class TestCumulativeReturnSeries:
    """Tests for cumulative_return_series."""

    def test_first_point_is_zero(self, fixed_now):
        chart = cumulative_return_series(_history(fixed_now, "200", "250", "150"))

        values = [p.value for p in chart.series[RETURN_SERIES]]
        assert values[0] == 0
        assert values[1] == Decimal("25")
        assert values[2] == Decimal("-25")

    def test_non_positive_base_gives_zero(self, fixed_now):
        chart = cumulative_return_series(_history(fixed_now, "0", "100"))

        assert all(p.value == 0 for p in chart.series[RETURN_SERIES])

    def test_empty_is_insufficient(self):
        chart = cumulative_return_series([])

        assert chart.insufficient_data


class TestCompositionSeries:
    """Tests for composition_series."""

    def test_one_series_per_type(self, fixed_now):
        history = [
            make_snapshot(fixed_now, "150", {AssetType.STOCK: "100", AssetType.SAVINGS: "50"}),
            make_snapshot(fixed_now + timedelta(days=1), "160", {AssetType.STOCK: "110"}),
        ]

        chart = composition_series(history)

        assert set(chart.series) == {t.value for t in AssetType}
        assert [p.value for p in chart.series["stock"]] == [Decimal("100"), Decimal("110")]
        assert [p.value for p in chart.series["savings"]] == [Decimal("50"), Decimal("0")]
        assert [p.value for p in chart.series["metal"]] == [Decimal("0"), Decimal("0")]


class TestInsufficientDataMessage:
    """Tests for insufficient_data_message."""

    def test_window_message_when_history_exists(self):
        """
        GIVEN a 7d window and a full history of 5 snapshots
        WHEN the message is built
        THEN it names the window
        """
        message = insufficient_data_message("daily gain/loss", "7d", history_size=5)

        assert message == "No snapshots found for the last 7 days."

    def test_save_more_message_when_history_short(self):
        message = insufficient_data_message("daily gain/loss", "7d", history_size=1)

        assert message == "Save at least 2 snapshots to see daily gain/loss."

    def test_save_more_message_for_all(self):
        message = insufficient_data_message("cumulative return", "all", history_size=10)

        assert message.startswith("Save at least 2 snapshots")

    def test_ytd_label(self):
        assert "year to date" in insufficient_data_message("x", "ytd", history_size=3)
