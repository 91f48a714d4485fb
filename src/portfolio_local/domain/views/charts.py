"""View models for chart series and performer lists."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from portfolio_local.domain.models import AssetType


@dataclass
class SeriesPoint:
    """One labelled point of a time series."""

    timestamp: int
    date: datetime
    value: Decimal


@dataclass
class ChartSeries:
    """
    Named series ready for a chart.

    When insufficient_data is set the series are empty and message explains
    what is missing.
    """

    title: str
    series: dict[str, list[SeriesPoint]] = field(default_factory=dict)
    insufficient_data: bool = False
    message: Optional[str] = None


@dataclass
class Performer:
    """Asset ranked by today's price change."""

    name: str
    symbol: str
    asset_type: str
    current_price: Decimal
    change_percent: Decimal
    quantity: Decimal
    value: Decimal


@dataclass
class PerformersView:
    """Top and bottom performers; the two lists may overlap."""

    top: list[Performer] = field(default_factory=list)
    bottom: list[Performer] = field(default_factory=list)


@dataclass
class ScatterPoint:
    """Asset plotted as (change percent, total value)."""

    symbol: str
    asset_type: AssetType
    change_percent: Decimal
    value: Decimal
