"""View models for portfolio totals, table rows and price refreshes."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from portfolio_local.domain.models import Asset, AssetType, PriceDirection


def _zero_by_type() -> dict[AssetType, Decimal]:
    return {asset_type: Decimal("0") for asset_type in AssetType}


@dataclass
class Totals:
    """
    Aggregate value by person and by asset type.

    Never persisted; recomputed from assets and prices on demand.
    """

    p1: Decimal = field(default_factory=lambda: Decimal("0"))
    p2: Decimal = field(default_factory=lambda: Decimal("0"))
    combined: Decimal = field(default_factory=lambda: Decimal("0"))
    by_type: dict[AssetType, Decimal] = field(default_factory=_zero_by_type)
    p1_by_type: dict[AssetType, Decimal] = field(default_factory=_zero_by_type)
    p2_by_type: dict[AssetType, Decimal] = field(default_factory=_zero_by_type)


@dataclass
class AssetValuation:
    """Value of one asset at the cached price."""

    price: Decimal
    has_price: bool
    p1_qty: Decimal
    p1_value: Decimal
    p2_qty: Decimal
    p2_value: Decimal

    @property
    def combined_value(self) -> Decimal:
        return self.p1_value + self.p2_value


@dataclass
class PriceChange:
    """Move of the current price against the previous refresh."""

    direction: PriceDirection
    percent: Decimal


@dataclass
class HoldingRow:
    """Single row of the holdings table."""

    asset: Asset
    valuation: AssetValuation
    price_change: Optional[PriceChange] = None
    share_percent: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class SortState:
    """Active column and direction of the holdings table."""

    column: Optional[str] = None
    ascending: bool = True


@dataclass
class AllocationItem:
    """Single bucket in the by-type allocation breakdown."""

    asset_type: AssetType
    value: Decimal
    percentage: Decimal


@dataclass
class AllocationView:
    """Portfolio allocation across the four asset types."""

    items: list[AllocationItem] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class PersonComparison:
    """Per-type holdings of each named person."""

    people: tuple[str, str]
    p1_by_type: dict[AssetType, Decimal]
    p2_by_type: dict[AssetType, Decimal]


@dataclass
class SavingsVsInvested:
    """Cash savings against market-exposed holdings."""

    invested: Decimal
    savings: Decimal

    @property
    def total(self) -> Decimal:
        return self.invested + self.savings


@dataclass
class Quote:
    """Price returned by a provider for one symbol."""

    symbol: str
    price: Decimal
    change_percent: Optional[Decimal] = None


@dataclass
class RefreshSummary:
    """Outcome of a price refresh, counted per asset."""

    updated: int = 0
    errors: int = 0
    total: int = 0
    finished_at: Optional[datetime] = None
    failed_symbols: list[str] = field(default_factory=list)


@dataclass
class ImportSummary:
    """Summary of a backup import."""

    asset_count: int = 0
    snapshot_count: int = 0
    price_count: int = 0
