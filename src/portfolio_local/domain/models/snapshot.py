"""Snapshot domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from portfolio_local.domain.models.enums import AssetType


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable capture of portfolio totals at a point in time.

    timestamp is epoch milliseconds and orders the history.
    """

    date: datetime
    timestamp: int
    total_value: Decimal
    p1_total: Decimal
    p2_total: Decimal
    by_type: dict[AssetType, Decimal] = field(default_factory=dict)
    asset_count: int = 0

    def type_value(self, asset_type: AssetType) -> Decimal:
        return self.by_type.get(asset_type, Decimal("0"))
