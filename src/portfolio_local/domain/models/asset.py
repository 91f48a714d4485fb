"""Asset and holding domain models."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Union

from portfolio_local.domain.models.enums import AssetType
from portfolio_local.domain.models.price_cache import PriceKey


@dataclass
class Holding:
    """One person's position in an asset."""

    qty: Decimal = field(default_factory=lambda: Decimal("0"))
    avg_cost: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class Asset:
    """
    A trackable holding split between two people.

    asset_type is an AssetType for the four known kinds. Anything else read
    from storage is kept as the raw string so the asset still counts toward
    person and combined totals.
    """

    asset_id: str
    asset_type: Union[AssetType, str]
    symbol: str
    name: str
    p1: Holding = field(default_factory=Holding)
    p2: Holding = field(default_factory=Holding)
    unit: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.asset_type, str) and not isinstance(self.asset_type, AssetType):
            self.asset_type = AssetType.parse(self.asset_type) or self.asset_type

    @property
    def type_value(self) -> str:
        """The type as a plain string, known or not."""
        if isinstance(self.asset_type, AssetType):
            return self.asset_type.value
        return self.asset_type

    @property
    def known_type(self) -> Optional[AssetType]:
        """The AssetType, or None when the stored type is unrecognised."""
        return self.asset_type if isinstance(self.asset_type, AssetType) else None

    @property
    def price_key(self) -> PriceKey:
        return PriceKey(self.type_value, self.symbol)

    @property
    def total_qty(self) -> Decimal:
        return self.p1.qty + self.p2.qty
