"""Price cache models keyed by (asset type, symbol)."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class PriceKey:
    """
    Composite lookup key for a priced instrument.

    Serialised as "type:symbol" only at the document boundary.
    """

    asset_type: str
    symbol: str

    def __str__(self) -> str:
        return f"{self.asset_type}:{self.symbol}"

    @classmethod
    def parse(cls, value: str) -> "PriceKey":
        """Parse "type:symbol"; the symbol itself may contain colons."""
        asset_type, sep, symbol = value.partition(":")
        if not sep:
            raise ValueError(f"Invalid price key: {value!r}")
        return cls(asset_type, symbol)


@dataclass
class PriceEntry:
    """Last known price of an instrument and its move since the prior refresh."""

    price: Decimal
    previous_price: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None


@dataclass
class PriceCache:
    """
    Prices for all tracked instruments.

    Entries are overwritten on each refresh; previous_price only reaches
    back one refresh cycle.
    """

    entries: dict[PriceKey, PriceEntry] = field(default_factory=dict)
    last_updated: Optional[datetime] = None

    def get(self, key: PriceKey) -> Optional[PriceEntry]:
        return self.entries.get(key)

    def price_for(self, key: PriceKey) -> Decimal:
        """Current price, or 0 when the instrument has never been priced."""
        entry = self.entries.get(key)
        return entry.price if entry else Decimal("0")

    def has_price(self, key: PriceKey) -> bool:
        return key in self.entries

    def remove(self, key: PriceKey) -> None:
        self.entries.pop(key, None)
