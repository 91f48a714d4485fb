"""Enumerations for domain models."""

from enum import Enum
from typing import Optional


class AssetType(str, Enum):
    """Kinds of holdings the tracker can price and bucket."""

    STOCK = "stock"
    CRYPTO = "crypto"
    METAL = "metal"
    SAVINGS = "savings"  # cash-equivalent, priced 1:1

    @classmethod
    def parse(cls, value: str) -> Optional["AssetType"]:
        """Return the matching member, or None for an unrecognised type."""
        try:
            return cls(value)
        except ValueError:
            return None


class RangeWindow(str, Enum):
    """Time windows applied to snapshot history."""

    LAST_DAY = "1d"
    LAST_WEEK = "7d"
    LAST_MONTH = "30d"
    YEAR_TO_DATE = "ytd"
    ALL = "all"


class SortColumn(str, Enum):
    """Sortable columns of the holdings table."""

    NAME = "name"
    TYPE = "type"
    PRICE = "price"
    COMBINED = "combined"


class PriceDirection(str, Enum):
    """Direction of a price move since the previous refresh."""

    UP = "up"
    DOWN = "down"
