"""Household settings and the full application state."""

from dataclasses import dataclass, field
from typing import Optional

from portfolio_local.domain.models.asset import Asset
from portfolio_local.domain.models.price_cache import PriceCache, PriceKey
from portfolio_local.domain.models.snapshot import Snapshot

DEFAULT_PEOPLE = ("Person 1", "Person 2")


@dataclass
class HouseholdSettings:
    """User-editable settings: reporting currency and the two people's names."""

    base_currency: str = "USD"
    people: tuple[str, str] = DEFAULT_PEOPLE

    def __post_init__(self) -> None:
        if isinstance(self.people, list):
            self.people = tuple(self.people)


@dataclass
class PortfolioState:
    """
    Everything the tracker persists.

    Passed explicitly to the services; there is no module-level copy.
    """

    settings: HouseholdSettings = field(default_factory=HouseholdSettings)
    assets: list[Asset] = field(default_factory=list)
    price_cache: PriceCache = field(default_factory=PriceCache)
    snapshots: list[Snapshot] = field(default_factory=list)

    def find_asset(self, asset_id: str) -> Optional[Asset]:
        for asset in self.assets:
            if asset.asset_id == asset_id:
                return asset
        return None

    def price_keys_in_use(self) -> set[PriceKey]:
        return {asset.price_key for asset in self.assets}
