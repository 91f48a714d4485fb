"""Portfolio service: holdings, snapshots and settings, persisted after each change."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Union

from portfolio_local.core.exceptions import MalformedStoredStateError, NotFoundError, ValidationError
from portfolio_local.core.timezone import now_local
from portfolio_local.domain.models import (
    Asset,
    AssetType,
    Holding,
    HouseholdSettings,
    PortfolioState,
    Snapshot,
)
from portfolio_local.domain.views import ImportSummary, RefreshSummary
from portfolio_local.repositories.protocols import StateRepository
from portfolio_local.services.aggregator import compute_totals
from portfolio_local.services.price_refresh_service import PriceRefreshService
from portfolio_local.services.snapshot_history import (
    DEFAULT_SNAPSHOT_LIMIT,
    append_snapshot,
    clear_snapshots,
    remove_snapshot,
)

logger = logging.getLogger(__name__)


@dataclass
class AssetInput:
    """Form data for adding an asset or replacing an existing one."""

    asset_type: Union[AssetType, str]
    symbol: str
    name: str
    p1_qty: Decimal = Decimal("0")
    p2_qty: Decimal = Decimal("0")
    unit: Optional[str] = None


class PortfolioService:
    """
    Service owning the in-memory portfolio state.

    Every mutation writes the whole state back to the repository. Reads
    never touch the repository after load().
    """

    def __init__(
        self,
        state_repo: StateRepository,
        clock: Callable[[], datetime] = now_local,
        snapshot_limit: int = DEFAULT_SNAPSHOT_LIMIT,
    ):
        self._state_repo = state_repo
        self._clock = clock
        self._snapshot_limit = snapshot_limit
        self._state = PortfolioState()

    @property
    def state(self) -> PortfolioState:
        return self._state

    def load(self) -> PortfolioState:
        """
        Load state from the repository.

        Unreadable stored data is discarded in favour of defaults.
        """
        try:
            stored = self._state_repo.load()
        except MalformedStoredStateError as e:
            logger.error("%s; starting from defaults", e.message)
            stored = None
        self._state = stored or PortfolioState()
        return self._state

    def _persist(self) -> None:
        self._state_repo.save(self._state)

    # Assets

    def list_assets(self) -> list[Asset]:
        return list(self._state.assets)

    def get_asset(self, asset_id: str) -> Asset:
        """Get asset by ID."""
        asset = self._state.find_asset(asset_id)
        if asset is None:
            raise NotFoundError("Asset", asset_id)
        return asset

    def add_asset(self, data: AssetInput) -> Asset:
        """Add a new asset with a freshly assigned id."""
        asset = self._build_asset(str(uuid.uuid4()), data)
        self._state.assets.append(asset)
        self._persist()
        logger.info("Added %s %s (%s)", asset.type_value, asset.symbol, asset.asset_id)
        return asset

    def edit_asset(self, asset_id: str, data: AssetInput) -> Asset:
        """Replace an asset in place, keeping its id and position."""
        for index, existing in enumerate(self._state.assets):
            if existing.asset_id == asset_id:
                asset = self._build_asset(asset_id, data)
                self._state.assets[index] = asset
                self._persist()
                return asset
        raise NotFoundError("Asset", asset_id)

    def delete_asset(self, asset_id: str) -> None:
        """
        Delete an asset and its cached price.

        The price entry stays when another asset still uses the same key.
        """
        asset = self.get_asset(asset_id)
        self._state.assets = [a for a in self._state.assets if a.asset_id != asset_id]
        if asset.price_key not in self._state.price_keys_in_use():
            self._state.price_cache.remove(asset.price_key)
        self._persist()
        logger.info("Deleted asset %s", asset_id)

    @staticmethod
    def _build_asset(asset_id: str, data: AssetInput) -> Asset:
        asset_type = data.asset_type
        if not isinstance(asset_type, AssetType):
            asset_type = AssetType.parse(str(asset_type).strip().lower())
            if asset_type is None:
                raise ValidationError(f"Unknown asset type: {data.asset_type}")

        name = data.name.strip()
        symbol = data.symbol.strip()
        if not name:
            raise ValidationError("Asset name is required")
        if not symbol:
            raise ValidationError("Asset symbol is required")

        p1_qty = data.p1_qty if data.p1_qty is not None else Decimal("0")
        p2_qty = data.p2_qty if data.p2_qty is not None else Decimal("0")
        if not (p1_qty.is_finite() and p2_qty.is_finite()):
            raise ValidationError("Quantities must be finite numbers")
        if p1_qty < 0 or p2_qty < 0:
            raise ValidationError("Quantities cannot be negative")

        unit = data.unit.strip() if data.unit else None
        return Asset(
            asset_id=asset_id,
            asset_type=asset_type,
            symbol=symbol,
            name=name,
            p1=Holding(qty=p1_qty),
            p2=Holding(qty=p2_qty),
            # Only metals are measured in a unit (toz, g, ...)
            unit=unit if asset_type == AssetType.METAL else None,
        )

    # Prices

    async def refresh_prices(self, refresher: PriceRefreshService) -> RefreshSummary:
        """Refresh prices into the live state and persist the result."""
        summary = await refresher.refresh(self._state)
        self._persist()
        return summary

    # Snapshots

    def save_snapshot(self) -> Snapshot:
        """Capture current totals into the bounded history."""
        totals = compute_totals(self._state.assets, self._state.price_cache)
        self._state.snapshots = append_snapshot(
            self._state.snapshots,
            totals,
            asset_count=len(self._state.assets),
            now=self._clock(),
            limit=self._snapshot_limit,
        )
        self._persist()
        return self._state.snapshots[-1]

    def delete_snapshot(self, timestamp: int) -> int:
        """Delete snapshots taken at timestamp; returns how many were removed."""
        before = len(self._state.snapshots)
        self._state.snapshots = remove_snapshot(self._state.snapshots, timestamp)
        removed = before - len(self._state.snapshots)
        if removed:
            self._persist()
        return removed

    def clear_snapshots(self) -> None:
        self._state.snapshots = clear_snapshots()
        self._persist()

    def snapshots_newest_first(self) -> list[Snapshot]:
        return sorted(self._state.snapshots, key=lambda s: s.timestamp, reverse=True)

    # Settings

    def update_settings(
        self,
        base_currency: Optional[str] = None,
        people: Optional[tuple[str, str]] = None,
    ) -> HouseholdSettings:
        """Change the reporting currency and/or the two people's names."""
        code = None
        if base_currency is not None:
            code = base_currency.strip().upper()
            if len(code) != 3 or not code.isalpha():
                raise ValidationError(f"Invalid currency code: {base_currency}")
        names = None
        if people is not None:
            names = tuple(p.strip() for p in people)
            if len(names) != 2 or not all(names):
                raise ValidationError("Exactly two non-empty names are required")

        # Nothing is applied until both inputs are valid
        settings = self._state.settings
        if code is not None:
            settings.base_currency = code
        if names is not None:
            settings.people = names
        self._persist()
        return settings

    # Import

    def replace_state(self, state: PortfolioState) -> ImportSummary:
        """Swap in an imported state wholesale and persist it."""
        self._state = state
        self._persist()
        return ImportSummary(
            asset_count=len(state.assets),
            snapshot_count=len(state.snapshots),
            price_count=len(state.price_cache.entries),
        )
