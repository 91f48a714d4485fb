"""JSON state document shared by local storage and backup files.

Field names follow the browser tracker's camelCase backup format so files
move freely between the two. Money values are written as JSON numbers.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from portfolio_local.core.timezone import from_epoch_ms, to_epoch_ms
from portfolio_local.domain.models import (
    Asset,
    AssetType,
    Holding,
    HouseholdSettings,
    PortfolioState,
    PriceCache,
    PriceEntry,
    PriceKey,
    Snapshot,
    DEFAULT_PEOPLE,
)

JsonNumber = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class _Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SettingsDocument(_Document):
    base_currency: str = "USD"
    people: list[str] = Field(default_factory=lambda: list(DEFAULT_PEOPLE), min_length=2, max_length=2)


class HoldingDocument(_Document):
    qty: JsonNumber = Decimal("0")
    avg_cost: JsonNumber = Decimal("0")


class HoldingsDocument(_Document):
    p1: HoldingDocument = Field(default_factory=HoldingDocument)
    p2: HoldingDocument = Field(default_factory=HoldingDocument)


class AssetDocument(_Document):
    id: str
    type: str
    symbol: str
    name: str
    unit: Optional[str] = None
    holdings: HoldingsDocument = Field(default_factory=HoldingsDocument)


class PriceCacheDocument(_Document):
    last_updated: int = 0
    prices: dict[str, JsonNumber] = Field(default_factory=dict)
    previous_prices: dict[str, JsonNumber] = Field(default_factory=dict)
    change_percents: dict[str, JsonNumber] = Field(default_factory=dict)


class SnapshotDocument(_Document):
    date: datetime
    timestamp: int
    total_value: JsonNumber
    # Older backups name the people instead of numbering them
    p1_total: JsonNumber = Field(validation_alias=AliasChoices("p1Total", "p1_total", "deanTotal"))
    p2_total: JsonNumber = Field(validation_alias=AliasChoices("p2Total", "p2_total", "samTotal"))
    by_type: dict[str, JsonNumber] = Field(default_factory=dict)
    asset_count: int = 0


class StateDocument(_Document):
    settings: SettingsDocument
    assets: list[AssetDocument]
    price_cache: PriceCacheDocument = Field(default_factory=PriceCacheDocument)
    snapshots: list[SnapshotDocument] = Field(default_factory=list)

    def to_json(self, indent: Optional[int] = None) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


def to_document(state: PortfolioState) -> StateDocument:
    """Convert domain state into its serialisable document."""
    cache = state.price_cache
    return StateDocument(
        settings=SettingsDocument(
            base_currency=state.settings.base_currency,
            people=list(state.settings.people),
        ),
        assets=[
            AssetDocument(
                id=asset.asset_id,
                type=asset.type_value,
                symbol=asset.symbol,
                name=asset.name,
                unit=asset.unit,
                holdings=HoldingsDocument(
                    p1=HoldingDocument(qty=asset.p1.qty, avg_cost=asset.p1.avg_cost),
                    p2=HoldingDocument(qty=asset.p2.qty, avg_cost=asset.p2.avg_cost),
                ),
            )
            for asset in state.assets
        ],
        price_cache=PriceCacheDocument(
            last_updated=to_epoch_ms(cache.last_updated) if cache.last_updated else 0,
            prices={str(k): e.price for k, e in cache.entries.items()},
            previous_prices={
                str(k): e.previous_price for k, e in cache.entries.items() if e.previous_price is not None
            },
            change_percents={
                str(k): e.change_percent for k, e in cache.entries.items() if e.change_percent is not None
            },
        ),
        snapshots=[
            SnapshotDocument(
                date=s.date,
                timestamp=s.timestamp,
                total_value=s.total_value,
                p1_total=s.p1_total,
                p2_total=s.p2_total,
                by_type={t.value: v for t, v in s.by_type.items()},
                asset_count=s.asset_count,
            )
            for s in state.snapshots
        ],
    )


def from_document(document: StateDocument) -> PortfolioState:
    """
    Convert a validated document into domain state.

    Raises ValueError for price keys that are not "type:symbol".
    """
    cache_doc = document.price_cache
    entries: dict[PriceKey, PriceEntry] = {}
    for raw_key, price in cache_doc.prices.items():
        entries[PriceKey.parse(raw_key)] = PriceEntry(
            price=price,
            previous_price=cache_doc.previous_prices.get(raw_key),
            change_percent=cache_doc.change_percents.get(raw_key),
        )

    return PortfolioState(
        settings=HouseholdSettings(
            base_currency=document.settings.base_currency,
            people=tuple(document.settings.people),
        ),
        assets=[
            Asset(
                asset_id=a.id,
                asset_type=a.type,
                symbol=a.symbol,
                name=a.name,
                unit=a.unit,
                p1=Holding(qty=a.holdings.p1.qty, avg_cost=a.holdings.p1.avg_cost),
                p2=Holding(qty=a.holdings.p2.qty, avg_cost=a.holdings.p2.avg_cost),
            )
            for a in document.assets
        ],
        price_cache=PriceCache(
            entries=entries,
            last_updated=from_epoch_ms(cache_doc.last_updated) if cache_doc.last_updated else None,
        ),
        snapshots=[
            Snapshot(
                date=s.date,
                timestamp=s.timestamp,
                total_value=s.total_value,
                p1_total=s.p1_total,
                p2_total=s.p2_total,
                by_type={
                    asset_type: s.by_type.get(asset_type.value, Decimal("0"))
                    for asset_type in AssetType
                },
                asset_count=s.asset_count,
            )
            for s in document.snapshots
        ],
    )


def dump_state(state: PortfolioState, indent: Optional[int] = None) -> str:
    return to_document(state).to_json(indent=indent)


def load_state(raw: str) -> PortfolioState:
    """
    Parse a JSON state document.

    Raises ValueError (including pydantic's ValidationError) on any problem.
    """
    return from_document(StateDocument.model_validate_json(raw))
