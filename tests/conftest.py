"""
Pytest configuration and fixtures for portfolio tracker tests.

This module provides:
- In-memory SQLite database fixtures
- Factory helpers for assets, prices and snapshots
- Deterministic and failing price providers
- Time helpers pinned to UTC
- Service and repository fixtures
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

import pytest
import pytz
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session

from portfolio_local.config.settings import reset_settings
from portfolio_local.core.timezone import to_epoch_ms
from portfolio_local.domain.models import (
    Asset,
    AssetType,
    Holding,
    PortfolioState,
    PriceCache,
    PriceEntry,
    PriceKey,
    Snapshot,
)
from portfolio_local.domain.views import Quote
from portfolio_local.repositories.sqlalchemy import Base, SqlAlchemyStateRepository
# Import ORM models to register them with Base before creating tables
from portfolio_local.repositories.sqlalchemy import orm_models  # noqa: F401
from portfolio_local.services import ReportService


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in UTC."""
    return pytz.utc.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep every test on default settings regardless of the environment."""
    for name in ("PORTFOLIO_TIMEZONE", "PORTFOLIO_FINNHUB_API_KEY", "PORTFOLIO_METALS_DEV_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return utc_datetime(2024, 6, 15, 14, 30, 0)


class FixedClock:
    """Callable clock that can be advanced between calls."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


# =============================================================================
# FACTORY HELPERS
# =============================================================================


def make_asset(
    asset_id: str = "asset-1",
    asset_type="stock",
    symbol: str = "AAA",
    name: Optional[str] = None,
    p1: str = "0",
    p2: str = "0",
    unit: Optional[str] = None,
) -> Asset:
    """Create an asset with quantities given as strings."""
    return Asset(
        asset_id=asset_id,
        asset_type=asset_type,
        symbol=symbol,
        name=name or symbol,
        p1=Holding(qty=Decimal(p1)),
        p2=Holding(qty=Decimal(p2)),
        unit=unit,
    )


def make_cache(prices: dict[str, str], change_percents: Optional[dict[str, str]] = None) -> PriceCache:
    """Create a price cache from {"type:symbol": "price"}."""
    change_percents = change_percents or {}
    entries = {
        PriceKey.parse(key): PriceEntry(
            price=Decimal(price),
            change_percent=Decimal(change_percents[key]) if key in change_percents else None,
        )
        for key, price in prices.items()
    }
    return PriceCache(entries=entries)


def make_snapshot(
    when: datetime,
    total: str,
    by_type: Optional[dict[AssetType, str]] = None,
    p1: Optional[str] = None,
    p2: str = "0",
) -> Snapshot:
    """Create a snapshot taken at `when` with the given total value."""
    return Snapshot(
        date=when,
        timestamp=to_epoch_ms(when),
        total_value=Decimal(total),
        p1_total=Decimal(p1 if p1 is not None else total),
        p2_total=Decimal(p2),
        by_type={t: Decimal(v) for t, v in (by_type or {}).items()},
        asset_count=1,
    )


# =============================================================================
# PRICE PROVIDERS
# =============================================================================


class DeterministicPriceProvider:
    """Provider returning fixed quotes and recording what it was asked for."""

    def __init__(self, quotes: Optional[dict[str, Quote]] = None):
        self.quotes = quotes or {}
        self.calls: list[tuple[AssetType, list[str]]] = []

    async def fetch_prices(self, asset_type, symbols, currency="USD"):
        self.calls.append((asset_type, list(symbols)))
        return {s: self.quotes[s] for s in symbols if s in self.quotes}


class FailingPriceProvider:
    """Provider that always raises."""

    async def fetch_prices(self, asset_type, symbols, currency="USD"):
        raise RuntimeError("Simulated provider outage")


def quote(symbol: str, price: str, change_percent: Optional[str] = None) -> Quote:
    return Quote(
        symbol=symbol,
        price=Decimal(price),
        change_percent=Decimal(change_percent) if change_percent is not None else None,
    )


@pytest.fixture
def deterministic_provider() -> DeterministicPriceProvider:
    return DeterministicPriceProvider(
        {
            "AAA": quote("AAA", "5", "1.5"),
            "BBB": quote("BBB", "20", "-2.0"),
            "BINANCE:BTCUSDT": quote("BINANCE:BTCUSDT", "60000", "3.0"),
            "gold": quote("gold", "2300"),
        }
    )


@pytest.fixture
def failing_provider() -> FailingPriceProvider:
    return FailingPriceProvider()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def state_repo(test_session) -> SqlAlchemyStateRepository:
    """Provide test StateRepository."""
    return SqlAlchemyStateRepository(test_session)


# =============================================================================
# STATE AND SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def sample_state(fixed_now) -> PortfolioState:
    """Two people holding one of each asset type, all priced."""
    state = PortfolioState(
        assets=[
            make_asset("a-stock", "stock", "AAA", "Alpha Corp", p1="10", p2="2"),
            make_asset("a-crypto", "crypto", "BINANCE:BTCUSDT", "Bitcoin", p1="0.5"),
            make_asset("a-metal", "metal", "gold", "Gold", p2="1", unit="toz"),
            make_asset("a-savings", "savings", "USD", "Emergency fund", p1="1000", p2="500"),
        ],
        price_cache=make_cache(
            {
                "stock:AAA": "5",
                "crypto:BINANCE:BTCUSDT": "60000",
                "metal:gold": "2300",
                "savings:USD": "1",
            },
            change_percents={"stock:AAA": "1.5", "crypto:BINANCE:BTCUSDT": "3.0"},
        ),
    )
    state.price_cache.last_updated = fixed_now
    return state


@pytest.fixture
def report_service(sample_state, clock) -> ReportService:
    """Provide a ReportService reading sample_state."""
    return ReportService(state_provider=lambda: sample_state, clock=clock)
