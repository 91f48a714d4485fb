"""Application context for in-process service management.

Wires the database, repositories, price providers and services together
so the CLI (or any other front end) works against plain Python objects.
"""

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from portfolio_local.backup import BackupExporter, BackupImporter
from portfolio_local.config.settings import Settings, get_settings
from portfolio_local.domain.models import AssetType
from portfolio_local.providers import (
    FinnhubPriceProvider,
    MetalsDevPriceProvider,
    PriceProvider,
    StubPriceProvider,
)
from portfolio_local.repositories.sqlalchemy import (
    SqlAlchemyStateRepository,
    create_db_engine,
    init_db,
    new_session,
)
from portfolio_local.services import PortfolioService, PriceRefreshService, ReportService

logger = logging.getLogger(__name__)


class AppContext:
    """
    Application context providing access to all services.

    Services are created lazily on first access and share one database
    session. Call close() when done.
    """

    def __init__(self, data_dir: Optional[Path] = None, settings: Optional[Settings] = None):
        """
        Initialize application context.

        Args:
            data_dir: Optional data directory, overriding the one in settings.
            settings: Settings to use. Defaults to get_settings().
        """
        settings = settings or get_settings()
        if data_dir is not None:
            settings = settings.model_copy(update={"data_dir": data_dir})
        self._settings = settings

        self._engine: Optional[Engine] = None
        self._session: Optional[Session] = None

        # Service instances (lazy initialized)
        self._portfolio: Optional[PortfolioService] = None
        self._reports: Optional[ReportService] = None
        self._refresher: Optional[PriceRefreshService] = None
        self._exporter: Optional[BackupExporter] = None
        self._importer: Optional[BackupImporter] = None

    @property
    def settings(self) -> Settings:
        return self._settings

    def _get_session(self) -> Session:
        """Get or create database session."""
        if self._session is None:
            self._engine = create_db_engine(self._settings.get_database_url())
            init_db(self._engine)
            self._session = new_session(self._engine)
        return self._session

    def _get_state_repo(self) -> SqlAlchemyStateRepository:
        return SqlAlchemyStateRepository(self._get_session(), key=self._settings.storage_key)

    def _build_providers(self) -> dict[AssetType, PriceProvider]:
        settings = self._settings
        if settings.use_stub_prices:
            logger.info("Using stub price provider")
            stub = StubPriceProvider()
            return {AssetType.STOCK: stub, AssetType.CRYPTO: stub, AssetType.METAL: stub}

        finnhub = FinnhubPriceProvider(
            api_key=settings.finnhub_api_key,
            base_url=settings.finnhub_base_url,
            timeout=settings.request_timeout_seconds,
        )
        metals = MetalsDevPriceProvider(
            api_key=settings.metals_dev_api_key,
            base_url=settings.metals_dev_base_url,
            timeout=settings.request_timeout_seconds,
        )
        return {AssetType.STOCK: finnhub, AssetType.CRYPTO: finnhub, AssetType.METAL: metals}

    # Service accessors
    @property
    def portfolio(self) -> PortfolioService:
        """Get the PortfolioService instance, loading stored state on first use."""
        if self._portfolio is None:
            self._portfolio = PortfolioService(
                state_repo=self._get_state_repo(),
                snapshot_limit=self._settings.snapshot_limit,
            )
            self._portfolio.load()
        return self._portfolio

    @property
    def reports(self) -> ReportService:
        """Get the ReportService instance."""
        if self._reports is None:
            portfolio = self.portfolio
            self._reports = ReportService(
                state_provider=lambda: portfolio.state,
                performer_count=self._settings.performer_count,
            )
        return self._reports

    @property
    def refresher(self) -> PriceRefreshService:
        """Get the PriceRefreshService instance."""
        if self._refresher is None:
            self._refresher = PriceRefreshService(providers=self._build_providers())
        return self._refresher

    # Backup utilities
    @property
    def exporter(self) -> BackupExporter:
        if self._exporter is None:
            self._exporter = BackupExporter()
        return self._exporter

    @property
    def importer(self) -> BackupImporter:
        if self._importer is None:
            self._importer = BackupImporter()
        return self._importer

    def close(self) -> None:
        """Clean up resources."""
        if self._session:
            self._session.close()
            self._session = None
        if self._engine:
            self._engine.dispose()
            self._engine = None
