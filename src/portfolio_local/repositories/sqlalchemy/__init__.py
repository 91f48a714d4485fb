"""SQLAlchemy repository implementations."""

from portfolio_local.repositories.sqlalchemy.database import (
    create_db_engine,
    create_session_factory,
    init_db,
    new_session,
    Base,
)
from portfolio_local.repositories.sqlalchemy.state_repo import SqlAlchemyStateRepository

__all__ = [
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "new_session",
    "Base",
    "SqlAlchemyStateRepository",
]
