"""SQLAlchemy implementation of StateRepository."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from portfolio_local.backup.document import dump_state, load_state
from portfolio_local.core.exceptions import MalformedStoredStateError
from portfolio_local.domain.models import PortfolioState
from portfolio_local.repositories.sqlalchemy.orm_models import KeyValueORM

logger = logging.getLogger(__name__)


class SqlAlchemyStateRepository:
    """SQLAlchemy-backed key-value store holding the state as one JSON document."""

    def __init__(self, db: Session, key: str = "portfolio_v1"):
        self._db = db
        self._key = key

    def load(self) -> Optional[PortfolioState]:
        """Load and parse the stored document, if any."""
        raw = self.get_raw()
        if raw is None:
            return None
        try:
            return load_state(raw)
        except ValueError as e:
            raise MalformedStoredStateError(str(e).splitlines()[0]) from e

    def save(self, state: PortfolioState) -> None:
        """Write the whole state under the configured key."""
        self.set_raw(dump_state(state))

    def clear(self) -> None:
        """Delete the stored document."""
        self._db.query(KeyValueORM).filter(KeyValueORM.key == self._key).delete()
        self._db.commit()

    def get_raw(self) -> Optional[str]:
        """Return the stored text without parsing it."""
        row = self._db.get(KeyValueORM, self._key)
        return row.value if row else None

    def set_raw(self, value: str) -> None:
        """Store text under the key, replacing any previous value."""
        row = self._db.get(KeyValueORM, self._key)
        if row:
            row.value = value
        else:
            self._db.add(KeyValueORM(key=self._key, value=value))
        self._db.commit()
        logger.debug("Saved %d bytes under %s", len(value), self._key)
