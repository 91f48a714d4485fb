"""State repository protocol."""

from typing import Protocol, Optional

from portfolio_local.domain.models import PortfolioState


class StateRepository(Protocol):
    """
    Interface for the single-key state store.

    The whole state is read and written as one document; last write wins.
    """

    def load(self) -> Optional[PortfolioState]:
        """
        Return the stored state, or None if nothing has been saved.

        Raises MalformedStoredStateError when the stored document is unreadable.
        """
        ...

    def save(self, state: PortfolioState) -> None:
        """Replace the stored state."""
        ...

    def clear(self) -> None:
        """Remove the stored state."""
        ...
