"""Repository protocol definitions (interfaces)."""

from portfolio_local.repositories.protocols.state_repo import StateRepository

__all__ = [
    "StateRepository",
]
