"""Repository layer - data access abstractions and implementations."""

from portfolio_local.repositories.protocols import StateRepository

__all__ = [
    "StateRepository",
]
