"""Core utilities and shared functionality."""

from portfolio_local.core.timezone import (
    now_local,
    to_local,
    to_epoch_ms,
    from_epoch_ms,
    start_of_year,
)
from portfolio_local.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    PriceFetchError,
    MalformedStoredStateError,
    MalformedImportError,
    RefreshInProgressError,
)

__all__ = [
    "now_local",
    "to_local",
    "to_epoch_ms",
    "from_epoch_ms",
    "start_of_year",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "PriceFetchError",
    "MalformedStoredStateError",
    "MalformedImportError",
    "RefreshInProgressError",
]
