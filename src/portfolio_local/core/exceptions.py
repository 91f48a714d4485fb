"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class PriceFetchError(AppError):
    """Raised when a single symbol cannot be priced. Never aborts a refresh."""

    def __init__(self, symbol: str, reason: str):
        self.symbol = symbol
        super().__init__(f"Could not fetch price for {symbol}: {reason}", code="PRICE_FETCH_FAILED")


class MalformedStoredStateError(AppError):
    """Raised when the persisted state document cannot be parsed."""

    def __init__(self, reason: str):
        super().__init__(f"Stored portfolio data is unreadable: {reason}", code="MALFORMED_STORED_STATE")


class MalformedImportError(AppError):
    """Raised when a backup file is rejected before any state change."""

    def __init__(self, message: str):
        super().__init__(message, code="MALFORMED_IMPORT")


class RefreshInProgressError(AppError):
    """Raised when a price refresh is requested while one is running."""

    def __init__(self):
        super().__init__("A price refresh is already in progress", code="REFRESH_IN_PROGRESS")
