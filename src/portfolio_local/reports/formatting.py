"""Display formatting. Rounding happens here and nowhere in the services."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from portfolio_local.domain.views import PriceChange
from portfolio_local.domain.models import PriceDirection

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
    "CHF": "CHF ",
}


def format_currency(value: Decimal, currency: str = "USD") -> str:
    """Format like 1,234.56 with the currency's symbol, sign first."""
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    rounded = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"


def format_percent(value: Decimal, places: int = 1, signed: bool = False) -> str:
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "+" if signed and rounded > 0 else ""
    return f"{sign}{rounded:.{places}f}%"


def format_quantity(value: Decimal) -> str:
    """Trim trailing zeros: 10.500 -> 10.5, 3.000 -> 3."""
    return f"{Decimal(value).normalize():f}"


def format_price_change(change: Optional[PriceChange]) -> str:
    """Arrow and signed percent, e.g. '↑ +1.25%'; empty when unchanged."""
    if change is None:
        return ""
    arrow = "↑" if change.direction == PriceDirection.UP else "↓"
    return f"{arrow} {format_percent(change.percent, places=2, signed=True)}"
