"""Local two-person portfolio tracker: holdings, prices, totals and snapshots."""

__version__ = "0.1.0"
