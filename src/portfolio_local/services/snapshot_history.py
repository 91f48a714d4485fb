"""Bounded history of portfolio snapshots.

All functions return new lists; the history passed in is left untouched.
"""

from datetime import datetime

from portfolio_local.core.timezone import to_epoch_ms
from portfolio_local.domain.models import Snapshot
from portfolio_local.domain.views import Totals

DEFAULT_SNAPSHOT_LIMIT = 20


def build_snapshot(totals: Totals, asset_count: int, now: datetime) -> Snapshot:
    """Capture totals at the given wall-clock time."""
    return Snapshot(
        date=now,
        timestamp=to_epoch_ms(now),
        total_value=totals.combined,
        p1_total=totals.p1,
        p2_total=totals.p2,
        by_type=dict(totals.by_type),
        asset_count=asset_count,
    )


def append_snapshot(
    history: list[Snapshot],
    totals: Totals,
    asset_count: int,
    now: datetime,
    limit: int = DEFAULT_SNAPSHOT_LIMIT,
) -> list[Snapshot]:
    """
    Append a snapshot and keep only the most recent `limit` entries.

    Eviction is by insertion order. Snapshots sharing a timestamp are kept.
    """
    updated = [*history, build_snapshot(totals, asset_count, now)]
    if len(updated) > limit:
        updated = updated[-limit:]
    return updated


def clear_snapshots() -> list[Snapshot]:
    return []


def remove_snapshot(history: list[Snapshot], timestamp: int) -> list[Snapshot]:
    """Remove every snapshot taken at the given timestamp."""
    return [s for s in history if s.timestamp != timestamp]
