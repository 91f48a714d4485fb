"""Render chart series to image files with matplotlib."""

import logging
from pathlib import Path

from matplotlib.figure import Figure

from portfolio_local.domain.models import AssetType
from portfolio_local.domain.views import (
    AllocationView,
    ChartSeries,
    PersonComparison,
    SavingsVsInvested,
    ScatterPoint,
)
from portfolio_local.services.series import DELTA_SERIES, RETURN_SERIES

logger = logging.getLogger(__name__)

TYPE_COLORS = {
    AssetType.STOCK: "#3b82f6",
    AssetType.CRYPTO: "#f59e0b",
    AssetType.METAL: "#8b5cf6",
    AssetType.SAVINGS: "#10b981",
}
TYPE_LABELS = {
    AssetType.STOCK: "Stocks",
    AssetType.CRYPTO: "Crypto",
    AssetType.METAL: "Metals",
    AssetType.SAVINGS: "Savings",
}
INVESTED_COLOR = "#3b82f6"
SAVINGS_COLOR = "#10b981"
GAIN_COLOR = "#3fb950"
LOSS_COLOR = "#f85149"


def _new_figure() -> Figure:
    return Figure(figsize=(8, 4.5), dpi=100)


def _empty(fig: Figure, message: str) -> None:
    ax = fig.add_subplot(111)
    ax.text(0.5, 0.5, message, ha="center", va="center", fontsize=12)
    ax.set_axis_off()


def _label_axis(ax, chart: ChartSeries, key: str) -> list[int]:
    """Positional x values labelled with snapshot dates."""
    points = chart.series[key]
    positions = list(range(len(points)))
    ax.set_xticks(positions, [p.date.strftime("%b %d") for p in points], rotation=45)
    return positions


def render_delta_chart(chart: ChartSeries, path: Path) -> Path:
    """Bar per snapshot change, green for gains and red for losses."""
    fig = _new_figure()
    if chart.insufficient_data:
        _empty(fig, chart.message or "No data")
    else:
        points = chart.series[DELTA_SERIES]
        values = [float(p.value) for p in points]
        ax = fig.add_subplot(111)
        ax.bar(
            _label_axis(ax, chart, DELTA_SERIES),
            values,
            color=[GAIN_COLOR if v >= 0 else LOSS_COLOR for v in values],
        )
        ax.axhline(0, color="#8b949e", linewidth=0.8)
        ax.set_title(chart.title)
    return _save(fig, path)


def render_return_chart(chart: ChartSeries, path: Path) -> Path:
    """Line of cumulative percent return, colored by the final point's sign."""
    fig = _new_figure()
    if chart.insufficient_data:
        _empty(fig, chart.message or "No data")
    else:
        points = chart.series[RETURN_SERIES]
        values = [float(p.value) for p in points]
        color = GAIN_COLOR if values[-1] >= 0 else LOSS_COLOR
        ax = fig.add_subplot(111)
        positions = _label_axis(ax, chart, RETURN_SERIES)
        ax.plot(positions, values, color=color, marker="o", linewidth=2.5)
        ax.fill_between(positions, values, alpha=0.08, color=color)
        ax.set_ylabel("%")
        ax.set_title(chart.title)
    return _save(fig, path)


def render_composition_chart(chart: ChartSeries, path: Path) -> Path:
    """Stacked bars of value per asset type for each snapshot."""
    fig = _new_figure()
    if chart.insufficient_data:
        _empty(fig, chart.message or "No data")
    else:
        ax = fig.add_subplot(111)
        positions = _label_axis(ax, chart, AssetType.STOCK.value)
        bottoms = [0.0] * len(positions)
        for asset_type in AssetType:
            values = [float(p.value) for p in chart.series[asset_type.value]]
            ax.bar(
                positions,
                values,
                bottom=bottoms,
                label=TYPE_LABELS[asset_type],
                color=TYPE_COLORS[asset_type],
            )
            bottoms = [b + v for b, v in zip(bottoms, values)]
        ax.legend()
        ax.set_title(chart.title)
    return _save(fig, path)


def render_allocation_chart(allocation: AllocationView, path: Path) -> Path:
    """Doughnut of current value by asset type."""
    fig = _new_figure()
    items = [item for item in allocation.items if item.value > 0]
    if not items:
        _empty(fig, "No holdings")
    else:
        ax = fig.add_subplot(111)
        ax.pie(
            [float(item.value) for item in items],
            labels=[TYPE_LABELS[item.asset_type] for item in items],
            colors=[TYPE_COLORS[item.asset_type] for item in items],
            autopct="%1.1f%%",
            wedgeprops={"width": 0.4},
        )
        ax.set_aspect("equal")
        ax.set_title("Asset Allocation")
    return _save(fig, path)


def render_person_comparison_chart(comparison: PersonComparison, path: Path) -> Path:
    """Grouped bars of each person's value per asset type."""
    fig = _new_figure()
    p1_values = [float(comparison.p1_by_type.get(t, 0)) for t in AssetType]
    p2_values = [float(comparison.p2_by_type.get(t, 0)) for t in AssetType]
    if not any(p1_values) and not any(p2_values):
        _empty(fig, "No holdings")
    else:
        ax = fig.add_subplot(111)
        positions = list(range(len(AssetType)))
        width = 0.38
        ax.bar([x - width / 2 for x in positions], p1_values, width, label=comparison.people[0], color="#3b82f6")
        ax.bar([x + width / 2 for x in positions], p2_values, width, label=comparison.people[1], color="#f59e0b")
        ax.set_xticks(positions, [TYPE_LABELS[t] for t in AssetType])
        ax.legend()
        ax.set_title("Holdings by Person")
    return _save(fig, path)


def render_savings_chart(split: SavingsVsInvested, path: Path) -> Path:
    """Doughnut of cash savings against invested value."""
    fig = _new_figure()
    if split.total <= 0:
        _empty(fig, "No holdings")
    else:
        ax = fig.add_subplot(111)
        ax.pie(
            [float(split.invested), float(split.savings)],
            labels=["Invested", "Savings"],
            colors=[INVESTED_COLOR, SAVINGS_COLOR],
            autopct="%1.1f%%",
            wedgeprops={"width": 0.4},
        )
        ax.set_aspect("equal")
        ax.set_title("Savings vs Invested")
    return _save(fig, path)


def render_scatter_chart(points: list[ScatterPoint], path: Path) -> Path:
    """Change percent against position value, one dot per asset."""
    fig = _new_figure()
    if not points:
        _empty(fig, "No price changes yet")
    else:
        ax = fig.add_subplot(111)
        for asset_type in AssetType:
            group = [p for p in points if p.asset_type == asset_type]
            if not group:
                continue
            ax.scatter(
                [float(p.change_percent) for p in group],
                [float(p.value) for p in group],
                label=TYPE_LABELS[asset_type],
                color=TYPE_COLORS[asset_type],
            )
            for p in group:
                ax.annotate(p.symbol, (float(p.change_percent), float(p.value)), fontsize=8)
        ax.axvline(0, color="#8b949e", linewidth=0.8)
        ax.set_xlabel("Change %")
        ax.set_ylabel("Value")
        ax.legend()
        ax.set_title("Performance vs Value")
    return _save(fig, path)


def _save(fig: Figure, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path)
    logger.debug("Wrote chart %s", path)
    return path
