#!/usr/bin/env python3
"""Command-line entry point.

Run with: python -m portfolio_local.main <command>
"""

import argparse
import asyncio
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

from portfolio_local.app_context import AppContext
from portfolio_local.config.logging_config import setup_logging
from portfolio_local.config.settings import set_settings
from portfolio_local.core.exceptions import AppError, ValidationError
from portfolio_local.domain.models import AssetType, RangeWindow, SortColumn
from portfolio_local.domain.views import Performer, SortState
from portfolio_local.reports import chart_renderer
from portfolio_local.reports.formatting import (
    format_currency,
    format_percent,
    format_price_change,
    format_quantity,
)
from portfolio_local.services import AssetInput

logger = logging.getLogger(__name__)


def _decimal(value: str) -> Decimal:
    try:
        result = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value}")
    if not result.is_finite():
        raise argparse.ArgumentTypeError(f"not a finite number: {value}")
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="portfolio-local", description="Household portfolio tracker")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding portfolio.db")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    parser.add_argument("--log-file", action="store_true", help="Also log to portfolio.log in the data directory")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("summary", help="Show totals and breakdowns")

    holdings = sub.add_parser("holdings", help="Show the holdings table")
    holdings.add_argument("--type", default="all", choices=["all"] + [t.value for t in AssetType])
    holdings.add_argument("--search", default="")
    holdings.add_argument("--sort", choices=[c.value for c in SortColumn], default=None)
    holdings.add_argument("--desc", action="store_true", help="Sort descending")

    for name in ("add", "edit"):
        cmd = sub.add_parser(name, help=f"{name.capitalize()} an asset")
        if name == "edit":
            cmd.add_argument("asset_id")
        cmd.add_argument("--type", required=True, dest="asset_type")
        cmd.add_argument("--symbol", required=True)
        cmd.add_argument("--name", required=True)
        cmd.add_argument("--p1", type=_decimal, default=Decimal("0"), help="Quantity held by person 1")
        cmd.add_argument("--p2", type=_decimal, default=Decimal("0"), help="Quantity held by person 2")
        cmd.add_argument("--unit", default=None, help="Unit for metals (toz, g)")

    delete = sub.add_parser("delete", help="Delete an asset")
    delete.add_argument("asset_id")

    sub.add_parser("refresh", help="Fetch latest prices")

    snapshot = sub.add_parser("snapshot", help="Manage snapshot history")
    snapshot_sub = snapshot.add_subparsers(dest="snapshot_command", required=True)
    snapshot_sub.add_parser("save")
    snapshot_sub.add_parser("list")
    snapshot_delete = snapshot_sub.add_parser("delete")
    snapshot_delete.add_argument("timestamp", type=int)
    snapshot_sub.add_parser("clear")

    sub.add_parser("performers", help="Show top and bottom movers")

    charts = sub.add_parser("charts", help="Render charts to PNG files")
    charts.add_argument("--window", default=RangeWindow.ALL.value, choices=[w.value for w in RangeWindow])
    charts.add_argument("--out", type=Path, default=None, help="Output directory")

    export = sub.add_parser("export", help="Write a JSON backup")
    export.add_argument("path", type=Path, nargs="?", default=None)

    imp = sub.add_parser("import", help="Replace all data with a JSON backup")
    imp.add_argument("path", type=Path)

    settings = sub.add_parser("settings", help="Change currency or people's names")
    settings.add_argument("--currency", default=None)
    settings.add_argument("--people", nargs=2, metavar=("PERSON1", "PERSON2"), default=None)

    return parser


# Commands


def cmd_summary(ctx: AppContext, args: argparse.Namespace) -> None:
    state = ctx.portfolio.state
    currency = state.settings.base_currency
    person1, person2 = state.settings.people
    totals = ctx.reports.totals()

    print(f"Combined:  {format_currency(totals.combined, currency)}")
    print(f"{person1}: {format_currency(totals.p1, currency)}")
    print(f"{person2}: {format_currency(totals.p2, currency)}")
    print()
    print("Allocation")
    for item in ctx.reports.allocation().items:
        print(
            f"  {item.asset_type.value:<8} {format_currency(item.value, currency):>16}"
            f"  {format_percent(item.percentage):>7}"
        )

    comparison = ctx.reports.person_comparison()
    print()
    print(f"{'By person':<10} {person1:>16} {person2:>16}")
    for asset_type in AssetType:
        print(
            f"  {asset_type.value:<8} {format_currency(comparison.p1_by_type.get(asset_type, 0), currency):>16}"
            f" {format_currency(comparison.p2_by_type.get(asset_type, 0), currency):>16}"
        )

    split = ctx.reports.savings_vs_invested()
    print()
    print(f"Invested: {format_currency(split.invested, currency)}")
    print(f"Savings:  {format_currency(split.savings, currency)}")

    last = state.price_cache.last_updated
    print()
    print(f"Prices updated: {last.strftime('%Y-%m-%d %H:%M') if last else 'never'}")


def cmd_holdings(ctx: AppContext, args: argparse.Namespace) -> None:
    currency = ctx.portfolio.state.settings.base_currency
    sort = SortState(column=args.sort, ascending=not args.desc) if args.sort else None
    rows = ctx.reports.holdings(type_filter=args.type, search=args.search, sort=sort)
    if not rows:
        print("No holdings")
        return
    for row in rows:
        asset = row.asset
        price = format_currency(row.valuation.price, currency) if row.valuation.has_price else "-"
        print(
            f"{asset.name:<24} {asset.symbol:<16} {asset.type_value:<8} {price:>14} "
            f"{format_price_change(row.price_change):<12} "
            f"{format_quantity(row.valuation.p1_qty):>10} {format_quantity(row.valuation.p2_qty):>10} "
            f"{format_currency(row.valuation.combined_value, currency):>16} "
            f"{format_percent(row.share_percent):>7}  {asset.asset_id}"
        )


def _asset_input(args: argparse.Namespace) -> AssetInput:
    return AssetInput(
        asset_type=args.asset_type,
        symbol=args.symbol,
        name=args.name,
        p1_qty=args.p1,
        p2_qty=args.p2,
        unit=args.unit,
    )


def cmd_add(ctx: AppContext, args: argparse.Namespace) -> None:
    asset = ctx.portfolio.add_asset(_asset_input(args))
    print(f"Added {asset.name} ({asset.asset_id})")


def cmd_edit(ctx: AppContext, args: argparse.Namespace) -> None:
    asset = ctx.portfolio.edit_asset(args.asset_id, _asset_input(args))
    print(f"Updated {asset.name}")


def cmd_delete(ctx: AppContext, args: argparse.Namespace) -> None:
    ctx.portfolio.delete_asset(args.asset_id)
    print("Deleted")


def cmd_refresh(ctx: AppContext, args: argparse.Namespace) -> None:
    summary = asyncio.run(ctx.portfolio.refresh_prices(ctx.refresher))
    print(f"Priced {summary.updated} of {summary.total} assets")
    if summary.errors:
        print(f"{summary.errors} failed: {', '.join(summary.failed_symbols)}")


def cmd_snapshot(ctx: AppContext, args: argparse.Namespace) -> None:
    portfolio = ctx.portfolio
    currency = portfolio.state.settings.base_currency
    if args.snapshot_command == "save":
        snap = portfolio.save_snapshot()
        print(f"Saved snapshot {snap.timestamp}: {format_currency(snap.total_value, currency)}")
    elif args.snapshot_command == "list":
        snapshots = portfolio.snapshots_newest_first()
        if not snapshots:
            print("No snapshots saved yet")
        for snap in snapshots:
            print(
                f"{snap.timestamp}  {snap.date.strftime('%Y-%m-%d %H:%M')}  "
                f"{format_currency(snap.total_value, currency):>16}  {snap.asset_count} assets"
            )
    elif args.snapshot_command == "delete":
        removed = portfolio.delete_snapshot(args.timestamp)
        print(f"Deleted {removed} snapshot(s)")
    elif args.snapshot_command == "clear":
        portfolio.clear_snapshots()
        print("Cleared snapshot history")


def _print_performers(title: str, performers: list[Performer], currency: str) -> None:
    print(title)
    if not performers:
        print("  No price changes yet")
    for p in performers:
        print(
            f"  {p.name:<24} {p.symbol:<16} {format_percent(p.change_percent, places=2, signed=True):>9}"
            f"  {format_currency(p.value, currency):>16}"
        )


def cmd_performers(ctx: AppContext, args: argparse.Namespace) -> None:
    currency = ctx.portfolio.state.settings.base_currency
    view = ctx.reports.performers()
    _print_performers("Top performers", view.top, currency)
    _print_performers("Bottom performers", view.bottom, currency)


def cmd_charts(ctx: AppContext, args: argparse.Namespace) -> None:
    out_dir = args.out or ctx.settings.get_chart_dir()
    reports = ctx.reports
    written = [
        chart_renderer.render_allocation_chart(reports.allocation(), out_dir / "allocation.png"),
        chart_renderer.render_delta_chart(reports.daily_change_chart(args.window), out_dir / "daily_change.png"),
        chart_renderer.render_return_chart(
            reports.cumulative_return_chart(args.window), out_dir / "cumulative_return.png"
        ),
        chart_renderer.render_composition_chart(reports.composition_chart(args.window), out_dir / "composition.png"),
        chart_renderer.render_person_comparison_chart(reports.person_comparison(), out_dir / "person_comparison.png"),
        chart_renderer.render_savings_chart(reports.savings_vs_invested(), out_dir / "savings_vs_invested.png"),
        chart_renderer.render_scatter_chart(reports.scatter(), out_dir / "scatter.png"),
    ]
    for path in written:
        print(path)


def cmd_export(ctx: AppContext, args: argparse.Namespace) -> None:
    target = args.path or ctx.settings.get_export_dir()
    path = ctx.exporter.export_json(ctx.portfolio.state, target)
    print(f"Exported to {path}")


def cmd_import(ctx: AppContext, args: argparse.Namespace) -> None:
    state = ctx.importer.import_json(args.path)
    summary = ctx.portfolio.replace_state(state)
    print(f"Imported {summary.asset_count} assets and {summary.snapshot_count} snapshots")


def cmd_settings(ctx: AppContext, args: argparse.Namespace) -> None:
    if args.currency is None and args.people is None:
        raise ValidationError("Nothing to change; pass --currency and/or --people")
    people: Optional[tuple[str, str]] = tuple(args.people) if args.people else None
    settings = ctx.portfolio.update_settings(base_currency=args.currency, people=people)
    print(f"Currency: {settings.base_currency}; people: {settings.people[0]}, {settings.people[1]}")


COMMANDS = {
    "summary": cmd_summary,
    "holdings": cmd_holdings,
    "add": cmd_add,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "refresh": cmd_refresh,
    "snapshot": cmd_snapshot,
    "performers": cmd_performers,
    "charts": cmd_charts,
    "export": cmd_export,
    "import": cmd_import,
    "settings": cmd_settings,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Parse arguments and run one command."""
    args = build_parser().parse_args(argv)
    ctx = AppContext(data_dir=args.data_dir)
    set_settings(ctx.settings)
    setup_logging(level="DEBUG" if args.verbose else None, to_file=args.log_file)
    logger.debug("%s %s: %s", ctx.settings.app_name, ctx.settings.app_version, args.command)
    try:
        COMMANDS[args.command](ctx, args)
    except AppError as e:
        logger.debug("Command %s failed: %s", args.command, e.code)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        ctx.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
