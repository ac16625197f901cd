#!/usr/bin/env python3
"""
Cellar Report

Prints the portfolio, drinking, spending, taste and planning summaries
for your cellar, and optionally saves the charts as HTML.

Usage:
    python scripts/cellar_report.py
    python scripts/cellar_report.py --cellar-id <uuid> --charts reports/
    python scripts/cellar_report.py --today 2026-03-31
    python scripts/cellar_report.py --validate
"""

import sys
import argparse
from datetime import date, datetime
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cellarbook import alerts, analytics, charts, planning, portfolio
from cellarbook.config import load_settings
from cellarbook.error_handling import CellarbookError
from cellarbook.formatting import format_currency, format_date, format_percentage
from cellarbook.repository import (
    fetch_inventory,
    fetch_ratings,
    fetch_social_rows,
    fetch_shopping_list,
    fetch_winery_visit_wines,
    fetch_winery_visits,
    fetch_wishlist,
    get_supabase_client,
)
from cellarbook.utils import configure_logging

console = Console()


def parse_day(value):
    """argparse type for --today."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}' (expected YYYY-MM-DD)")


def show_portfolio(inventory, currency):
    """Portfolio value panel plus the value-by-type table."""
    summary = portfolio.cellar_value(inventory)
    color = "green" if summary.gain_loss_cents >= 0 else "red"

    details = (
        f"[bold]Bottles:[/bold] {summary.total_bottles}\n"
        f"[bold]Market value:[/bold] {format_currency(summary.total_market_cents, currency)}\n"
        f"[bold]Cost basis:[/bold] {format_currency(summary.total_purchase_cents, currency)}\n"
        f"[bold]Gain/Loss:[/bold] [{color}]{format_currency(summary.gain_loss_cents, currency)} "
        f"({format_percentage(summary.gain_loss_percentage)})[/{color}]"
    )
    console.print(Panel(details, title="[bold]🍷 Portfolio[/bold]", border_style="magenta"))

    table = Table(title="Value by Type", box=box.ROUNDED, header_style="bold cyan")
    table.add_column("Type", style="cyan")
    table.add_column("Bottles", justify="right")
    table.add_column("Cost", justify="right")
    table.add_column("Market", justify="right")
    for wine_type, entry in portfolio.value_by_type(inventory).items():
        table.add_row(
            wine_type.title(),
            str(entry.bottles),
            format_currency(entry.purchase, currency, whole=True),
            format_currency(entry.market, currency, whole=True),
        )
    console.print(table)

    gainers = portfolio.top_gainers(inventory)
    if gainers:
        console.print("\n[bold]📈 Top gainers[/bold]")
        for gainer in gainers:
            console.print(
                f"  {gainer.name}: +{format_currency(gainer.gain_cents, currency)} "
                f"({format_percentage(gainer.gain_percentage)})"
            )


def show_drinking_and_spending(inventory, currency, today):
    drinking = analytics.drinking_stats(inventory, today)
    spending = analytics.spending_stats(inventory, today)

    table = Table(title="Last 12 Months", box=box.ROUNDED, header_style="bold cyan")
    table.add_column("Month", style="cyan")
    table.add_column("Consumed", justify="right")
    table.add_column("Bought", justify="right")
    table.add_column("Spent", justify="right")
    for consumed, spent in zip(drinking.by_month, spending.by_month):
        table.add_row(
            consumed.month,
            str(consumed.count),
            str(spent.bottles),
            format_currency(spent.amount, currency, whole=True),
        )
    console.print(table)

    console.print(
        f"Consumed this year: [bold]{drinking.consumed_this_year}[/bold]  "
        f"Favourite type: [bold]{drinking.favorite_type or '-'}[/bold]  "
        f"Favourite region: [bold]{drinking.favorite_region or '-'}[/bold]"
    )
    console.print(
        f"Spent this year: [bold]{format_currency(spending.spent_this_year, currency)}[/bold]  "
        f"Average bottle: [bold]{format_currency(spending.average_bottle_price, currency)}[/bold]"
    )
    if spending.most_expensive_bottle:
        bottle = spending.most_expensive_bottle
        console.print(f"Most expensive bottle: {bottle.name} ({format_currency(bottle.price, currency)})")

    return drinking, spending


def show_taste(ratings):
    profile = analytics.taste_profile(ratings)
    if profile is None:
        console.print("[yellow]No ratings yet[/yellow]")
        return None

    console.print(f"\n[bold]👅 Taste profile[/bold] ({profile.total_ratings} ratings, avg {profile.average_rating:.1f} pts)")
    for insight in profile.insights:
        console.print(f"  • {insight}")

    best = analytics.vintage_stats(ratings).best_vintages
    if best:
        console.print("[bold]Best vintages:[/bold] " + ", ".join(
            f"{entry.vintage} ({entry.avg_rating:.1f})" for entry in best
        ))
    return profile


def show_alerts(inventory, today):
    low_stock = alerts.low_stock_wines(inventory)
    ready = alerts.drinking_window_wines(inventory, today)
    peaking = alerts.approaching_peak_wines(inventory, today)

    console.print("\n[bold]🔔 Alerts[/bold]")
    console.print(f"  Low stock: {len(low_stock)}  Ready to drink: {len(ready)}  Drink soon: {len(peaking)}")
    for _, row in peaking.iterrows():
        name = next(
            (value for value in (row.get("wine_name"), row.get("custom_name")) if isinstance(value, str) and value),
            "Unknown",
        )
        console.print(f"  [yellow]⚠ {name}[/yellow] before {format_date(row.get('drink_before'))}")


def show_planning(sb, currency, today, validate=False):
    wishlist = planning.wishlist_stats(fetch_wishlist(sb, validate))
    shopping = planning.shopping_list_stats(fetch_shopping_list(sb, validate))
    visits = planning.winery_visit_stats(
        fetch_winery_visits(sb, validate), fetch_winery_visit_wines(sb, validate), today
    )

    table = Table(title="Planning", box=box.ROUNDED, header_style="bold cyan")
    table.add_column("List", style="cyan")
    table.add_column("Active", justify="right")
    table.add_column("Estimated cost", justify="right")
    table.add_row("Wishlist", str(wishlist.active), format_currency(wishlist.estimated_cost, currency))
    table.add_row("Shopping list", str(shopping.active), format_currency(shopping.estimated_cost, currency))
    console.print(table)

    console.print(
        f"Winery visits: {visits.total_visits} ({visits.unique_wineries} wineries, "
        f"{visits.this_year} this year), spent {format_currency(visits.total_spent, currency)}"
    )


def show_social(sb, user_id):
    stats = planning.social_stats(user_id, **fetch_social_rows(sb, user_id))
    console.print(
        f"Friends: {stats.friends_count} ({stats.pending_requests_count} pending)  "
        f"Shared tastings: {stats.shared_tastings_count}  Likes received: {stats.total_likes_received}"
    )


def save_charts(directory, drinking, spending, profile, inventory, currency):
    directory = Path(directory)
    saved = [
        charts.save_chart(charts.consumption_chart(drinking), directory / "consumption.html"),
        charts.save_chart(charts.spending_chart(spending, currency), directory / "spending.html"),
        charts.save_chart(charts.value_by_type_chart(portfolio.value_by_type(inventory)), directory / "value_by_type.html"),
    ]
    if profile is not None:
        saved.append(charts.save_chart(charts.rating_distribution_chart(profile), directory / "ratings.html"))

    for path in saved:
        console.print(f"[dim]  ✓ {path}[/dim]")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Print a report for your wine cellar")
    parser.add_argument("--cellar-id", help="Cellar to report on (default: CELLAR_ID)")
    parser.add_argument("--charts", metavar="DIR", help="Save charts as HTML into DIR")
    parser.add_argument("--today", type=parse_day, help="Report as of this date (YYYY-MM-DD)")
    parser.add_argument("--env-file", help="Path to a .env file")
    parser.add_argument("--user-id", help="Also show social stats for this user")
    parser.add_argument("--validate", action="store_true", help="Validate every fetched row before reporting")
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.env_file)
    except CellarbookError as e:
        console.print(f"[red]✗ {e}[/red]")
        return 1

    configure_logging(settings.log_level)
    today = args.today or date.today()
    currency = settings.currency

    try:
        sb = get_supabase_client(settings)
        inventory = fetch_inventory(sb, cellar_id=args.cellar_id or settings.cellar_id, validate=args.validate)
        ratings = fetch_ratings(sb, validate=args.validate)

        console.print(f"\n[bold]Cellar report[/bold] as of {format_date(today)}\n")
        show_portfolio(inventory, currency)
        drinking, spending = show_drinking_and_spending(inventory, currency, today)
        profile = show_taste(ratings)
        show_alerts(inventory, today)
        show_planning(sb, currency, today, args.validate)
        if args.user_id:
            show_social(sb, args.user_id)
    except CellarbookError as e:
        console.print(f"[red]✗ {e}[/red]")
        return 1

    if args.charts:
        console.print("\n[dim]Saving charts...[/dim]")
        save_charts(args.charts, drinking, spending, profile, inventory, currency)

    return 0


if __name__ == "__main__":
    sys.exit(main())
