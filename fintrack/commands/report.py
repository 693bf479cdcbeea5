"""Report commands: month summary, weekly breakdown and monthly overview."""

import json
import sys
from decimal import Decimal
from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

from fintrack.commands.transactions import load_transactions
from fintrack.config import Settings
from fintrack.dates import current_month, format_display_date, month_range, weeks_in_month
from fintrack.domain.models import Money, MonthKey, TransactionType
from fintrack.domain.report import (
    MonthReport,
    WeekSummary,
    build_monthly_report,
    build_weekly_report,
    calculate_histogram_bar_length,
    create_month_summary,
    monthly_report_to_dict,
    rank_categories,
    sorted_month_keys,
    weekly_report_to_dict,
)
from fintrack.domain.transactions import format_money_display
from fintrack.store import StoreError

console = Console()

CENT = Decimal("0.01")

TYPE_STYLES = {
    TransactionType.INCOME: "green",
    TransactionType.EXPENSE: "red",
}


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]", style="bold")
    sys.exit(1)


def _json_number(value: object) -> int | float:
    """Encode a Decimal amount as a JSON number with its cents digits intact."""
    if not isinstance(value, Decimal):
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
    cents = value.quantize(CENT)
    if cents == cents.to_integral_value():
        return int(cents)
    # float repr keeps up to 15 significant digits unchanged
    return float(cents)


def _print_json(payload: dict) -> None:
    typer.echo(json.dumps(payload, default=_json_number, indent=2))


def render_category_lines(
    ranked: list[tuple[str, Money]],
    symbol: str,
    histogram: bool,
    bar_width: int = 30,
) -> None:
    """Render ranked category lines, optionally with histogram bars."""
    max_amount = ranked[0][1] if ranked else Money(0)

    for category, amount in ranked:
        amount_display = format_money_display(amount, symbol)
        if histogram:
            bar = "█" * calculate_histogram_bar_length(amount, max_amount, bar_width)
            console.print(f"  {category:20} {amount_display:>12} {bar}")
        else:
            console.print(f"  {category}: {amount_display}")


def summary_command(settings: Settings, month: str | None = None, histogram: bool = True) -> None:
    """Show totals, net balance and categories for a month."""
    report_month = MonthKey(month or current_month())

    try:
        _, _, period = month_range(report_month)
        transactions = load_transactions(settings, report_month)
    except (ValueError, StoreError) as e:
        _fail(str(e))

    if not transactions:
        console.print(f"[dim]No transactions for {period}[/dim]")
        return

    summary = create_month_summary(transactions)
    symbol = settings.currency_symbol

    console.print(f"[bold cyan]{period}[/bold cyan]\n")

    console.print(f"  [bold]Total income:[/bold] [green]{format_money_display(summary.total_income, symbol)}[/green]")
    console.print(f"  [bold]Total expenses:[/bold] [red]{format_money_display(summary.total_expense, symbol)}[/red]")
    net_style = "green" if summary.net_balance >= 0 else "red"
    console.print(
        f"  [bold]Net balance:[/bold] [{net_style}]{format_money_display(summary.net_balance, symbol)}[/{net_style}]\n"
    )

    if summary.income_by_category:
        console.print("[bold green]Income by category:[/bold green]\n")
        render_category_lines(summary.income_by_category, symbol, histogram)
        console.print()

    if summary.expense_by_category:
        console.print("[bold red]Expenses by category:[/bold red]\n")
        render_category_lines(summary.expense_by_category, symbol, histogram)


def render_week_cell(summary: WeekSummary | None, symbol: str) -> tuple[str, str, str]:
    """Format total, top category and category list for one week and type."""
    if summary is None:
        return format_money_display(Money(0), symbol), "[dim]-[/dim]", ""

    top = summary.top_category
    top_display = f"{top.name} ({format_money_display(top.amount, symbol)})" if top.name else "[dim]-[/dim]"
    categories = "\n".join(
        f"{cat}: {format_money_display(amount, symbol)}" for cat, amount in rank_categories(summary.categories)
    )
    return format_money_display(summary.total_amount, symbol), top_display, categories


def weekly_command(settings: Settings, month: str | None = None, as_json: bool = False) -> None:
    """Show income and expenses by week of month."""
    report_month = MonthKey(month or current_month())

    try:
        _, _, period = month_range(report_month)
        week_count = weeks_in_month(report_month)
        transactions = load_transactions(settings, report_month)
    except (ValueError, StoreError) as e:
        _fail(str(e))

    report = build_weekly_report(transactions)

    if as_json:
        _print_json(weekly_report_to_dict(report))
        return

    symbol = settings.currency_symbol

    for txn_type in TransactionType:
        style = TYPE_STYLES[txn_type]
        table = Table(title=f"{txn_type.value} by week - {period}", title_style=f"bold {style}")
        table.add_column("Week", justify="right")
        table.add_column("Total", justify="right", style=style)
        table.add_column("Top category")
        table.add_column("Categories")

        weeks = report.for_type(txn_type)
        for week in range(week_count):
            total, top, categories = render_week_cell(weeks.get(week), symbol)
            table.add_row(f"Week {week + 1}", total, top, categories)

        console.print(table)


def render_month(month_report: MonthReport, symbol: str) -> None:
    """Render one month: transactions by type and category, then the overview."""
    overview = month_report.overview
    _, _, label = month_range(month_report.month)

    console.print(f"\n[bold cyan]Month: {month_report.month} ({label})[/bold cyan]")

    for txn_type in TransactionType:
        categorized = month_report.data[txn_type]
        if not categorized:
            continue

        style = TYPE_STYLES[txn_type]
        table = Table(title=txn_type.value, title_style=f"bold {style}", title_justify="left")
        table.add_column("Category", style="magenta")
        table.add_column("Date", style="cyan")
        table.add_column("Description")
        table.add_column("Amount", justify="right", style=style)

        for category, txns in categorized.items():
            for txn in txns:
                table.add_row(
                    category,
                    format_display_date(txn.date),
                    txn.description or "[dim]No description[/dim]",
                    format_money_display(txn.amount, symbol),
                )

        console.print(table)

    net_label = "Positive" if overview.net >= 0 else "Negative"
    console.print(f"  Total income: {format_money_display(overview.total_income, symbol)}")
    console.print(f"  Total expense: {format_money_display(overview.total_expense, symbol)}")
    console.print(f"  Net: {format_money_display(overview.net, symbol)} ({net_label})")
    if overview.biggest_income_category:
        console.print(
            f"  Biggest income category: {overview.biggest_income_category} "
            f"({format_money_display(overview.biggest_income_amount, symbol)})"
        )
    if overview.biggest_expense_category:
        console.print(
            f"  Biggest expense category: {overview.biggest_expense_category} "
            f"({format_money_display(overview.biggest_expense_amount, symbol)})"
        )


def overview_command(settings: Settings, oldest_first: bool = False, as_json: bool = False) -> None:
    """Show every month with its transactions, totals and biggest categories."""
    try:
        transactions = load_transactions(settings)
    except (ValueError, StoreError) as e:
        _fail(str(e))

    report = build_monthly_report(transactions)

    if as_json:
        _print_json(monthly_report_to_dict(report))
        return

    if not report:
        console.print("[dim]No transactions yet[/dim]")
        return

    for month in sorted_month_keys(report, newest_first=not oldest_first):
        render_month(report[month], settings.currency_symbol)
