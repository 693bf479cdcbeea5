"""Transaction management commands (add, delete, list)."""

import logging
import sys
from datetime import date

import pandas as pd
from rich.console import Console
from rich.table import Table

from fintrack.config import Settings
from fintrack.dates import current_month, format_display_date, month_range
from fintrack.domain.models import CategoryName, Description, MonthKey, TransactionType
from fintrack.domain.transactions import (
    InvalidTransactionError,
    Transaction,
    check_storable_amount,
    format_money_display,
    parse_amount,
    parse_transactions,
)
from fintrack.store import StoreError, delete_transaction, get_transactions, insert_transaction

console = Console()
logger = logging.getLogger(__name__)


def normalize_date_input(value: str | None) -> date:
    """Parse a user-entered date, defaulting to today.

    Raises:
        ValueError: If pandas cannot parse the value.
    """
    if not value:
        return date.today()
    return pd.to_datetime(value).date()


def load_transactions(settings: Settings, month: MonthKey | None = None) -> list[Transaction]:
    """Fetch and validate transactions, optionally for a single month.

    Raises:
        StoreError: If the store cannot be read.
        InvalidTransactionError: If a stored record is malformed.
        ValueError: If month is not YYYY-MM.
    """
    if month is None:
        records = get_transactions(settings.db_path)
    else:
        since_date, until_date, _ = month_range(month)
        records = get_transactions(settings.db_path, since_date, until_date)
    return parse_transactions(records)


def add_command(
    settings: Settings,
    amount: str,
    txn_type: TransactionType,
    category: str,
    txn_date: str | None = None,
    description: str = "",
) -> None:
    """Add a transaction.

    Args:
        settings: Loaded settings.
        amount: Amount as entered (magnitude, e.g. "12.50").
        txn_type: Income or Expense.
        category: Category from the configured list for the type.
        txn_date: Transaction date (YYYY-MM-DD, MM/DD/YYYY, ...). Defaults to today.
        description: Optional description.
    """
    try:
        parsed_amount = check_storable_amount(parse_amount(amount))
    except InvalidTransactionError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if parsed_amount < 0:
        console.print("[red]Amount must be positive; use --type to record an expense[/red]")
        sys.exit(1)

    try:
        normalized_date = normalize_date_input(txn_date)
    except (ValueError, OverflowError) as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, MM/DD/YYYY, etc.[/dim]")
        sys.exit(1)

    allowed = settings.categories_for(txn_type)
    if category not in allowed:
        console.print(f"[red]Unknown {txn_type.value} category '{category}'[/red]")
        console.print(f"[dim]Choose one of: {', '.join(allowed)}[/dim]")
        sys.exit(1)

    try:
        txn_id = insert_transaction(
            parsed_amount,
            txn_type,
            normalized_date,
            CategoryName(category),
            Description(description),
            settings.db_path,
        )
    except StoreError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Transaction added (ID: {txn_id}):")
    console.print(f"  Date: {format_display_date(normalized_date)}")
    console.print(f"  Type: {txn_type.value}")
    console.print(f"  Category: {category}")
    console.print(f"  Amount: {format_money_display(parsed_amount, settings.currency_symbol)}")
    if description:
        console.print(f"  Description: {description}")


def delete_command(settings: Settings, transaction_id: int) -> None:
    """Delete a transaction by ID."""
    try:
        deleted = delete_transaction(transaction_id, settings.db_path)
    except StoreError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    if not deleted:
        console.print(f"[red]Transaction {transaction_id} not found[/red]")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted transaction {transaction_id}")


def list_command(
    settings: Settings,
    month: str | None = None,
    all: bool = False,
) -> None:
    """List transactions for a month (default: current month) or all time."""
    try:
        report_month = None if all else MonthKey(month or current_month())
        transactions = load_transactions(settings, report_month)
    except ValueError as e:
        # InvalidTransactionError is a ValueError too
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except StoreError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    period = "All Time" if report_month is None else month_range(report_month)[2]
    table = Table(title=f"Transactions - {period} ({len(transactions)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Category", style="magenta")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")

    for txn in transactions:
        amount_display = format_money_display(txn.amount, settings.currency_symbol)
        if txn.type is TransactionType.EXPENSE:
            amount_display = f"[red]-{amount_display}[/red]"
        else:
            amount_display = f"[green]+{amount_display}[/green]"

        table.add_row(
            str(txn.id),
            format_display_date(txn.date),
            txn.type.value,
            txn.category,
            txn.description or "[dim]No description[/dim]",
            amount_display,
        )

    console.print(table)
    logger.debug("Listed %d transactions", len(transactions))
