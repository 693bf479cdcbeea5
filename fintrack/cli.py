"""CLI entry point for fintrack."""

import typer
from rich.console import Console

from fintrack.commands.admin import backup_command, init_command
from fintrack.commands.report import overview_command, summary_command, weekly_command
from fintrack.commands.transactions import add_command, delete_command, list_command
from fintrack.config import ConfigError, Settings, load_settings
from fintrack.domain.models import TransactionType
from fintrack.log import configure_logging

app = typer.Typer(
    name="fintrack",
    help="fintrack - track your income and expenses",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """fintrack - track your income and expenses."""
    try:
        settings = load_settings()
        configure_logging("DEBUG" if verbose else settings.log_level)
    except (ConfigError, ValueError) as e:
        console.print(f"[red]Config error: {e}[/red]", style="bold")
        raise typer.Exit(1)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj


@app.command(name="init")
def init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize fintrack database and configuration."""
    init_command(_settings(ctx), force)


@app.command(name="backup")
def backup(
    ctx: typer.Context,
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: next to the database)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(_settings(ctx), output_dir)


@app.command()
def add(
    ctx: typer.Context,
    amount: str = typer.Argument(..., help="Amount, e.g. 12.50"),
    txn_type: TransactionType = typer.Option(..., "--type", "-t", help="Income or Expense"),
    category: str = typer.Option(..., "--category", "-c", help="Category for the transaction type"),
    date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: today)"),
    description: str = typer.Option("", "--description", help="Optional description"),
) -> None:
    """Add an income or expense transaction."""
    add_command(_settings(ctx), amount, txn_type, category, date, description)


@app.command()
def delete(
    ctx: typer.Context,
    transaction_id: int = typer.Argument(..., help="Transaction ID (from 'fintrack list')"),
) -> None:
    """Delete a transaction."""
    delete_command(_settings(ctx), transaction_id)


@app.command(name="list")
def list_transactions(
    ctx: typer.Context,
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
) -> None:
    """List your transactions for the current month."""
    list_command(_settings(ctx), month, all)


@app.command()
def summary(
    ctx: typer.Context,
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    histogram: bool = typer.Option(True, help="Show histogram of your categories"),
) -> None:
    """Show totals, net balance and top categories for the month."""
    summary_command(_settings(ctx), month, histogram)


@app.command()
def weekly(
    ctx: typer.Context,
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    as_json: bool = typer.Option(False, "--json", help="Print the weekly report as JSON"),
) -> None:
    """Show income and expenses by week of the month."""
    weekly_command(_settings(ctx), month, as_json)


@app.command()
def overview(
    ctx: typer.Context,
    oldest_first: bool = typer.Option(False, "--oldest-first", help="Show oldest months first"),
    as_json: bool = typer.Option(False, "--json", help="Print the monthly report as JSON"),
) -> None:
    """Show every month with totals and biggest categories."""
    overview_command(_settings(ctx), oldest_first, as_json)


if __name__ == "__main__":
    app()
