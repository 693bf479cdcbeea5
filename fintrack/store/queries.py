"""Database query functions."""

import logging
import sqlite3
from datetime import date
from pathlib import Path
from typing import Any

from fintrack.domain.models import CategoryName, Description, Money, TransactionType
from fintrack.domain.transactions import from_minor_units, to_minor_units
from fintrack.store.errors import FetchFailedError, WriteFailedError
from fintrack.store.schema import get_db_path

logger = logging.getLogger(__name__)


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _row_to_record(row: sqlite3.Row) -> dict[str, Any]:
    record = dict(row)
    record["amount"] = from_minor_units(record["amount"])
    return record


def insert_transaction(
    amount: Money,
    txn_type: TransactionType,
    txn_date: date,
    category: CategoryName,
    description: Description = Description(""),
    db_path: Path | None = None,
) -> int:
    """Insert a transaction.

    Args:
        amount: Transaction amount (magnitude).
        txn_type: Income or Expense.
        txn_date: Calendar date.
        category: Category name.
        description: Optional description.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new transaction.

    Raises:
        WriteFailedError: If database operation fails.
    """
    try:
        with _connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO transactions (amount, date, type, category, description) VALUES (?, ?, ?, ?, ?)",
                (to_minor_units(amount), txn_date.isoformat(), txn_type.value, category, description),
            )
            txn_id = cursor.lastrowid
            conn.commit()
    except (sqlite3.Error, OverflowError) as e:
        logger.error("Failed to add transaction: %s", e)
        raise WriteFailedError(f"Failed to add transaction: {e}") from e

    logger.debug("Inserted transaction %s (%s %s %s)", txn_id, txn_type.value, amount, category)
    return int(txn_id)


def delete_transaction(txn_id: int, db_path: Path | None = None) -> bool:
    """Delete a transaction by ID.

    Args:
        txn_id: Transaction ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a transaction was deleted, False if no such ID.

    Raises:
        WriteFailedError: If database operation fails.
    """
    try:
        with _connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM transactions WHERE id = ?", (txn_id,))
            deleted = cursor.rowcount > 0
            conn.commit()
    except sqlite3.Error as e:
        logger.error("Failed to delete transaction %s: %s", txn_id, e)
        raise WriteFailedError(f"Failed to delete transaction {txn_id}: {e}") from e

    logger.debug("Delete transaction %s: %s", txn_id, "removed" if deleted else "not found")
    return deleted


def get_transactions(
    db_path: Path | None = None, since_date: str | None = None, until_date: str | None = None
) -> list[dict[str, Any]]:
    """Get transactions, optionally restricted to a date window.

    Args:
        db_path: Path to the database file. If None, uses default location.
        since_date: Optional start date (YYYY-MM-DD), inclusive.
        until_date: Optional end date (YYYY-MM-DD), exclusive.

    Returns:
        List of transaction records ordered by date then ID, amounts as Decimal.

    Raises:
        FetchFailedError: If database operation fails.
    """
    query = "SELECT id, amount, date, type, category, description FROM transactions WHERE 1 = 1"
    params: list[Any] = []

    if since_date:
        query += " AND date >= ?"
        params.append(since_date)
    if until_date:
        query += " AND date < ?"
        params.append(until_date)

    query += " ORDER BY date, id"

    try:
        with _connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            rows = cursor.fetchall()
    except sqlite3.Error as e:
        logger.error("Failed to fetch transactions: %s", e)
        raise FetchFailedError(f"Failed to fetch transactions: {e}") from e

    logger.debug("Fetched %d transactions (since=%s, until=%s)", len(rows), since_date, until_date)
    return [_row_to_record(row) for row in rows]
