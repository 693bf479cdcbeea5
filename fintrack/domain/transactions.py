"""Pure functions for validating transaction records at the boundary.

This module contains the functional core for transaction records:
- No I/O operations (no database, no console, no files)
- No side effects
- Raw records in, immutable Transaction values out

Malformed records are rejected with InvalidTransactionError; nothing is
skipped silently.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from fintrack.domain.models import CategoryName, Description, Money, TransactionType

# PascalCase column names from exported data, mapped to record field names
FIELD_ALIASES: dict[str, str] = {
    "TransactionID": "id",
    "Amount": "amount",
    "TransactionDate": "date",
    "TransactionType": "type",
    "Category": "category",
    "Description": "description",
}

MINOR_UNITS = 100

# SQLite INTEGER is a signed 64-bit value
MAX_MINOR_UNITS = 2**63 - 1


class InvalidTransactionError(ValueError):
    """A transaction record could not be parsed."""

    def __init__(self, reason: str, record: Mapping[str, Any] | None = None) -> None:
        self.reason = reason
        self.record = record
        super().__init__(reason)


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction data."""

    id: int
    amount: Money
    date: date
    type: TransactionType
    category: CategoryName
    description: Description = Description("")


def parse_amount(value: Any) -> Money:
    """Parse a currency amount into Money.

    Args:
        value: Decimal, int, float or numeric string.

    Returns:
        Amount as a Decimal.

    Raises:
        InvalidTransactionError: If the value is missing or not a finite number.
    """
    if value is None or isinstance(value, bool):
        raise InvalidTransactionError(f"Invalid amount: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidTransactionError(f"Invalid amount: {value!r}") from None
    if not amount.is_finite():
        raise InvalidTransactionError(f"Invalid amount: {value!r}")
    return Money(amount)


def check_storable_amount(amount: Money) -> Money:
    """Check that an amount can be stored as whole cents without loss.

    Raises:
        InvalidTransactionError: If the amount has fractions of a cent or
            is too large to store.
    """
    if abs(amount) * MINOR_UNITS > MAX_MINOR_UNITS:
        raise InvalidTransactionError(f"Amount too large: {amount}")
    cents = amount * MINOR_UNITS
    if cents != cents.to_integral_value():
        raise InvalidTransactionError(f"Amount has fractions of a cent: {amount}")
    return amount


def parse_id(value: Any) -> int:
    """Parse a transaction ID.

    Raises:
        InvalidTransactionError: For booleans, non-integral numbers and
            anything int() cannot convert.
    """
    if isinstance(value, bool):
        raise InvalidTransactionError(f"Invalid id: {value!r}")
    try:
        txn_id = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidTransactionError(f"Invalid id: {value!r}") from None
    if not isinstance(value, str) and txn_id != value:
        raise InvalidTransactionError(f"Invalid id: {value!r}")
    return txn_id


def parse_date(value: Any) -> date:
    """Parse a calendar date.

    Args:
        value: date, datetime, or a string starting with YYYY-MM-DD
            (e.g. "2024-03-01" or "2024-03-01T00:00:00.000Z").

    Returns:
        The calendar date. Time of day and timezone are discarded.

    Raises:
        InvalidTransactionError: If the value is not a recognisable date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise InvalidTransactionError(f"Invalid date: {value!r}")


def parse_transaction_type(value: Any) -> TransactionType:
    """Parse "Income" or "Expense".

    Raises:
        InvalidTransactionError: For any other value.
    """
    try:
        return TransactionType(value)
    except ValueError:
        raise InvalidTransactionError(f"Invalid transaction type: {value!r}") from None


def normalize_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Map PascalCase column names onto record field names."""
    return {FIELD_ALIASES.get(key, key): value for key, value in record.items()}


def parse_transaction(record: Mapping[str, Any]) -> Transaction:
    """Parse a raw record into a Transaction.

    Args:
        record: Mapping with id, amount, date, type, category and optional
            description (PascalCase column names are accepted too).

    Returns:
        Immutable Transaction.

    Raises:
        InvalidTransactionError: If any field is missing or malformed.
    """
    fields = normalize_record(record)

    if "id" not in fields:
        raise InvalidTransactionError("Missing id", record)

    category = fields.get("category")
    if not isinstance(category, str):
        raise InvalidTransactionError(f"Invalid category: {category!r}", record)

    description = fields.get("description") or ""

    try:
        return Transaction(
            id=parse_id(fields["id"]),
            amount=parse_amount(fields.get("amount")),
            date=parse_date(fields.get("date")),
            type=parse_transaction_type(fields.get("type")),
            category=CategoryName(category),
            description=Description(str(description)),
        )
    except InvalidTransactionError as e:
        raise InvalidTransactionError(e.reason, record) from None


def parse_transactions(records: Iterable[Mapping[str, Any]]) -> list[Transaction]:
    """Parse raw records, preserving order.

    Raises:
        InvalidTransactionError: On the first malformed record.
    """
    return [parse_transaction(record) for record in records]


def to_minor_units(amount: Money) -> int:
    """Convert an amount to integer cents for storage."""
    return int((amount * MINOR_UNITS).to_integral_value())


def from_minor_units(cents: int) -> Money:
    """Convert stored integer cents back to an amount."""
    return Money(Decimal(cents) / MINOR_UNITS)


def format_money_display(amount: Money, symbol: str = "$", include_sign: bool = False) -> str:
    """Format money amount for display.

    Args:
        amount: Amount in major units.
        symbol: Currency symbol.
        include_sign: Whether to include + or - sign.

    Returns:
        Formatted string (e.g., "$1,234.50" or "-$12.00").
    """
    formatted = f"{symbol}{abs(amount):,.2f}"

    if amount < 0:
        return f"-{formatted}"
    if include_sign:
        return f"+{formatted}"
    return formatted
