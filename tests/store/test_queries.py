"""Tests for fintrack.store against a temporary SQLite database."""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from fintrack.domain.models import CategoryName, Description, Money, TransactionType
from fintrack.domain.transactions import parse_transactions
from fintrack.store import (
    FetchFailedError,
    StoreError,
    WriteFailedError,
    database_exists,
    delete_transaction,
    get_transactions,
    init_database,
    insert_transaction,
)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "data" / "fintrack.db"
    init_database(path)
    return path


def add(db_path: Path, amount: str, day: str, txn_type: TransactionType, category: str, description: str = "") -> int:
    return insert_transaction(
        Money(Decimal(amount)),
        txn_type,
        date.fromisoformat(day),
        CategoryName(category),
        Description(description),
        db_path,
    )


class TestInitDatabase:
    """Tests for init_database."""

    def test_creates_file_and_parent_dirs(self, tmp_path: Path) -> None:
        """Should create the database and its directory."""
        path = tmp_path / "nested" / "dir" / "fintrack.db"

        init_database(path)

        assert database_exists(path)

    def test_is_idempotent(self, db_path: Path) -> None:
        """Should be safe to run on an existing database."""
        add(db_path, "5", "2024-03-01", TransactionType.EXPENSE, "Food")

        init_database(db_path)

        assert len(get_transactions(db_path)) == 1


class TestInsertTransaction:
    """Tests for insert_transaction."""

    def test_returns_new_ids(self, db_path: Path) -> None:
        """Should return increasing IDs."""
        first = add(db_path, "100", "2024-03-01", TransactionType.INCOME, "Job")
        second = add(db_path, "12.50", "2024-03-02", TransactionType.EXPENSE, "Food")

        assert second > first

    def test_round_trips_amount_exactly(self, db_path: Path) -> None:
        """Should store cents and read back the same Decimal amount."""
        add(db_path, "19.99", "2024-03-01", TransactionType.EXPENSE, "Shopping", "Shoes")

        [record] = get_transactions(db_path)

        assert record["amount"] == Decimal("19.99")
        assert record["date"] == "2024-03-01"
        assert record["type"] == "Expense"
        assert record["category"] == "Shopping"
        assert record["description"] == "Shoes"

    def test_missing_table_raises_write_failed(self, tmp_path: Path) -> None:
        """Should raise WriteFailedError when the schema is missing."""
        with pytest.raises(WriteFailedError):
            add(tmp_path / "empty.db", "1", "2024-03-01", TransactionType.EXPENSE, "Food")

    def test_amount_out_of_range_raises_write_failed(self, db_path: Path) -> None:
        """Should raise WriteFailedError when the cents value does not fit in SQLite."""
        with pytest.raises(WriteFailedError) as exc_info:
            add(db_path, "1e30", "2024-03-01", TransactionType.INCOME, "Job")

        assert isinstance(exc_info.value.__cause__, OverflowError)
        assert get_transactions(db_path) == []


class TestDeleteTransaction:
    """Tests for delete_transaction."""

    def test_deletes_existing(self, db_path: Path) -> None:
        """Should delete and report success."""
        txn_id = add(db_path, "100", "2024-03-01", TransactionType.INCOME, "Job")

        assert delete_transaction(txn_id, db_path) is True
        assert get_transactions(db_path) == []

    def test_unknown_id(self, db_path: Path) -> None:
        """Should report False for an unknown ID."""
        assert delete_transaction(999, db_path) is False


class TestGetTransactions:
    """Tests for get_transactions."""

    def test_orders_by_date_then_id(self, db_path: Path) -> None:
        """Should return records ordered by date, then insertion."""
        late = add(db_path, "1", "2024-03-20", TransactionType.EXPENSE, "Food")
        early = add(db_path, "2", "2024-03-01", TransactionType.EXPENSE, "Food")
        same_day = add(db_path, "3", "2024-03-01", TransactionType.INCOME, "Job")

        assert [r["id"] for r in get_transactions(db_path)] == [early, same_day, late]

    def test_filters_by_window(self, db_path: Path) -> None:
        """Should include since_date and exclude until_date."""
        add(db_path, "1", "2024-02-29", TransactionType.EXPENSE, "Food")
        inside = add(db_path, "2", "2024-03-01", TransactionType.EXPENSE, "Food")
        last = add(db_path, "3", "2024-03-31", TransactionType.EXPENSE, "Food")
        add(db_path, "4", "2024-04-01", TransactionType.EXPENSE, "Food")

        records = get_transactions(db_path, "2024-03-01", "2024-04-01")

        assert [r["id"] for r in records] == [inside, last]

    def test_records_parse_as_transactions(self, db_path: Path) -> None:
        """Should return records that satisfy the parser's input contract."""
        add(db_path, "100", "2024-03-01", TransactionType.INCOME, "Job")

        [txn] = parse_transactions(get_transactions(db_path))

        assert txn.type is TransactionType.INCOME
        assert txn.amount == Decimal("100")
        assert txn.date == date(2024, 3, 1)

    def test_missing_table_raises_fetch_failed(self, tmp_path: Path) -> None:
        """Should raise FetchFailedError chained from the sqlite error."""
        with pytest.raises(FetchFailedError) as exc_info:
            get_transactions(tmp_path / "empty.db")

        assert isinstance(exc_info.value, StoreError)
        assert exc_info.value.__cause__ is not None
