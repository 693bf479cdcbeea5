"""Tests for fintrack.domain.report weekly aggregation."""

from datetime import date
from decimal import Decimal

from fintrack.domain.models import CategoryName, Money, TransactionType
from fintrack.domain.report import (
    TopCategory,
    WeekSummary,
    build_weekly_report,
    summarize_weeks,
    weekly_report_to_dict,
)
from fintrack.domain.transactions import Transaction

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


def txn(txn_id: int, amount: str, day: str, txn_type: TransactionType, category: str) -> Transaction:
    return Transaction(
        id=txn_id,
        amount=Money(Decimal(amount)),
        date=date.fromisoformat(day),
        type=txn_type,
        category=CategoryName(category),
    )


def march_2024() -> list[Transaction]:
    # March 2024 starts on a Friday: week 0 is the 1st-2nd, week 1 starts Sunday the 3rd
    return [
        txn(1, "100", "2024-03-01", INCOME, "Job"),
        txn(2, "10", "2024-03-02", EXPENSE, "Food"),
        txn(3, "15", "2024-03-02", EXPENSE, "Shopping"),
        txn(4, "10", "2024-03-03", EXPENSE, "Food"),
        txn(5, "5", "2024-03-04", EXPENSE, "Food"),
        txn(6, "15", "2024-03-05", EXPENSE, "Subscriptions"),
        txn(7, "5", "2024-03-10", EXPENSE, "Shopping"),
        txn(8, "10", "2024-03-11", EXPENSE, "Food"),
        txn(9, "5", "2024-03-12", EXPENSE, "Shopping"),
        txn(10, "40", "2024-03-13", INCOME, "Business"),
        txn(11, "7", "2024-03-31", EXPENSE, "Food"),
    ]


class TestSummarizeWeeks:
    """Tests for summarize_weeks."""

    def test_buckets_by_week_of_month(self) -> None:
        """Should group expenses into Sunday-starting week buckets."""
        weeks = summarize_weeks(march_2024(), EXPENSE)

        assert list(weeks.keys()) == [0, 1, 2, 5]

    def test_week_totals_and_categories(self) -> None:
        """Should sum per week and per category."""
        weeks = summarize_weeks(march_2024(), EXPENSE)

        assert weeks[0] == WeekSummary(
            total_amount=Decimal("25"),
            categories={"Food": Decimal("10"), "Shopping": Decimal("15")},
            top_category=TopCategory(name="Shopping", amount=Decimal("15")),
        )
        assert weeks[1].total_amount == Decimal("30")
        assert weeks[1].categories == {"Food": Decimal("15"), "Subscriptions": Decimal("15")}

    def test_tie_keeps_current_top(self) -> None:
        """Should only replace the top category on a strictly greater running total."""
        weeks = summarize_weeks(march_2024(), EXPENSE)

        # Food reaches 15 before Subscriptions does
        assert weeks[1].top_category == TopCategory(name="Food", amount=Decimal("15"))

    def test_top_follows_running_totals(self) -> None:
        """Should keep the category that reached the top amount first."""
        weeks = summarize_weeks(march_2024(), EXPENSE)

        # Shopping 5, Food 10, Shopping 10: Shopping only ties Food's running total
        assert weeks[2].categories == {"Shopping": Decimal("10"), "Food": Decimal("10")}
        assert weeks[2].top_category.name == "Food"

    def test_fifth_and_sixth_weeks_are_kept(self) -> None:
        """Should not drop transactions after the fourth week."""
        weeks = summarize_weeks(march_2024(), EXPENSE)

        assert weeks[5].total_amount == Decimal("7")
        assert sum(week.total_amount for week in weeks.values()) == Decimal("82")

    def test_filters_by_type(self) -> None:
        """Should ignore transactions of the other type."""
        weeks = summarize_weeks(march_2024(), INCOME)

        assert list(weeks.keys()) == [0, 2]
        assert weeks[0].top_category == TopCategory(name="Job", amount=Decimal("100"))
        assert weeks[2].categories == {"Business": Decimal("40")}

    def test_zero_amount_has_no_top(self) -> None:
        """Should leave the top category empty when nothing exceeds zero."""
        weeks = summarize_weeks([txn(1, "0", "2024-03-01", EXPENSE, "Other")], EXPENSE)

        assert weeks[0].top_category == TopCategory()

    def test_empty(self) -> None:
        """Should return an empty mapping."""
        assert summarize_weeks([], EXPENSE) == {}


class TestBuildWeeklyReport:
    """Tests for build_weekly_report."""

    def test_both_types(self) -> None:
        """Should summarize income and expenses independently."""
        report = build_weekly_report(march_2024())

        assert set(report.income.keys()) == {0, 2}
        assert set(report.expense.keys()) == {0, 1, 2, 5}
        assert report.for_type(INCOME) is report.income
        assert report.for_type(EXPENSE) is report.expense

    def test_idempotent(self) -> None:
        """Should give equal output on repeated calls."""
        transactions = march_2024()

        assert build_weekly_report(transactions) == build_weekly_report(transactions)

    def test_to_dict(self) -> None:
        """Should produce the camelCase weekly contract."""
        report = build_weekly_report([txn(1, "100", "2024-03-01", INCOME, "Job")])

        assert weekly_report_to_dict(report) == {
            "Income": {
                0: {
                    "totalAmount": Decimal("100"),
                    "categories": {"Job": Decimal("100")},
                    "topCategory": {"name": "Job", "amount": Decimal("100")},
                }
            },
            "Expense": {},
        }
