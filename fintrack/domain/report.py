"""Pure functions for report calculations and aggregations.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Every category mapping is built in first-seen order, and every "biggest" or
"top" choice walks that order and replaces only on a strictly greater amount,
so ties go to the category seen first.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from fintrack.dates import month_key, week_of_month
from fintrack.domain.models import ZERO, CategoryName, Money, MonthKey, TransactionType, WeekIndex
from fintrack.domain.transactions import Transaction

CategorizedTransactions = dict[TransactionType, dict[CategoryName, tuple[Transaction, ...]]]


@dataclass(frozen=True)
class TopCategory:
    """Immutable category/amount pair for the largest category in a bucket."""

    name: CategoryName = CategoryName("")
    amount: Money = ZERO


@dataclass(frozen=True)
class MonthlyOverview:
    """Immutable per-month totals and biggest categories."""

    total_income: Money
    total_expense: Money
    net: Money
    biggest_income_category: CategoryName
    biggest_income_amount: Money
    biggest_expense_category: CategoryName
    biggest_expense_amount: Money


@dataclass(frozen=True)
class MonthReport:
    """Immutable month bucket: transactions by type and category, plus overview."""

    month: MonthKey
    data: CategorizedTransactions
    overview: MonthlyOverview


@dataclass(frozen=True)
class WeekSummary:
    """Immutable week bucket for a single transaction type."""

    total_amount: Money
    categories: dict[CategoryName, Money]
    top_category: TopCategory


@dataclass(frozen=True)
class WeeklyReport:
    """Immutable weekly summaries for income and expenses."""

    income: dict[WeekIndex, WeekSummary]
    expense: dict[WeekIndex, WeekSummary]

    def for_type(self, txn_type: TransactionType) -> dict[WeekIndex, WeekSummary]:
        return self.income if txn_type is TransactionType.INCOME else self.expense


@dataclass(frozen=True)
class MonthSummary:
    """Immutable headline totals for one month with ranked categories."""

    total_income: Money
    total_expense: Money
    net_balance: Money
    income_by_category: list[tuple[CategoryName, Money]]
    expense_by_category: list[tuple[CategoryName, Money]]


def sum_amounts(transactions: Iterable[Transaction]) -> Money:
    """Sum transaction amounts."""
    return Money(sum((txn.amount for txn in transactions), ZERO))


def pick_biggest(totals: Mapping[CategoryName, Money]) -> TopCategory:
    """Find the category with the strictly largest total.

    Args:
        totals: Category totals in first-seen order.

    Returns:
        TopCategory for the first category holding the maximum, or an empty
        name with zero amount if no total is above zero.
    """
    top = TopCategory()
    for category, amount in totals.items():
        if amount > top.amount:
            top = TopCategory(name=category, amount=amount)
    return top


def rank_categories(totals: Mapping[CategoryName, Money]) -> list[tuple[CategoryName, Money]]:
    """Sort category totals largest first.

    The sort is stable, so categories with equal totals keep first-seen order.
    """
    return sorted(totals.items(), key=lambda x: x[1], reverse=True)


def total_by_category(transactions: Iterable[Transaction]) -> dict[CategoryName, Money]:
    """Sum amounts per category, keyed in first-seen order."""
    totals: dict[CategoryName, Money] = {}
    for txn in transactions:
        totals[txn.category] = Money(totals.get(txn.category, ZERO) + txn.amount)
    return totals


def group_by_month(transactions: Iterable[Transaction]) -> dict[MonthKey, CategorizedTransactions]:
    """Partition transactions by month, then type, then category.

    Args:
        transactions: Transactions in any order.

    Returns:
        Months in first-seen order. Each month always has both type keys;
        each category holds its transactions in input order.
    """
    grouped: dict[MonthKey, dict[TransactionType, dict[CategoryName, list[Transaction]]]] = {}

    for txn in transactions:
        by_type = grouped.setdefault(
            month_key(txn.date),
            {TransactionType.INCOME: {}, TransactionType.EXPENSE: {}},
        )
        by_type[txn.type].setdefault(txn.category, []).append(txn)

    return {
        month: {txn_type: {cat: tuple(txns) for cat, txns in cats.items()} for txn_type, cats in by_type.items()}
        for month, by_type in grouped.items()
    }


def compute_overview(categorized: CategorizedTransactions) -> MonthlyOverview:
    """Reduce one month's categorized transactions to an overview.

    Args:
        categorized: Transactions by type and category for one month.

    Returns:
        MonthlyOverview with totals, net and biggest categories.
    """
    income_totals = {cat: sum_amounts(txns) for cat, txns in categorized.get(TransactionType.INCOME, {}).items()}
    expense_totals = {cat: sum_amounts(txns) for cat, txns in categorized.get(TransactionType.EXPENSE, {}).items()}

    total_income = Money(sum(income_totals.values(), ZERO))
    total_expense = Money(sum(expense_totals.values(), ZERO))

    biggest_income = pick_biggest(income_totals)
    biggest_expense = pick_biggest(expense_totals)

    return MonthlyOverview(
        total_income=total_income,
        total_expense=total_expense,
        net=Money(total_income - total_expense),
        biggest_income_category=biggest_income.name,
        biggest_income_amount=biggest_income.amount,
        biggest_expense_category=biggest_expense.name,
        biggest_expense_amount=biggest_expense.amount,
    )


def build_monthly_report(transactions: Iterable[Transaction]) -> dict[MonthKey, MonthReport]:
    """Group the full transaction history by month and compute overviews.

    Args:
        transactions: Transactions in any order.

    Returns:
        MonthReport per month, in first-seen order. Empty input gives an
        empty dict.
    """
    return {
        month: MonthReport(month=month, data=categorized, overview=compute_overview(categorized))
        for month, categorized in group_by_month(transactions).items()
    }


def sorted_month_keys(report: Mapping[MonthKey, Any], newest_first: bool = True) -> list[MonthKey]:
    """Order month keys for display."""
    return sorted(report.keys(), reverse=newest_first)


def summarize_weeks(
    transactions: Iterable[Transaction],
    txn_type: TransactionType,
) -> dict[WeekIndex, WeekSummary]:
    """Summarize one transaction type by week of month.

    The top category of a week is replaced whenever a category's running
    total strictly exceeds the current top amount.

    Args:
        transactions: Transactions for a single calendar month.
        txn_type: Which type to summarize.

    Returns:
        WeekSummary per week index, in first-seen order. Weeks with no
        transactions of this type are absent.
    """
    totals: dict[WeekIndex, Money] = {}
    categories: dict[WeekIndex, dict[CategoryName, Money]] = {}
    tops: dict[WeekIndex, TopCategory] = {}

    for txn in transactions:
        if txn.type is not txn_type:
            continue

        week = week_of_month(txn.date)
        week_categories = categories.setdefault(week, {})
        totals[week] = Money(totals.get(week, ZERO) + txn.amount)

        running = Money(week_categories.get(txn.category, ZERO) + txn.amount)
        week_categories[txn.category] = running

        top = tops.setdefault(week, TopCategory())
        if running > top.amount:
            tops[week] = TopCategory(name=txn.category, amount=running)

    return {
        week: WeekSummary(total_amount=totals[week], categories=categories[week], top_category=tops[week])
        for week in totals
    }


def build_weekly_report(transactions: Sequence[Transaction]) -> WeeklyReport:
    """Summarize a single month's transactions by week for both types."""
    return WeeklyReport(
        income=summarize_weeks(transactions, TransactionType.INCOME),
        expense=summarize_weeks(transactions, TransactionType.EXPENSE),
    )


def create_month_summary(transactions: Sequence[Transaction]) -> MonthSummary:
    """Create headline totals and ranked categories for one month.

    Args:
        transactions: Transactions for a single calendar month.

    Returns:
        MonthSummary with totals, net balance and categories largest first.
    """
    income = [txn for txn in transactions if txn.type is TransactionType.INCOME]
    expenses = [txn for txn in transactions if txn.type is TransactionType.EXPENSE]

    total_income = sum_amounts(income)
    total_expense = sum_amounts(expenses)

    return MonthSummary(
        total_income=total_income,
        total_expense=total_expense,
        net_balance=Money(total_income - total_expense),
        income_by_category=rank_categories(total_by_category(income)),
        expense_by_category=rank_categories(total_by_category(expenses)),
    )


def calculate_histogram_bar_length(
    amount: Money,
    max_amount: Money,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    return {
        "id": txn.id,
        "amount": txn.amount,
        "date": txn.date.isoformat(),
        "type": txn.type.value,
        "category": txn.category,
        "description": txn.description,
    }


def overview_to_dict(overview: MonthlyOverview) -> dict[str, Any]:
    return {
        "totalIncome": overview.total_income,
        "totalExpense": overview.total_expense,
        "net": overview.net,
        "biggestIncomeCategory": overview.biggest_income_category,
        "biggestIncomeAmount": overview.biggest_income_amount,
        "biggestExpenseCategory": overview.biggest_expense_category,
        "biggestExpenseAmount": overview.biggest_expense_amount,
    }


def monthly_report_to_dict(report: Mapping[MonthKey, MonthReport]) -> dict[str, Any]:
    """Convert a monthly report to plain dicts with camelCase keys.

    Amounts stay Decimal; callers choose how to encode them.
    """
    return {
        month: {
            "data": {
                txn_type.value: {
                    cat: [transaction_to_dict(txn) for txn in txns] for cat, txns in month_report.data[txn_type].items()
                }
                for txn_type in TransactionType
            },
            "overview": overview_to_dict(month_report.overview),
        }
        for month, month_report in report.items()
    }


def weekly_report_to_dict(report: WeeklyReport) -> dict[str, Any]:
    """Convert a weekly report to plain dicts with camelCase keys."""
    return {
        txn_type.value: {
            week: {
                "totalAmount": summary.total_amount,
                "categories": dict(summary.categories),
                "topCategory": {"name": summary.top_category.name, "amount": summary.top_category.amount},
            }
            for week, summary in report.for_type(txn_type).items()
        }
        for txn_type in TransactionType
    }
