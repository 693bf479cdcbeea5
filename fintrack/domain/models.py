"""Domain type definitions for fintrack.

These types provide semantic clarity and help with type checking:
- Money: Currency amount as a Decimal (major units, e.g. dollars)
- MonthKey: Month in YYYY-MM format
- WeekIndex: Zero-based week-of-month bucket
- CategoryName: Name of an income or expense category
- Description: Transaction description text
- TransactionType: Income or Expense
"""

from decimal import Decimal
from enum import Enum
from typing import NewType

# Amounts are Decimals so sums never pick up floating point error
Money = NewType("Money", Decimal)

# MonthKey is always in YYYY-MM format (e.g., "2025-01")
MonthKey = NewType("MonthKey", str)

# Week of month, 0 for the week containing the 1st
WeekIndex = NewType("WeekIndex", int)

CategoryName = NewType("CategoryName", str)

Description = NewType("Description", str)

ZERO = Money(Decimal("0"))


class TransactionType(str, Enum):
    """Direction of a transaction. Amounts are magnitudes; the type carries the sign."""

    INCOME = "Income"
    EXPENSE = "Expense"

    def __str__(self) -> str:
        return self.value
