"""Domain models and types for fintrack.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Aggregation logic separated from storage and rendering
"""

from fintrack.domain.models import (
    ZERO,
    CategoryName,
    Description,
    Money,
    MonthKey,
    TransactionType,
    WeekIndex,
)

__all__ = [
    "ZERO",
    "CategoryName",
    "Description",
    "Money",
    "MonthKey",
    "TransactionType",
    "WeekIndex",
]
