"""
Classification of transaction kinds and budget periods.
Matching is case-insensitive; anything unrecognized is neither.
"""

INCOME = 'income'
EXPENSE = 'expense'
WEEKLY = 'weekly'
MONTHLY = 'monthly'


def _matches(value, expected: str) -> bool:
    return isinstance(value, str) and value.lower() == expected


def is_income(kind) -> bool:
    return _matches(kind, INCOME)


def is_expense(kind) -> bool:
    return _matches(kind, EXPENSE)


def is_weekly(period_kind) -> bool:
    return _matches(period_kind, WEEKLY)


def is_monthly(period_kind) -> bool:
    return _matches(period_kind, MONTHLY)
