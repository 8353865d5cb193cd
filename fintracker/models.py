"""
Record types for the finance tracker: transactions, budgets, saving goals
and the FinancialData collection that holds them.

Dict forms use the camelCase keys of the persisted JSON document.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Dict, List

import pandas as pd

from .classifier import is_monthly, is_weekly
from .errors import MalformedInputError


DATE_FORMATS = [
    '%Y-%m-%d',      # 2024-01-30
    '%Y/%m/%d',      # 2024/01/30
    '%d.%m.%Y',      # 30.01.2024
    '%d/%m/%Y',      # 30/01/2024
]


def parse_date(date_val) -> date:
    """Parse a calendar date from the values found in imports and stored files."""
    if date_val is None or (pd.api.types.is_scalar(date_val) and pd.isna(date_val)):
        raise MalformedInputError("Missing date")

    # pd.Timestamp is a datetime subclass
    if isinstance(date_val, datetime):
        return date_val.date()

    if isinstance(date_val, date):
        return date_val

    if isinstance(date_val, str):
        date_str = date_val.strip()
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(date_str, fmt).date()
            except ValueError:
                continue

        # ISO date-times such as 2024-01-30T00:00:00
        try:
            return datetime.fromisoformat(date_str).date()
        except ValueError:
            pass

    raise MalformedInputError(f"Unparseable date: {date_val!r}")


def parse_amount(amount_val) -> Decimal:
    """Parse an amount to Decimal without going through float arithmetic."""
    if amount_val is None or isinstance(amount_val, bool):
        raise MalformedInputError(f"Unparseable amount: {amount_val!r}")

    if isinstance(amount_val, Decimal):
        amount = amount_val
    elif isinstance(amount_val, int):
        amount = Decimal(amount_val)
    elif isinstance(amount_val, float):
        amount = Decimal(str(amount_val))
    elif isinstance(amount_val, str):
        # Remove currency symbols, thousands separators and whitespace
        cleaned = re.sub(r'[₪$€£,\s]', '', amount_val)
        try:
            amount = Decimal(cleaned)
        except InvalidOperation as e:
            raise MalformedInputError(f"Unparseable amount: {amount_val!r}") from e
    else:
        raise MalformedInputError(f"Unparseable amount: {amount_val!r}")

    if not amount.is_finite():
        raise MalformedInputError(f"Unparseable amount: {amount_val!r}")
    return amount


def _lower_keys(d: Dict) -> Dict:
    return {str(k).lower(): v for k, v in d.items()}


def _field(d: Dict, *names: str):
    """Fetch the first present key among names from a lower-cased dict."""
    for name in names:
        if name in d:
            return d[name]
    raise MalformedInputError(f"Missing field '{names[0]}' in record: {d}")


@dataclass(frozen=True)
class Transaction:
    """A single income or expense entry."""
    date: date
    category: str
    amount: Decimal
    kind: str  # 'income' or 'expense'

    def to_dict(self) -> Dict:
        return {
            'date': self.date.isoformat(),
            'category': self.category,
            'amount': str(self.amount),
            'type': self.kind,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> 'Transaction':
        d = _lower_keys(d)
        return cls(
            date=parse_date(_field(d, 'date')),
            category=str(_field(d, 'category')),
            amount=parse_amount(_field(d, 'amount')),
            kind=str(_field(d, 'type', 'kind')),
        )


@dataclass(frozen=True)
class Budget:
    """A spending limit for one category over a weekly or monthly window."""
    category: str
    period_kind: str  # 'weekly' or 'monthly'
    start_date: date
    end_date: date
    limit_amount: Decimal

    def to_dict(self) -> Dict:
        return {
            'category': self.category,
            'type': self.period_kind,
            'startDate': self.start_date.isoformat(),
            'endDate': self.end_date.isoformat(),
            'amount': str(self.limit_amount),
        }

    @classmethod
    def from_dict(cls, d: Dict) -> 'Budget':
        d = _lower_keys(d)
        return cls(
            category=str(_field(d, 'category')),
            period_kind=str(_field(d, 'type', 'period_kind')),
            start_date=parse_date(_field(d, 'startdate', 'start_date')),
            end_date=parse_date(_field(d, 'enddate', 'end_date')),
            limit_amount=parse_amount(_field(d, 'amount', 'limit_amount')),
        )


@dataclass(frozen=True)
class SavingGoal:
    """A target amount to put aside between two dates."""
    name: str
    target_amount: Decimal
    start_date: date
    end_date: date

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'target': str(self.target_amount),
            'startDate': self.start_date.isoformat(),
            'endDate': self.end_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, d: Dict) -> 'SavingGoal':
        d = _lower_keys(d)
        return cls(
            name=str(_field(d, 'name')),
            target_amount=parse_amount(_field(d, 'target', 'target_amount')),
            start_date=parse_date(_field(d, 'startdate', 'start_date')),
            end_date=parse_date(_field(d, 'enddate', 'end_date')),
        )


@dataclass
class FinancialData:
    """
    All records of one ledger, in insertion order.
    Appending directly does not de-duplicate; see reconcile.merge_data.
    """
    transactions: List[Transaction] = field(default_factory=list)
    budgets: List[Budget] = field(default_factory=list)
    saving_goals: List[SavingGoal] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'transactions': [t.to_dict() for t in self.transactions],
            'budgets': [b.to_dict() for b in self.budgets],
            'savingGoals': [g.to_dict() for g in self.saving_goals],
        }

    @classmethod
    def from_dict(cls, d: Dict) -> 'FinancialData':
        d = _lower_keys(d)
        return cls(
            transactions=[Transaction.from_dict(t) for t in d.get('transactions') or []],
            budgets=[Budget.from_dict(b) for b in d.get('budgets') or []],
            saving_goals=[SavingGoal.from_dict(g) for g in d.get('savinggoals') or []],
        )


def new_budget(category: str, period_kind: str, start_date: date, limit_amount: Decimal) -> Budget:
    """
    Create a budget, deriving its end date from the period kind:
    one week for weekly budgets, one calendar month for monthly ones.
    """
    if is_weekly(period_kind):
        end_date = start_date + timedelta(days=7)
    elif is_monthly(period_kind):
        # Clamps to the last day of shorter months (Jan 31 -> Feb 28/29)
        end_date = (pd.Timestamp(start_date) + pd.DateOffset(months=1)).date()
    else:
        raise MalformedInputError(f"Unknown budget period: {period_kind!r} (expected weekly or monthly)")

    return Budget(
        category=category,
        period_kind=period_kind.lower(),
        start_date=start_date,
        end_date=end_date,
        limit_amount=limit_amount,
    )


def new_saving_goal(name: str, target_amount: Decimal, start_date: date, end_date: date) -> SavingGoal:
    if end_date < start_date:
        raise MalformedInputError(
            f"Goal end date {end_date.isoformat()} is before start date {start_date.isoformat()}"
        )
    return SavingGoal(name=name, target_amount=target_amount, start_date=start_date, end_date=end_date)
