"""
Analytics over a FinancialData ledger: per-category totals, budget
utilization and saving goal projections.

Everything here is recomputed from the full record set on each call and
returns plain records; formatting is left to the reports module.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, NamedTuple, Optional

from .classifier import is_expense, is_income
from .errors import InvalidDivisorError
from .models import Budget, FinancialData, SavingGoal, Transaction


# Savings projections treat every month as 30 days. This is an approximation,
# not calendar month arithmetic.
DAYS_PER_MONTH = 30

WARNING_THRESHOLD = Decimal(90)
CAUTION_THRESHOLD = Decimal(50)


class CategorySummary(NamedTuple):
    category: str
    total: Decimal
    min_date: date
    max_date: date


class BudgetSummary(NamedTuple):
    category: str
    period_kind: str
    start_date: date
    end_date: date
    limit_amount: Decimal
    spent: Decimal
    remaining: Decimal
    message: str


class GoalSummary(NamedTuple):
    name: str
    target_amount: Decimal
    start_date: date
    end_date: date
    total_saved: Decimal
    remaining: Decimal
    monthly_required: Decimal


class Overview(NamedTuple):
    transaction_count: int
    total_income: Decimal
    total_expenses: Decimal
    net: Decimal
    first_date: Optional[date]
    last_date: Optional[date]


def goal_months(goal: SavingGoal) -> int:
    """Whole 30-day months between the goal's start and end dates."""
    return (goal.end_date - goal.start_date).days // DAYS_PER_MONTH


def calculate_savings(goal: SavingGoal) -> Decimal:
    """Amount to put aside each month to reach the goal; 0 for windows under 30 days."""
    months = goal_months(goal)
    return goal.target_amount / months if months > 0 else Decimal(0)


def budget_utilization(spent: Decimal, limit_amount: Decimal) -> Decimal:
    """Spent as a percentage of the limit. A zero limit is an error."""
    if limit_amount == 0:
        raise InvalidDivisorError(f"Budget limit is zero; cannot compute utilization of {spent}")
    return spent / limit_amount * 100


def utilization_tier(spent: Decimal, limit_amount: Decimal) -> str:
    """
    Classify utilization into 'warning' (> 90%), 'caution' (> 50%) or 'info'.
    """
    utilization = budget_utilization(spent, limit_amount)
    if utilization > WARNING_THRESHOLD:
        return 'warning'
    if utilization > CAUTION_THRESHOLD:
        return 'caution'
    return 'info'


def track_budget_utilization(spent: Decimal, budget: Budget) -> str:
    """Human-readable utilization message for a budget."""
    utilization = budget_utilization(spent, budget.limit_amount)
    tier = utilization_tier(spent, budget.limit_amount)

    if tier == 'warning':
        return f"Warning: Budget utilization is at {utilization:.2f}%."
    if tier == 'caution':
        return f"Take care: You have spent {utilization:.2f}% of your budget."
    return f"Budget utilization is around {utilization:.2f}%."


def generate_financial_summary(transactions: Iterable[Transaction]) -> List[CategorySummary]:
    """
    Group transactions by category. Income and expense both count towards
    the total. Categories come out in order of first appearance.
    """
    groups: Dict[str, dict] = {}
    for t in transactions:
        acc = groups.get(t.category)
        if acc is None:
            groups[t.category] = {'total': t.amount, 'min_date': t.date, 'max_date': t.date}
            continue
        acc['total'] += t.amount
        acc['min_date'] = min(acc['min_date'], t.date)
        acc['max_date'] = max(acc['max_date'], t.date)

    return [
        CategorySummary(category, acc['total'], acc['min_date'], acc['max_date'])
        for category, acc in groups.items()
    ]


def spent_for_budget_period(transactions: Iterable[Transaction], budget: Budget) -> Decimal:
    """Expenses in the budget's category dated within [start_date, end_date]."""
    return sum(
        (t.amount for t in transactions
         if t.category == budget.category
         and is_expense(t.kind)
         and budget.start_date <= t.date <= budget.end_date),
        Decimal(0),
    )


def generate_budget_summary(data: FinancialData) -> List[BudgetSummary]:
    summary = []
    for budget in data.budgets:
        spent = spent_for_budget_period(data.transactions, budget)
        summary.append(BudgetSummary(
            category=budget.category,
            period_kind=budget.period_kind,
            start_date=budget.start_date,
            end_date=budget.end_date,
            limit_amount=budget.limit_amount,
            spent=spent,
            remaining=budget.limit_amount - spent,
            message=track_budget_utilization(spent, budget),
        ))
    return summary


def total_saved_for_goal(transactions: Iterable[Transaction], goal: SavingGoal) -> Decimal:
    """
    Income recorded under the goal's name. Not limited to the goal's
    window: all income in that category counts.
    """
    return sum(
        (t.amount for t in transactions if t.category == goal.name and is_income(t.kind)),
        Decimal(0),
    )


def generate_saving_goals_summary(data: FinancialData) -> List[GoalSummary]:
    summary = []
    for goal in data.saving_goals:
        total_saved = total_saved_for_goal(data.transactions, goal)
        summary.append(GoalSummary(
            name=goal.name,
            target_amount=goal.target_amount,
            start_date=goal.start_date,
            end_date=goal.end_date,
            total_saved=total_saved,
            remaining=goal.target_amount - total_saved,
            monthly_required=calculate_savings(goal),
        ))
    return summary


def generate_overview(transactions: Iterable[Transaction]) -> Overview:
    """
    Ledger-wide income and expense totals. Expenses are counted by magnitude,
    so they may be recorded as positive or negative amounts.
    """
    transactions = list(transactions)
    income = sum((t.amount for t in transactions if is_income(t.kind)), Decimal(0))
    expenses = sum((abs(t.amount) for t in transactions if is_expense(t.kind)), Decimal(0))
    dates = [t.date for t in transactions]

    return Overview(
        transaction_count=len(transactions),
        total_income=income,
        total_expenses=expenses,
        net=income - expenses,
        first_date=min(dates) if dates else None,
        last_date=max(dates) if dates else None,
    )
