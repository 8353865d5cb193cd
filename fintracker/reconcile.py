"""
Merging of incoming records into an existing ledger without duplicates.

Each record kind has an identity tuple. An incoming record is appended only
when no record with the same identity is already present; existing records
are never updated or removed.
"""

from typing import Callable, Hashable, List, NamedTuple, TypeVar

from .models import Budget, FinancialData, SavingGoal, Transaction

R = TypeVar('R')


def transaction_identity(t: Transaction) -> tuple:
    return (t.date, t.category, t.kind)


def budget_identity(b: Budget) -> tuple:
    return (b.category, b.period_kind)


def goal_identity(g: SavingGoal) -> tuple:
    return (g.target_amount, g.start_date, g.end_date)


class MergeReport(NamedTuple):
    data: FinancialData
    transactions_added: List[Transaction]
    budgets_added: List[Budget]
    goals_added: List[SavingGoal]

    @property
    def added_count(self) -> int:
        return len(self.transactions_added) + len(self.budgets_added) + len(self.goals_added)


def merge_records(existing: List[R], incoming: List[R], identity: Callable[[R], Hashable]) -> List[R]:
    """
    Append to existing every incoming record with an unseen identity.
    Duplicates inside incoming itself are collapsed to the first one.
    Returns the records that were added.
    """
    seen = {identity(r) for r in existing}
    added = []

    for record in incoming:
        key = identity(record)
        if key in seen:
            continue
        seen.add(key)
        existing.append(record)
        added.append(record)

    return added


def reconcile(existing: FinancialData, incoming: FinancialData) -> MergeReport:
    """Merge incoming into existing in place and report what was added."""
    return MergeReport(
        data=existing,
        transactions_added=merge_records(existing.transactions, incoming.transactions, transaction_identity),
        budgets_added=merge_records(existing.budgets, incoming.budgets, budget_identity),
        goals_added=merge_records(existing.saving_goals, incoming.saving_goals, goal_identity),
    )


def merge_data(existing: FinancialData, incoming: FinancialData) -> FinancialData:
    return reconcile(existing, incoming).data
