"""
Personal finance tracker.
Records transactions, budgets and saving goals, merges imports without
duplicates, and derives budget and savings analytics.
"""

from .models import Transaction, Budget, SavingGoal, FinancialData, new_budget, new_saving_goal
from .errors import FinanceError, MalformedInputError, InvalidDivisorError
from .analytics import (
    calculate_savings,
    track_budget_utilization,
    generate_financial_summary,
    spent_for_budget_period,
    generate_budget_summary,
    generate_saving_goals_summary,
    generate_overview,
)
from .reconcile import merge_data, reconcile
from .parsers import parse_file
from .storage import Storage

__version__ = '0.1.0'
__all__ = [
    'Transaction',
    'Budget',
    'SavingGoal',
    'FinancialData',
    'new_budget',
    'new_saving_goal',
    'FinanceError',
    'MalformedInputError',
    'InvalidDivisorError',
    'calculate_savings',
    'track_budget_utilization',
    'generate_financial_summary',
    'spent_for_budget_period',
    'generate_budget_summary',
    'generate_saving_goals_summary',
    'generate_overview',
    'merge_data',
    'reconcile',
    'parse_file',
    'Storage',
]
