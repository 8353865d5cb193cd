"""
Report generation module.
Supports CLI output, CSV export, and a JSON analytics export.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from .analytics import (
    BudgetSummary,
    CategorySummary,
    GoalSummary,
    Overview,
    generate_budget_summary,
    generate_financial_summary,
    generate_saving_goals_summary,
    spent_for_budget_period,
    track_budget_utilization,
)
from .config import ANALYTICS_FILE_NAME
from .models import FinancialData, Transaction
from .storage import to_document

logger = logging.getLogger(__name__)


def format_amount(amount) -> str:
    """Format an amount with two decimals and thousands separators."""
    return f"{amount:,.2f}"


def print_transactions(transactions: List[Transaction]):
    if not transactions:
        print("No transactions recorded.")
        return

    print("\nTransactions:")
    print("-" * 70)
    for t in transactions:
        print(f"{t.date.isoformat()} | {t.category[:30]:<30} | {format_amount(t.amount):>14} | {t.kind}")
    print("-" * 70)


def print_budgets(data: FinancialData):
    """Print each budget with what has been spent against it."""
    if not data.budgets:
        print("No budgets set.")
        return

    print("\nBudgets:")
    print("-" * 70)
    for budget in data.budgets:
        spent = spent_for_budget_period(data.transactions, budget)
        print(f"{budget.category:<20} {budget.period_kind:<8} "
              f"{budget.start_date.isoformat()} -> {budget.end_date.isoformat()}  "
              f"limit {format_amount(budget.limit_amount)}, spent {format_amount(spent)}")
        print(f"  {track_budget_utilization(spent, budget)}")
    print("-" * 70)


def print_financial_summary(summary: List[CategorySummary]):
    print("\nTransactions Summary:")
    print("-" * 70)
    for row in summary:
        print(f"  {row.category:<20} {format_amount(row.total):>14}  "
              f"({row.min_date.isoformat()} to {row.max_date.isoformat()})")


def print_budget_summary(summary: List[BudgetSummary]):
    print("\nBudget Summary:")
    print("-" * 70)
    for row in summary:
        print(f"  {row.category:<20} {row.period_kind:<8} "
              f"{row.start_date.isoformat()} -> {row.end_date.isoformat()}  "
              f"limit {format_amount(row.limit_amount)}, spent {format_amount(row.spent)}, "
              f"remaining {format_amount(row.remaining)}")
        if row.message:
            print(f"    Note: {row.message}")


def print_saving_goals_summary(summary: List[GoalSummary]):
    print("\nSaving Goals Summary:")
    print("-" * 70)
    for row in summary:
        print(f"  {row.name:<20} {row.start_date.isoformat()} -> {row.end_date.isoformat()}  "
              f"saved {format_amount(row.total_saved)} of {format_amount(row.target_amount)}, "
              f"monthly savings required {format_amount(row.monthly_required)}")


def print_cli_report(data: FinancialData):
    """
    Print all analytics for the ledger.
    """
    print("\n" + "=" * 70)
    print("  Financial Analytics")
    print("=" * 70)

    print_financial_summary(generate_financial_summary(data.transactions))
    print_budget_summary(generate_budget_summary(data))
    print_saving_goals_summary(generate_saving_goals_summary(data))

    print("\n" + "=" * 70 + "\n")


def print_overview(overview: Overview):
    if overview.transaction_count == 0:
        print("No data available. Add or import some transactions first.")
        return

    print("\nData Summary:")
    print("-" * 50)
    print(f"Date range: {overview.first_date.isoformat()} to {overview.last_date.isoformat()}")
    print(f"Total transactions: {overview.transaction_count}")
    print(f"Total income: {format_amount(overview.total_income)}")
    print(f"Total expenses: {format_amount(overview.total_expenses)}")
    print(f"Net: {format_amount(overview.net)}")
    print("-" * 50)


def analytics_document(data: FinancialData) -> Dict:
    """Stored records plus the three summaries, ready for json.dump."""
    return {
        **to_document(data),
        'transactionSummary': [
            {
                'category': row.category,
                'total': str(row.total),
                'startDate': row.min_date.isoformat(),
                'endDate': row.max_date.isoformat(),
            }
            for row in generate_financial_summary(data.transactions)
        ],
        'budgetSummary': [
            {
                'category': row.category,
                'type': row.period_kind,
                'startDate': row.start_date.isoformat(),
                'endDate': row.end_date.isoformat(),
                'amount': str(row.limit_amount),
                'spent': str(row.spent),
                'remaining': str(row.remaining),
                'message': row.message,
            }
            for row in generate_budget_summary(data)
        ],
        'savingGoalsSummary': [
            {
                'name': row.name,
                'target': str(row.target_amount),
                'startDate': row.start_date.isoformat(),
                'endDate': row.end_date.isoformat(),
                'totalSaved': str(row.total_saved),
                'remaining': str(row.remaining),
                'monthlySavingsRequired': str(row.monthly_required),
            }
            for row in generate_saving_goals_summary(data)
        ],
    }


def export_analytics(folder_path: str, data: FinancialData) -> Path:
    """Write FinancialReport.json into folder_path, creating the folder."""
    folder = Path(folder_path)
    folder.mkdir(parents=True, exist_ok=True)

    file_path = folder / ANALYTICS_FILE_NAME
    document = analytics_document(data)
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(document, f, ensure_ascii=False, indent=2)

    logger.info("Financial analytics exported to %s", file_path)
    return file_path


def generate_csv_report(data: FinancialData, output_path: str) -> Path:
    """
    Generate a CSV report file.
    """
    with open(output_path, 'w', newline='', encoding='utf-8-sig') as f:
        writer = csv.writer(f)

        writer.writerow(['Transactions Summary'])
        writer.writerow(['Category', 'Total', 'Start Date', 'End Date'])
        for row in generate_financial_summary(data.transactions):
            writer.writerow([row.category, row.total, row.min_date.isoformat(), row.max_date.isoformat()])
        writer.writerow([])

        writer.writerow(['Budget Summary'])
        writer.writerow(['Category', 'Type', 'Start Date', 'End Date', 'Limit', 'Spent', 'Remaining', 'Note'])
        for row in generate_budget_summary(data):
            writer.writerow([
                row.category, row.period_kind, row.start_date.isoformat(), row.end_date.isoformat(),
                row.limit_amount, row.spent, row.remaining, row.message,
            ])
        writer.writerow([])

        writer.writerow(['Saving Goals Summary'])
        writer.writerow(['Name', 'Target', 'Start Date', 'End Date', 'Total Saved', 'Remaining',
                         'Monthly Savings Required'])
        for row in generate_saving_goals_summary(data):
            writer.writerow([
                row.name, row.target_amount, row.start_date.isoformat(), row.end_date.isoformat(),
                row.total_saved, row.remaining, format_amount(row.monthly_required),
            ])
        writer.writerow([])

        writer.writerow(['Detailed Transactions'])
        writer.writerow(['Date', 'Category', 'Amount', 'Type'])
        for t in sorted(data.transactions, key=lambda x: x.date):
            writer.writerow([t.date.isoformat(), t.category, t.amount, t.kind])

    logger.info("CSV report saved to %s", output_path)
    return Path(output_path)


def generate_report(data: FinancialData,
                    output_dir: str,
                    formats: Optional[List[str]] = None) -> List[Path]:
    """
    Generate reports in multiple formats.

    Args:
        data: Ledger to report on
        output_dir: Directory to save report files
        formats: List of formats to generate ('cli', 'csv', 'json')

    Returns:
        Paths of the files written (the cli format writes none)
    """
    if formats is None:
        formats = ['cli']

    written = []

    if 'cli' in formats:
        print_cli_report(data)

    if 'csv' in formats or 'json' in formats:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

    if 'csv' in formats:
        written.append(generate_csv_report(data, str(output_dir / 'financial_report.csv')))

    if 'json' in formats:
        written.append(export_analytics(str(output_dir), data))

    return written
