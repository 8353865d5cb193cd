#!/usr/bin/env python3
"""
Personal Finance Tracker - Main CLI

Usage:
    python finance_tool.py add <date> <category> <amount> <income|expense>
    python finance_tool.py import <file>...          Import CSV/JSON transaction files
    python finance_tool.py transactions [--category=C]
    python finance_tool.py budget <category> <weekly|monthly> <start> <limit>
    python finance_tool.py budgets                   Budgets with utilization
    python finance_tool.py goal <name> <target> <start> <end>
    python finance_tool.py analytics                 Transaction, budget and goal summaries
    python finance_tool.py export <folder>           Write FinancialReport.json
    python finance_tool.py report [--format=cli,csv,json]
    python finance_tool.py summary                   Totals across all data
"""

import argparse
import os
import sys
import traceback

from fintracker.analytics import calculate_savings, generate_overview
from fintracker.config import get_default_dirs
from fintracker.errors import FinanceError, MalformedInputError
from fintracker.logging_config import setup_logging
from fintracker.models import FinancialData, new_budget, new_saving_goal, parse_amount, parse_date
from fintracker.parsers import make_transaction, parse_file
from fintracker.reports import (
    export_analytics,
    format_amount,
    generate_report,
    print_budgets,
    print_cli_report,
    print_overview,
    print_transactions,
)
from fintracker.storage import Storage

REPORT_FORMATS = ('cli', 'csv', 'json')


def _date_arg(value):
    try:
        return parse_date(value)
    except MalformedInputError as e:
        raise argparse.ArgumentTypeError(f"{e} (use YYYY-MM-DD)")


def _amount_arg(value):
    try:
        return parse_amount(value)
    except MalformedInputError as e:
        raise argparse.ArgumentTypeError(str(e))


def get_dirs(args):
    """Default directories, with --data-dir taking precedence."""
    dirs = get_default_dirs()
    if args.data_dir:
        dirs['data'] = args.data_dir
    return dirs


def get_storage(args) -> Storage:
    return Storage(str(get_dirs(args)['data']))


def cmd_add(args):
    """Add a single transaction."""
    storage = get_storage(args)
    t = make_transaction(args.date, args.category, args.amount, args.type)

    report = storage.save(FinancialData(transactions=[t]))

    if report.transactions_added:
        print("Transaction added successfully.")
    else:
        print(f"A {t.kind} transaction for '{t.category}' on {t.date.isoformat()} already exists; nothing added.")


def cmd_import(args):
    """Import transaction files."""
    storage = get_storage(args)

    total_added = 0
    total_files = 0
    failed = 0

    for file_path in args.files:
        if not os.path.exists(file_path):
            print(f"File not found: {file_path}")
            failed += 1
            continue

        try:
            print(f"Parsing: {file_path}")
            transactions = parse_file(file_path)
        except MalformedInputError as e:
            print(f"Error processing {file_path}: {e}")
            if args.verbose:
                traceback.print_exc()
            failed += 1
            continue

        report = storage.save(FinancialData(transactions=transactions))
        added = len(report.transactions_added)
        total_added += added
        total_files += 1

        print(f"  -> Imported {added} new transactions (of {len(transactions)} parsed)")

    print(f"\nTotal: Imported {total_added} transactions from {total_files} files")
    return 1 if failed else 0


def cmd_transactions(args):
    """List stored transactions."""
    data = get_storage(args).load()

    transactions = data.transactions
    if args.category:
        transactions = [t for t in transactions if t.category == args.category]

    print_transactions(transactions)


def cmd_budget(args):
    """Set a budget."""
    storage = get_storage(args)
    budget = new_budget(args.category, args.period, args.start, args.limit)

    report = storage.save(FinancialData(budgets=[budget]))

    if report.budgets_added:
        print(f"Budget set successfully. End Date: {budget.end_date.isoformat()}")
    else:
        print(f"A {budget.period_kind} budget for '{budget.category}' already exists; nothing changed.")


def cmd_budgets(args):
    """List budgets with spending."""
    print_budgets(get_storage(args).load())


def cmd_goal(args):
    """Set a saving goal."""
    storage = get_storage(args)
    goal = new_saving_goal(args.name, args.target, args.start, args.end)

    report = storage.save(FinancialData(saving_goals=[goal]))

    if not report.goals_added:
        print("A saving goal with the same target and dates already exists; nothing added.")
        return

    print(f"You need to save {format_amount(calculate_savings(goal))} per month to reach your goal.")


def cmd_analytics(args):
    """Show financial analytics."""
    print_cli_report(get_storage(args).load())


def cmd_export(args):
    """Export analytics to JSON."""
    data = get_storage(args).load()
    file_path = export_analytics(args.folder, data)
    print(f"Financial analytics exported to: {file_path}")


def cmd_report(args):
    """Generate reports."""
    dirs = get_dirs(args)
    data = Storage(str(dirs['data'])).load()

    formats = [f.strip() for f in args.format.split(',') if f.strip()]
    unknown = [f for f in formats if f not in REPORT_FORMATS]
    if unknown:
        print(f"Unknown report format(s): {', '.join(unknown)}. Use: {','.join(REPORT_FORMATS)}")
        return 1

    output_dir = args.output or dirs['reports']
    for path in generate_report(data, str(output_dir), formats):
        print(f"Report saved to: {path}")


def cmd_summary(args):
    """Show quick summary of all data."""
    data = get_storage(args).load()
    print_overview(generate_overview(data.transactions))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Personal Finance Tracker - Transactions, budgets and saving goals',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python finance_tool.py add 2024-01-10 Food 15.50 expense
  python finance_tool.py import january.csv february.json
  python finance_tool.py budget Food monthly 2024-01-01 300
  python finance_tool.py goal Car 6000 2024-01-01 2024-12-31
  python finance_tool.py report --format=cli,csv,json
        """
    )
    parser.add_argument('--data-dir', '-d', help='Directory holding financialData.json')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging and detailed error messages')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Add command
    add_parser = subparsers.add_parser('add', help='Add a transaction')
    add_parser.add_argument('date', type=_date_arg, help='Transaction date (YYYY-MM-DD)')
    add_parser.add_argument('category', help='Category label')
    add_parser.add_argument('amount', type=_amount_arg, help='Amount')
    add_parser.add_argument('type', help='income or expense')

    # Import command
    import_parser = subparsers.add_parser('import', help='Import CSV or JSON transaction files')
    import_parser.add_argument('files', nargs='+', help='Files to import')

    # Transactions command
    transactions_parser = subparsers.add_parser('transactions', help='List transactions')
    transactions_parser.add_argument('--category', '-c', help='Only show this category')

    # Budget command
    budget_parser = subparsers.add_parser('budget', help='Set a budget')
    budget_parser.add_argument('category', help='Category label')
    budget_parser.add_argument('period', type=str.lower, choices=['weekly', 'monthly'], help='Budget period')
    budget_parser.add_argument('start', type=_date_arg, help='Start date (YYYY-MM-DD)')
    budget_parser.add_argument('limit', type=_amount_arg, help='Spending limit')

    # Budgets command
    subparsers.add_parser('budgets', help='List budgets with spending')

    # Goal command
    goal_parser = subparsers.add_parser('goal', help='Set a saving goal')
    goal_parser.add_argument('name', help='Goal name (income under this category counts as saved)')
    goal_parser.add_argument('target', type=_amount_arg, help='Target amount')
    goal_parser.add_argument('start', type=_date_arg, help='Start date (YYYY-MM-DD)')
    goal_parser.add_argument('end', type=_date_arg, help='End date (YYYY-MM-DD)')

    # Analytics command
    subparsers.add_parser('analytics', help='Show financial analytics')

    # Export command
    export_parser = subparsers.add_parser('export', help='Export analytics to FinancialReport.json')
    export_parser.add_argument('folder', help='Folder to write the report into')

    # Report command
    report_parser = subparsers.add_parser('report', help='Generate financial report')
    report_parser.add_argument('--format', '-f', default='cli',
                               help='Output formats: cli,csv,json (comma-separated)')
    report_parser.add_argument('--output', '-o', help='Directory for report files')

    # Summary command
    subparsers.add_parser('summary', help='Show data summary')

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    if not args.command:
        parser.print_help()
        return 0

    # Dispatch to command handler
    commands = {
        'add': cmd_add,
        'import': cmd_import,
        'transactions': cmd_transactions,
        'budget': cmd_budget,
        'budgets': cmd_budgets,
        'goal': cmd_goal,
        'analytics': cmd_analytics,
        'export': cmd_export,
        'report': cmd_report,
        'summary': cmd_summary,
    }

    try:
        return commands[args.command](args) or 0
    except (FinanceError, OSError) as e:
        print(f"Error: {e}")
        if args.verbose:
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
