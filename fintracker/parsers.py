"""
Parsers for transaction import files.
Supports:
- CSV with a header line and columns: date, category, amount, type
- JSON arrays of transaction objects (keys matched case-insensitively)
"""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import List

import pandas as pd

from .classifier import is_expense, is_income
from .errors import MalformedInputError
from .models import Transaction, parse_amount, parse_date

logger = logging.getLogger(__name__)


def make_transaction(date_val, category, amount_val, kind, where: str = '') -> Transaction:
    """
    Build a transaction from raw field values.
    The type is lower-cased and must be income or expense.
    """
    prefix = f"{where}: " if where else ''
    try:
        date = parse_date(date_val)
        amount = parse_amount(amount_val)
    except MalformedInputError as e:
        raise MalformedInputError(f"{prefix}{e}") from e

    if category is None or not str(category).strip():
        raise MalformedInputError(f"{prefix}Missing category")

    kind = str(kind).strip().lower() if kind is not None else ''
    if not (is_income(kind) or is_expense(kind)):
        raise MalformedInputError(f"{prefix}Invalid transaction type {kind!r} (expected income or expense)")

    return Transaction(date=date, category=str(category).strip(), amount=amount, kind=kind)


def parse_csv_file(file_path: str) -> List[Transaction]:
    """
    Parse a CSV export. The first line is a header and is skipped;
    columns are read by position.
    """
    try:
        # Everything as text so amounts never pass through float
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False, skipinitialspace=True)
    except pd.errors.EmptyDataError:
        logger.warning("Empty CSV file: %s", file_path)
        return []
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise MalformedInputError(f"Could not read CSV file {file_path}: {e}") from e

    if len(df.columns) < 4:
        raise MalformedInputError(
            f"CSV file {file_path} needs 4 columns (date, category, amount, type), found {len(df.columns)}"
        )

    transactions = []
    for idx in range(len(df)):
        row = df.iloc[idx]
        # Header is line 1
        transactions.append(make_transaction(
            row.iloc[0], row.iloc[1], row.iloc[2], row.iloc[3],
            where=f"{file_path} line {idx + 2}",
        ))

    logger.info("Parsed %d transactions from %s", len(transactions), file_path)
    return transactions


def parse_json_file(file_path: str) -> List[Transaction]:
    """Parse a JSON array of {date, category, amount, type} objects."""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Could not decode JSON file {file_path}: {e}") from e

    if not isinstance(data, list):
        raise MalformedInputError(f"JSON file {file_path} must contain an array of transactions")

    transactions = []
    for idx, record in enumerate(data):
        where = f"{file_path} item {idx}"
        if not isinstance(record, dict):
            raise MalformedInputError(f"{where}: expected an object, got {type(record).__name__}")

        fields = {str(k).lower(): v for k, v in record.items()}
        transactions.append(make_transaction(
            fields.get('date'), fields.get('category'), fields.get('amount'),
            fields.get('type', fields.get('kind')),
            where=where,
        ))

    logger.info("Parsed %d transactions from %s", len(transactions), file_path)
    return transactions


def parse_file(file_path: str) -> List[Transaction]:
    """
    Detect the file type from its extension and parse accordingly.
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == '.csv':
        return parse_csv_file(file_path)
    if suffix == '.json':
        return parse_json_file(file_path)

    raise MalformedInputError(f"Unsupported import file type '{suffix}': {file_path} (expected .csv or .json)")
