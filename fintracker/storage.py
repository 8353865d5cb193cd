"""
Persistent storage for the financial ledger.
The whole ledger lives in one JSON document with transactions, budgets and
savingGoals arrays. Saving merges into what is on disk, then overwrites it.
"""

import json
import logging
import os
from decimal import Decimal
from pathlib import Path
from typing import Dict, Optional

from .config import DATA_FILE_NAME
from .errors import MalformedInputError
from .models import FinancialData
from .reconcile import MergeReport, reconcile

logger = logging.getLogger(__name__)


def to_document(data: FinancialData) -> Dict:
    """JSON-ready dict of the ledger. Amounts are written as decimal strings."""
    return data.to_dict()


def from_document(document: Dict) -> FinancialData:
    if not isinstance(document, dict):
        raise MalformedInputError("Stored data must be a JSON object with transactions, budgets and savingGoals")
    return FinancialData.from_dict(document)


class Storage:
    """
    Loads and saves the ledger document.
    Writes are last-writer-wins: save() re-reads the file, merges, overwrites.
    """

    def __init__(self, data_dir: str, file_name: str = DATA_FILE_NAME):
        self.data_dir = Path(data_dir)
        self.data_file = self.data_dir / file_name

    def load(self) -> FinancialData:
        """Load the stored ledger, or an empty one if nothing has been saved yet."""
        if not self.data_file.exists():
            logger.debug("No data file at %s, starting empty", self.data_file)
            return FinancialData()

        with open(self.data_file, 'r', encoding='utf-8') as f:
            try:
                document = json.load(f, parse_float=Decimal)
            except json.JSONDecodeError as e:
                raise MalformedInputError(f"Could not decode data file {self.data_file}: {e}") from e

        data = from_document(document)
        logger.debug(
            "Loaded %d transactions, %d budgets, %d saving goals from %s",
            len(data.transactions), len(data.budgets), len(data.saving_goals), self.data_file,
        )
        return data

    def save(self, data: FinancialData) -> MergeReport:
        """
        Merge data into the stored ledger and write the result.
        Records already stored (by identity) are kept as they are.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)

        existing = self.load()
        report = reconcile(existing, data)

        # Serialize before touching the file so a bad record cannot truncate it
        document = to_document(report.data)

        tmp_file = self.data_file.with_name(self.data_file.name + '.tmp')
        with open(tmp_file, 'w', encoding='utf-8') as f:
            json.dump(document, f, ensure_ascii=False, indent=2)
        os.replace(tmp_file, self.data_file)

        logger.info(
            "Saved %s: %d new transactions, %d new budgets, %d new saving goals",
            self.data_file, len(report.transactions_added), len(report.budgets_added), len(report.goals_added),
        )
        return report
