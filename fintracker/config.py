"""
Default locations for stored data and generated reports.
"""

import os
from pathlib import Path
from typing import Dict, Optional


DATA_FILE_NAME = 'financialData.json'
ANALYTICS_FILE_NAME = 'FinancialReport.json'


def get_default_dirs(base_dir: Optional[Path] = None) -> Dict[str, Path]:
    """
    Get data and report directories.
    FINTRACKER_DATA_DIR / FINTRACKER_REPORTS_DIR override the defaults,
    which live under base_dir (the current directory if not given).
    """
    base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
    return {
        'data': Path(os.getenv('FINTRACKER_DATA_DIR', base_dir / 'data')),
        'reports': Path(os.getenv('FINTRACKER_REPORTS_DIR', base_dir / 'reports')),
    }
