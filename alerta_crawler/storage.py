import json
import os
from datetime import datetime, timezone
from typing import List, Optional
from .model import TenderRecord, FIELD_ORDER
from .config import RESULTS_DIR
import pandas as pd
from openpyxl.utils import get_column_letter

import logging
logger = logging.getLogger(__name__)

SHEET_NAME = 'Tenders'


class Storage:
    @staticmethod
    def timestamp(now: Optional[datetime] = None) -> str:
        """
        Filename-safe UTC timestamp, e.g. 2024-03-05T14-07-09-123Z.
        ISO-8601 with milliseconds, ':' and '.' replaced by '-'.
        """
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        iso = now.strftime('%Y-%m-%dT%H:%M:%S') + f".{now.microsecond // 1000:03d}Z"
        return iso.replace(':', '-').replace('.', '-')

    @staticmethod
    def results_path(timestamp: str, ext: str, results_dir: str = RESULTS_DIR) -> str:
        return os.path.join(results_dir, f"tender_results_{timestamp}.{ext}")

    @staticmethod
    def save_json(items: List[TenderRecord], filename: str):
        os.makedirs(os.path.dirname(filename) or '.', exist_ok=True)
        data = [item.to_dict() for item in items]
        with open(filename, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        logger.info(f"Results saved to {filename}")

    @staticmethod
    def load_json(filename: str) -> List[TenderRecord]:
        with open(filename, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return [TenderRecord.from_dict(row) for row in data]

    @staticmethod
    def save_excel(items: List[TenderRecord], filename: str):
        """
        Save items to a single-sheet Excel workbook.

        Sheet 'Tenders' has one header row (FIELD_ORDER) and one row per item.

        Args:
            items: List of TenderRecord objects
            filename: Output Excel filename
        """
        if not items:
            logger.info("No items to save.")
            return

        os.makedirs(os.path.dirname(filename) or '.', exist_ok=True)

        rows = [item.to_dict() for item in items]
        df = pd.DataFrame(rows, columns=FIELD_ORDER)

        with pd.ExcelWriter(filename, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name=SHEET_NAME)
            Storage._auto_adjust_columns(writer, SHEET_NAME, df)

        logger.info(f"Saved {len(rows)} items to {filename}")

    @staticmethod
    def _auto_adjust_columns(writer, sheet_name, df):
        """Helper to auto-adjust column widths in a sheet."""
        worksheet = writer.sheets[sheet_name]
        for idx, col in enumerate(df.columns):
            max_len = max(
                df[col].fillna('').astype(str).map(len).max(),
                len(str(col))
            )
            col_letter = get_column_letter(idx + 1)
            worksheet.column_dimensions[col_letter].width = min(max_len + 5, 80)
