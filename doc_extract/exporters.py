import io
import re
import logging
from datetime import date
from typing import List, Optional

import pandas as pd

from doc_extract.core.config import EXPORT_SHEET_NAME
from doc_extract.core.handles import OPENPYXL

logger = logging.getLogger(__name__)

# (header, transaction field, column width)
EXPORT_COLUMNS = [
    ("Date", "date", 12),
    ("Description", "description", 50),
    ("Reference", "reference", 18),
    ("Debit", "debit", 12),
    ("Credit", "credit", 12),
    ("Balance", "balance", 12),
]

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ExportError(RuntimeError):
    pass


def export_filename(bank_name: str, today: Optional[date] = None) -> str:
    stamp = (today or date.today()).isoformat()
    label = re.sub(r"\s+", "_", bank_name or "Unknown")
    return f"{label}_Statement_{stamp}.xlsx"


def transactions_frame(transactions: List[dict]) -> pd.DataFrame:
    rows = [
        {header: (t.get(field) or "") for header, field, _ in EXPORT_COLUMNS}
        for t in transactions
    ]
    return pd.DataFrame(rows, columns=[header for header, _, _ in EXPORT_COLUMNS])


def export_transactions_xlsx(transactions: List[dict], bank_name: str) -> bytes:
    """
    Render reviewed transactions as a single-sheet workbook.

    The bank label only shapes the download filename (see export_filename);
    the sheet layout is fixed.
    """
    try:
        openpyxl = OPENPYXL.get()
        df = transactions_frame(transactions)

        buf = io.BytesIO()
        with pd.ExcelWriter(buf, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=EXPORT_SHEET_NAME, index=False)
            ws = writer.sheets[EXPORT_SHEET_NAME]
            for idx, (_, _, width) in enumerate(EXPORT_COLUMNS, start=1):
                ws.column_dimensions[openpyxl.utils.get_column_letter(idx)].width = width

        logger.info("Exported %d transactions for %s", len(df), bank_name)
        return buf.getvalue()
    except Exception as e:
        logger.exception("Export error")
        raise ExportError("Failed to export to Excel. Please try again.") from e
