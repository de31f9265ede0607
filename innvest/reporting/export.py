"""Tabular export of report rows (CSV and Excel).

Rows are turned into a pandas DataFrame whose columns follow the row type's
field order, so an empty result still exports a header.
"""

from __future__ import annotations

from dataclasses import asdict, fields
from decimal import Decimal
from io import BytesIO
from typing import Any, Sequence

import pandas as pd

EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MEDIA_TYPE = "text/csv"


def rows_to_dicts(rows: Sequence[Any]) -> list[dict[str, Any]]:
    return [asdict(row) for row in rows]


def rows_to_dataframe(rows: Sequence[Any], row_type: type) -> pd.DataFrame:
    """Build a DataFrame from dataclass rows; Decimal columns become floats."""
    columns = [f.name for f in fields(row_type)]
    records = [
        {k: float(v) if isinstance(v, Decimal) else v for k, v in asdict(row).items()}
        for row in rows
    ]
    return pd.DataFrame.from_records(records, columns=columns)


def export_csv(rows: Sequence[Any], row_type: type) -> str:
    return rows_to_dataframe(rows, row_type).to_csv(index=False)


def export_excel(rows: Sequence[Any], row_type: type, sheet_name: str = "Report") -> BytesIO:
    """Write rows to a single-sheet XLSX workbook."""
    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        rows_to_dataframe(rows, row_type).to_excel(
            writer, sheet_name=sheet_name[:31], index=False  # Excel sheet name limit
        )
    output.seek(0)
    return output
