from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Mapping, Sequence

import pandas as pd

from ..domain.errors import TableReadError, UnsupportedFileError
from ..types import Dataset, Row
from .export.delimited import to_delimited_text


CSV_SUFFIXES = {".csv"}
EXCEL_SUFFIXES = {".xlsx", ".xls"}


def _frame_to_rows(df: pd.DataFrame) -> Dataset:
    df = df.fillna("")
    df.columns = [str(c).strip() for c in df.columns]
    return [{str(k): str(v) for k, v in rec.items()} for rec in df.to_dict(orient="records")]


def read_table(path: Path) -> Dataset:
    """Decode a CSV or the first sheet of a workbook into rows of strings.

    Headers are trimmed; cell values are kept verbatim (blank cells become "").
    """
    suffix = path.suffix.lower()
    if suffix not in CSV_SUFFIXES | EXCEL_SUFFIXES:
        raise UnsupportedFileError(
            f"Unsupported file format '{suffix or path.name}'. Please upload a CSV or Excel file."
        )
    try:
        if suffix in CSV_SUFFIXES:
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        else:
            df = pd.read_excel(path, sheet_name=0, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        return []
    except (OSError, ValueError, ImportError, zipfile.BadZipFile) as exc:
        raise TableReadError(f"Error reading file: {exc}") from exc
    return _frame_to_rows(df)


def write_delimited(rows: Sequence[Row], out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(to_delimited_text(rows), encoding="utf-8")


def write_excel(sheets: Mapping[str, Sequence[Row]], out_path: Path) -> None:
    """Write each row set as a sheet wrapped in a native Excel Table.

    Empty row sets are written as an empty sheet without a table.
    """
    from openpyxl.styles import Alignment, Font
    from openpyxl.utils import get_column_letter
    from openpyxl.worksheet.table import Table, TableStyleInfo

    out_path.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        for sheet_name, rows in sheets.items():
            headers = list(rows[0].keys()) if rows else []
            df_out = pd.DataFrame(list(rows), columns=headers)
            df_out.to_excel(writer, sheet_name=sheet_name, index=False)
            if not headers or not rows:
                continue

            ws = writer.sheets[sheet_name]
            max_row = len(df_out) + 1  # +1 for header
            table_ref = f"A1:{get_column_letter(len(headers))}{max_row}"
            table = Table(displayName=sheet_name.replace(" ", "_"), ref=table_ref)
            table.tableStyleInfo = TableStyleInfo(
                name="TableStyleMedium2",
                showFirstColumn=False,
                showLastColumn=False,
                showRowStripes=True,
                showColumnStripes=False,
            )
            ws.add_table(table)

            for idx, header in enumerate(headers, start=1):
                col = get_column_letter(idx)
                ws.column_dimensions[col].width = max(18, min(40, len(str(header)) + 2))
                cell = ws.cell(row=1, column=idx)
                cell.alignment = Alignment(horizontal="left")
                cell.font = Font(color="FFFFFFFF")


class IOService:
    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def read(self, path: Path) -> Dataset:
        self.logger.info("Reading table", extra={"path": str(path)})
        rows = read_table(path)
        self.logger.info(
            "Parsed table",
            extra={"rows": len(rows), "columns": list(rows[0].keys()) if rows else []},
        )
        return rows

    def write_rows(self, rows: Sequence[Row], out_path: Path) -> None:
        self.logger.info(f"Writing {out_path.name}", extra={"path": str(out_path), "rows": len(rows)})
        write_delimited(rows, out_path)

    def write_workbook(self, sheets: Mapping[str, Sequence[Row]], out_path: Path) -> None:
        self.logger.info(
            f"Writing {out_path.name}", extra={"path": str(out_path), "sheets": len(sheets)}
        )
        write_excel(sheets, out_path)
