#!/usr/bin/env python3
"""
Excel reports for batch runs and expectation checks.

Thin wrappers around openpyxl: one header row, auto-sized columns, a styled
table over the data, and a yellow fill on rows that need attention
(skipped files, failed expectations).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from .batch_processor import BatchResult
from .expectation_checker import RESULT_HEADERS, ExpectationReport, outcome_row

MAX_COLUMN_WIDTH = 60
TABLE_STYLE = "TableStyleMedium9"
HEADER_FONT = Font(bold=True)
FLAG_FILL = PatternFill(start_color="FFFF00", end_color="FFFF00", fill_type="solid")

BATCH_HEADERS = ["input", "kind", "output_name", "output_path", "season", "episodes", "year", "part", "error"]


@dataclass(frozen=True)
class ReportSheet:
    """
    One worksheet of a report.

    Attributes:
        name: Sheet/tab name.
        headers: Ordered column headers.
        rows: Row values ordered to match headers.
        flagged_rows: Per-row flags; flagged rows get a yellow fill.
    """

    name: str
    headers: Sequence[str]
    rows: Sequence[Sequence[Any]]
    flagged_rows: Optional[Sequence[bool]] = None


def _table_name(sheet_name: str) -> str:
    return "".join(ch for ch in sheet_name if ch.isalnum()) + "Table"


def _fit_columns(ws) -> None:
    for column in ws.iter_cols(min_row=1, max_row=ws.max_row):
        widest = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        ws.column_dimensions[get_column_letter(column[0].column)].width = min(widest + 2, MAX_COLUMN_WIDTH)


def _write_sheet(ws, sheet: ReportSheet) -> None:
    ws.title = sheet.name
    ws.append(list(sheet.headers))
    for cell in ws[1]:
        cell.font = HEADER_FONT

    flags = list(sheet.flagged_rows or [])
    for position, row in enumerate(sheet.rows):
        ws.append(list(row))
        if position < len(flags) and flags[position]:
            for cell in ws[ws.max_row]:
                cell.fill = FLAG_FILL

    _fit_columns(ws)

    if sheet.rows:
        table = Table(
            displayName=_table_name(sheet.name),
            ref=f"A1:{get_column_letter(len(sheet.headers))}{ws.max_row}",
        )
        table.tableStyleInfo = TableStyleInfo(name=TABLE_STYLE, showRowStripes=True)
        ws.add_table(table)


def write_report(output_path: Path | str, sheets: Sequence[ReportSheet]) -> Path:
    """
    Write a workbook with the given sheets, creating parent directories.

    Returns:
        Path to the written workbook.
    """
    if not sheets:
        raise ValueError("At least one sheet must be provided to write a report.")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    wb = Workbook()
    for idx, sheet in enumerate(sheets):
        ws = wb.active if idx == 0 else wb.create_sheet()
        _write_sheet(ws, sheet)

    wb.save(output_path)
    return output_path


def batch_sheet(result: BatchResult, name: str = "Batch Results") -> ReportSheet:
    """One row per input path; skipped files are flagged."""
    rows: List[List[Any]] = []
    for entry in result.entries:
        media_file = entry.media_file
        rows.append([
            entry.path,
            entry.kind or "",
            entry.output_name or "",
            entry.output_path or "",
            getattr(media_file, "season", "") if media_file is not None else "",
            getattr(media_file, "episode_text", "") if media_file is not None else "",
            media_file.year_text if media_file is not None else "",
            media_file.part_text if media_file is not None else "",
            entry.error or "",
        ])
    return ReportSheet(
        name=name,
        headers=BATCH_HEADERS,
        rows=rows,
        flagged_rows=[entry.skipped for entry in result.entries],
    )


def expectation_sheet(report: ExpectationReport, name: str = "Expectations") -> ReportSheet:
    """One row per expectation; failures are flagged."""
    rows = [list(outcome_row(outcome)) for outcome in report.outcomes]
    return ReportSheet(
        name=name,
        headers=RESULT_HEADERS,
        rows=rows,
        flagged_rows=[not outcome.passed for outcome in report.outcomes],
    )
