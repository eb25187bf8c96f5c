#!/usr/bin/env python3
"""
Expectation checker: runs a file of known inputs and expected names.

Input files are either CSV (first two columns input, expected; a header
row naming them is skipped) or Excel workbooks with 'input' and
'expected' columns. Each input is parsed, rendered, and compared with its
expected name. Results can be written back out as CSV or Excel.
"""

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from openpyxl import load_workbook

from .batch_processor import FATAL_ERRORS
from .media_factory import create_media_file
from .media_file import MediaFile

logger = logging.getLogger(__name__)

RESULT_HEADERS = ["input", "expected", "actual", "passed", "error"]


@dataclass
class Expectation:
    input: str
    expected: str


@dataclass
class ExpectationOutcome:
    input: str
    expected: str
    actual: Optional[str] = None
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.error is None and self.actual == self.expected


@dataclass
class ExpectationReport:
    outcomes: List[ExpectationOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def passed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.passed)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def failures(self) -> List[ExpectationOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.passed]

    def summary(self) -> str:
        return f"{self.passed}/{self.total} passed, {self.failed} failed"


def _is_header(first: str, second: str) -> bool:
    return first.strip().lower() == "input" and second.strip().lower() == "expected"


def read_expectations(filepath: Union[str, Path]) -> List[Expectation]:
    """
    Read expectations from a CSV or .xlsx file.

    Raises:
        ValueError: If an Excel file lacks 'input' or 'expected' columns
    """
    filepath = Path(filepath)
    if filepath.suffix == '.xlsx':
        return _read_excel(filepath)

    expectations: List[Expectation] = []
    with filepath.open('r', encoding='utf-8', newline='') as f:
        for row in csv.reader(f):
            if len(row) < 2 or not row[0].strip():
                continue
            if not expectations and _is_header(row[0], row[1]):
                continue
            expectations.append(Expectation(input=row[0], expected=row[1]))
    return expectations


def _read_excel(filepath: Path) -> List[Expectation]:
    wb = load_workbook(filepath, read_only=True)
    try:
        ws = wb.active
        if ws is None:
            raise ValueError("Excel file has no usable worksheet")

        rows = ws.iter_rows(values_only=True)
        headers = [str(value).strip().lower() if value is not None else "" for value in next(rows, ())]
        if "input" not in headers or "expected" not in headers:
            raise ValueError("Could not find 'input' and 'expected' columns in Excel file")
        input_idx = headers.index("input")
        expected_idx = headers.index("expected")

        expectations: List[Expectation] = []
        for row in rows:
            if not row or row[input_idx] is None:
                continue
            expected = row[expected_idx] if expected_idx < len(row) else None
            expectations.append(Expectation(input=str(row[input_idx]), expected=str(expected or "")))
        return expectations
    finally:
        wb.close()


class ExpectationChecker:
    """Parses each expectation input and compares the rendered name."""

    def __init__(self, media_type: Optional[str] = None, template: Optional[str] = None,
                 factory: Optional[Callable[..., MediaFile]] = None):
        """
        Args:
            media_type: auto, tv or movie
            template: Format string to render; the kind's default when None
            factory: Media file factory, create_media_file by default
        """
        self.media_type = media_type
        self.template = template
        self.factory = factory or create_media_file

    def check(self, expectation: Expectation) -> ExpectationOutcome:
        outcome = ExpectationOutcome(input=expectation.input, expected=expectation.expected)
        try:
            media_file = self.factory(expectation.input, self.media_type)
            outcome.actual = media_file.render(self.template)
        except FATAL_ERRORS as exc:
            outcome.error = f"{type(exc).__name__}: {exc}"
        if not outcome.passed:
            logger.info("Expectation failed for %r: expected %r, got %r",
                        outcome.input, outcome.expected, outcome.error or outcome.actual)
        return outcome

    def check_all(self, expectations: List[Expectation]) -> ExpectationReport:
        report = ExpectationReport(outcomes=[self.check(e) for e in expectations])
        logger.info("Expectations: %s", report.summary())
        return report

    def check_file(self, filepath: Union[str, Path]) -> ExpectationReport:
        return self.check_all(read_expectations(filepath))


def outcome_row(outcome: ExpectationOutcome) -> Tuple[str, str, str, str, str]:
    return (outcome.input, outcome.expected, outcome.actual or "",
            "yes" if outcome.passed else "no", outcome.error or "")


def write_results_csv(report: ExpectationReport, output_path: Union[str, Path]) -> Path:
    """Write one CSV row per outcome, with a header row."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open('w', encoding='utf-8', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(RESULT_HEADERS)
        writer.writerows(outcome_row(outcome) for outcome in report.outcomes)
    return output_path
