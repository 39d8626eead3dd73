"""
Bulk Import ("migration") of Pasted Tabular Rows

Turns rows copied from a spreadsheet or another ledger app into
transactions. Cells are tab separated, or separated by two or more
spaces when a line has fewer than three tab cells.

Two row layouts are recognized:
- 7+ cells: date, _, category, _, note, _, type, amount
- shorter:  date, category, note, amount, type

DESIGN DECISION: Import is best-effort. A row with an unparseable date,
a missing or non-numeric amount or an empty category is skipped and the
rest of the batch continues. Only a batch that yields nothing at all is
reported as a failure, via NoValidRowsError.

Imported rows get synthesized timestamps (UTC midnight of their date plus
a small step per imported row) so rows sharing a date keep their relative
order when sorted newest first.
"""

import re
from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional

import structlog

from ledger.config import get_settings
from ledger.models.ledger import ImportResult, Transaction, TransactionType

logger = structlog.get_logger()

_WIDE_SPACE = re.compile(r"\s{2,}")
_DATE_SEPARATORS = re.compile(r"[/\s,.-]+")
_NOT_AMOUNT = re.compile(r"[^\d.]")
_LEADING_NUMBER = re.compile(r"^(\d+\.?\d*|\.\d+)")
_LEADING_INT = re.compile(r"^\d+")

# Words in the type cell that mark a row as income
_INCOME_MARKERS = ("income", "salary")


class MigrationError(Exception):
    """Base exception for bulk import."""
    pass


class NoValidRowsError(MigrationError):
    """The pasted text did not contain a single importable row."""

    def __init__(self, skipped_count: int = 0):
        self.skipped_count = skipped_count
        super().__init__("No data detected. Retry with full rows.")


def split_cells(line: str) -> list[str]:
    """Non-empty, stripped cells of one pasted line."""
    parts = line.split("\t")
    if len(parts) < 3:
        parts = _WIDE_SPACE.split(line)
    return [part.strip() for part in parts if part.strip()]


def parse_amount(raw: Optional[str]) -> Optional[Decimal]:
    """
    Amount from a cell such as "Rs 1,250.00".

    Everything except digits and dots is dropped first; the leading number
    of what remains is the amount. None when no number is left.
    """
    if not raw:
        return None
    match = _LEADING_NUMBER.match(_NOT_AMOUNT.sub("", raw))
    if not match:
        return None
    try:
        return Decimal(match.group(1))
    except InvalidOperation:
        return None


def _leading_int(part: str) -> Optional[int]:
    match = _LEADING_INT.match(part)
    return int(match.group(0)) if match else None


def parse_row_date(raw: str) -> Optional[date]:
    """
    Date from a cell in Y-M-D (4-digit first part) or D-M-Y order.

    Separators may be '/', '-', '.', ',' or whitespace. Two-digit years
    are read as 20xx. None when the parts do not form a real date.
    """
    parts = [part for part in _DATE_SEPARATORS.split(raw.strip()) if part]
    if len(parts) < 3:
        return None

    if len(parts[0]) == 4:
        year, month, day = (_leading_int(p) for p in parts[:3])
    else:
        day, month, year = (_leading_int(p) for p in parts[:3])

    if year is None or month is None or day is None:
        return None
    if year < 100:
        year += 2000
    try:
        return date(year, month, day)
    except ValueError:
        return None


def detect_type(type_cell: Optional[str]) -> TransactionType:
    text = (type_cell or "").lower()
    if any(marker in text for marker in _INCOME_MARKERS):
        return TransactionType.INCOME
    return TransactionType.EXPENSE


def midnight_utc_ms(day: date) -> int:
    return int(datetime.combine(day, time(), tzinfo=timezone.utc).timestamp() * 1000)


def _cell(cells: list[str], index: int) -> Optional[str]:
    return cells[index] if index < len(cells) else None


def parse_migration_text(
    text: str,
    timestamp_step_ms: Optional[int] = None,
) -> ImportResult:
    """
    Parse pasted rows into transactions, skipping malformed rows.

    Args:
        text: Pasted text, one row per line
        timestamp_step_ms: Gap between synthesized timestamps of consecutive
            imported rows (defaults to the configured import_timestamp_step_ms)

    Returns:
        ImportResult with the imported transactions in input order

    Raises:
        NoValidRowsError: If no row could be imported
    """
    if timestamp_step_ms is None:
        timestamp_step_ms = get_settings().engine.import_timestamp_step_ms

    imported: list[Transaction] = []
    skipped = 0

    for line_number, line in enumerate(text.strip().splitlines(), start=1):
        cells = split_cells(line)
        if len(cells) < 3:
            skipped += 1
            logger.debug("import_row_skipped", line=line_number, reason="too_few_cells")
            continue

        if len(cells) >= 7:
            date_cell, category, note = cells[0], cells[2], cells[4]
            type_cell, amount_cell = _cell(cells, 6), _cell(cells, 7)
        else:
            date_cell, category, note = cells[0], cells[1], cells[2]
            amount_cell, type_cell = _cell(cells, 3), _cell(cells, 4)

        amount = parse_amount(amount_cell)
        if amount is None:
            skipped += 1
            logger.debug("import_row_skipped", line=line_number, reason="invalid_amount")
            continue

        row_date = parse_row_date(date_cell)
        if row_date is None:
            skipped += 1
            logger.debug("import_row_skipped", line=line_number, reason="invalid_date")
            continue

        if not category:
            skipped += 1
            logger.debug("import_row_skipped", line=line_number, reason="empty_category")
            continue

        imported.append(Transaction(
            type=detect_type(type_cell),
            category=category,
            amount=amount,
            date=row_date,
            note=note or None,
            timestamp=midnight_utc_ms(row_date) + len(imported) * timestamp_step_ms,
        ))

    if not imported:
        raise NoValidRowsError(skipped)

    return ImportResult(transactions=tuple(imported), skipped_count=skipped)
