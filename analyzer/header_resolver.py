"""Header row discovery and column resolution against a bank schema."""

import logging
from typing import Optional, Sequence

from models import BankSchema, ColumnPattern, RawSheet, ResolvedColumns

logger = logging.getLogger(__name__)


def find_header_row(grid: Sequence[Sequence[str]], schema: BankSchema) -> int:
    """
    Locate the header row of a sheet grid.

    Only schemas with ``scan_for_header_row`` are scanned. The first row
    holding a cell that contains the date or amount column text
    (case-sensitive) is the header. Falls back to row 0 when nothing
    matches.

    Args:
        grid: Header row followed by data rows, as produced by ingestion
        schema: Active bank schema

    Returns:
        Index of the header row within ``grid``
    """
    if not schema.scan_for_header_row:
        return 0

    markers = (schema.date_column.text, schema.income_column.text)
    for index, row in enumerate(grid):
        for cell in row:
            text = cell or ""
            if any(marker in text for marker in markers):
                return index

    logger.warning(
        "No header row found for %s, falling back to the first row", schema.name
    )
    return 0


def find_column(headers: Sequence[str], pattern: ColumnPattern) -> Optional[int]:
    """Index of the first header cell matching ``pattern``, or None."""
    for index, header in enumerate(headers):
        if pattern.matches(header or ""):
            return index
    return None


def resolve_columns(sheet: RawSheet, schema: BankSchema) -> ResolvedColumns:
    """
    Resolve logical columns of a sheet to 0-based indices.

    Args:
        sheet: Sheet as delivered by ingestion (first row in ``headers``)
        schema: Active bank schema

    Returns:
        ResolvedColumns with the header position, column indices and the
        data rows that follow the header
    """
    grid = [sheet.headers, *sheet.rows]
    header_index = find_header_row(grid, schema)
    headers = [str(cell or "") for cell in grid[header_index]]

    return ResolvedColumns(
        header_row_index=header_index,
        date=find_column(headers, schema.date_column),
        income=find_column(headers, schema.income_column),
        expense=find_column(headers, schema.expense_column),
        description=find_column(headers, schema.description_column),
        recipient=find_column(headers, schema.recipient_column),
        data_rows=[list(row) for row in grid[header_index + 1 :]],
    )


def is_transaction_sheet(sheet: RawSheet, schema: BankSchema) -> bool:
    """A sheet qualifies when its date column and an amount column resolve."""
    columns = resolve_columns(sheet, schema)
    return columns.date is not None and (
        columns.income is not None or columns.expense is not None
    )


def is_transaction_file(sheets: Sequence[RawSheet], schema: BankSchema) -> bool:
    """Judge a file by its first sheet only."""
    if not sheets:
        return False
    return is_transaction_sheet(sheets[0], schema)
