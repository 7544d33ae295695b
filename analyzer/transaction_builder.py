"""Build canonical transactions from a resolved statement sheet."""

import logging
from datetime import date
from typing import Optional, Sequence

from errors import MissingRequiredColumnsError
from field_parsers import parse_date, parse_locale_amount
from header_resolver import resolve_columns
from models import (
    UNKNOWN,
    BankSchema,
    RawSheet,
    ResolvedColumns,
    Transaction,
    TransactionType,
)

logger = logging.getLogger(__name__)


def build_transactions(sheet: RawSheet, schema: BankSchema) -> list[Transaction]:
    """
    Extract transaction records from a statement sheet.

    Rows without a date, with an unparsable date, or without a positive
    amount are skipped. Separate income/expense columns may yield two
    transactions for one row.

    Args:
        sheet: Statement sheet
        schema: Active bank schema

    Returns:
        Transactions in row order

    Raises:
        MissingRequiredColumnsError: if a column the bank requires is not
            present in the header
    """
    columns = resolve_columns(sheet, schema)

    missing = [
        name for name in schema.required_columns if getattr(columns, name) is None
    ]
    if missing:
        raise MissingRequiredColumnsError(schema.id, missing)

    signed = columns.income is not None and columns.income == columns.expense

    transactions = []
    skipped = 0
    for row in columns.data_rows:
        date_text = _cell(row, columns.date)
        if not date_text:
            continue

        transaction_date = parse_date(date_text, schema.date_format)
        if transaction_date is None:
            skipped += 1
            continue

        if signed:
            built = _signed_row(row, columns, transaction_date, schema)
        else:
            built = _split_row(row, columns, transaction_date, schema)

        if not built:
            skipped += 1
        transactions.extend(built)

    logger.info(
        "Extracted %d transactions from sheet '%s' (%s), skipped %d rows",
        len(transactions),
        sheet.sheet_name,
        schema.name,
        skipped,
    )
    return transactions


def _signed_row(
    row: Sequence[str],
    columns: ResolvedColumns,
    transaction_date: date,
    schema: BankSchema,
) -> list[Transaction]:
    """One signed amount: positive is income, negative is expense."""
    amount = parse_locale_amount(_cell(row, columns.amount))
    if amount == 0:
        return []

    transaction_type = (
        TransactionType.INCOME if amount > 0 else TransactionType.EXPENSE
    )
    return [_make(row, columns, transaction_date, abs(amount), transaction_type, schema)]


def _split_row(
    row: Sequence[str],
    columns: ResolvedColumns,
    transaction_date: date,
    schema: BankSchema,
) -> list[Transaction]:
    """Separate income and expense columns, each read on its own."""
    built = []
    for index, transaction_type in (
        (columns.income, TransactionType.INCOME),
        (columns.expense, TransactionType.EXPENSE),
    ):
        text = _cell(row, index)
        if not text:
            continue
        amount = parse_locale_amount(text)
        # Negative values in a one-sided column are discarded, not flipped
        if amount <= 0:
            continue
        built.append(
            _make(row, columns, transaction_date, amount, transaction_type, schema)
        )
    return built


def _make(row, columns, transaction_date, amount, transaction_type, schema):
    return Transaction(
        transaction_date=transaction_date,
        amount=amount,
        description=_cell(row, columns.description) or UNKNOWN,
        recipient=_cell(row, columns.recipient) or UNKNOWN,
        transaction_type=transaction_type,
        currency=schema.currency_symbol,
    )


def _cell(row: Sequence[str], index: Optional[int]) -> str:
    """Stripped cell text; rows may be shorter than the header."""
    if index is None or index >= len(row):
        return ""
    value = row[index]
    if value is None:
        return ""
    return str(value).strip()
