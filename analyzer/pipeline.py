"""Statement session: bank selection, parsing and aggregate queries."""

import logging
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Sequence, Union

from aggregations import aggregate_by_category, aggregate_by_day, aggregate_by_recipient
from banks import lookup
from errors import MissingRequiredColumnsError
from header_resolver import is_transaction_file
from models import (
    BankSchema,
    CategoryBucket,
    DailyBucket,
    RawSheet,
    RecipientSummary,
    StatementParseResult,
    Transaction,
    TransactionType,
)
from transaction_builder import build_transactions

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class ChartMode(str, Enum):
    """Aggregate view requested for a month."""

    CATEGORY = "category"
    RECIPIENT = "recipient"
    DAY = "day"


Aggregate = Union[dict[str, CategoryBucket], dict[str, RecipientSummary], list[DailyBucket]]


def parse_statement(bank_id: str, sheets: Sequence[RawSheet]) -> StatementParseResult:
    """
    Run the pipeline over the sheets of one file.

    Only the first sheet is considered for transactions; every sheet is
    kept in the result for display.

    Args:
        bank_id: Registered bank identifier
        sheets: Sheets produced by ingestion

    Returns:
        StatementParseResult with transactions and at most one message

    Raises:
        UnknownBankError: if bank_id is not registered
    """
    schema = lookup(bank_id)
    sheets = list(sheets)

    if not is_transaction_file(sheets, schema):
        logger.warning("File does not match the %s statement layout", schema.name)
        return StatementParseResult(
            bank_id=bank_id,
            sheets=sheets,
            message=f"This file does not look like a {schema.name} statement",
        )

    try:
        transactions = build_transactions(sheets[0], schema)
    except MissingRequiredColumnsError as e:
        logger.warning("%s", e)
        return StatementParseResult(
            bank_id=bank_id,
            sheets=sheets,
            is_transaction_file=True,
            message=str(e),
        )

    return StatementParseResult(
        bank_id=bank_id,
        sheets=sheets,
        is_transaction_file=True,
        transactions=transactions,
    )


def filter_transactions(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
    transaction_type: TransactionType,
) -> list[Transaction]:
    """Transactions of one type in one calendar month."""
    return [
        tx
        for tx in transactions
        if tx.transaction_date.year == year
        and tx.transaction_date.month == month
        and tx.transaction_type == transaction_type
    ]


def month_key(day: date) -> str:
    return f"{day.year}-{day.month:02d}"


def month_label(key: str) -> str:
    """Turn '2024-03' into 'March 2024', independent of the process locale."""
    year, month = key.split("-")
    return f"{MONTH_NAMES[int(month) - 1]} {int(year)}"


def format_amount(amount: Decimal, currency_symbol: str) -> str:
    """Display form of an amount, e.g. '€1,234.56'."""
    return f"{currency_symbol}{amount:,.2f}"


class StatementSession:
    """Currently selected bank and the most recently parsed file."""

    def __init__(self, bank_id: str):
        self.schema: BankSchema = lookup(bank_id)
        self.result: Optional[StatementParseResult] = None

    @property
    def bank_id(self) -> str:
        return self.schema.id

    @property
    def transactions(self) -> list[Transaction]:
        return self.result.transactions if self.result else []

    def select_bank(self, bank_id: str) -> None:
        """Switch banks, discarding the previously parsed file."""
        self.schema = lookup(bank_id)
        self.result = None

    def load_sheets(self, sheets: Sequence[RawSheet]) -> StatementParseResult:
        """Parse a new file, replacing the previous one."""
        self.result = None
        self.result = parse_statement(self.schema.id, sheets)
        return self.result

    def available_months(self) -> list[str]:
        """Months with transactions as 'YYYY-MM', newest first."""
        months = {month_key(tx.transaction_date) for tx in self.transactions}
        return sorted(months, reverse=True)

    def select(
        self, year: int, month: int, transaction_type: TransactionType
    ) -> list[Transaction]:
        return filter_transactions(self.transactions, year, month, transaction_type)

    def aggregate(
        self,
        year: int,
        month: int,
        transaction_type: TransactionType,
        mode: ChartMode = ChartMode.CATEGORY,
    ) -> Aggregate:
        """Aggregate one month of one transaction type in the given view."""
        selected = self.select(year, month, transaction_type)
        if mode == ChartMode.RECIPIENT:
            return aggregate_by_recipient(selected)
        if mode == ChartMode.DAY:
            return aggregate_by_day(selected)
        return aggregate_by_category(selected)

    def total(
        self, year: int, month: int, transaction_type: TransactionType
    ) -> Decimal:
        """Grand total of one month of one transaction type."""
        return sum(
            (tx.amount for tx in self.select(year, month, transaction_type)),
            Decimal("0"),
        )
