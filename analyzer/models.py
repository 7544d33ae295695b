"""Pydantic models for bank statement analysis."""

import re
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN = "Unknown"


class DateFormat(str, Enum):
    """Date layouts used by bank exports."""

    DOTTED = "dd.mm.yyyy"
    SLASHED = "dd/mm/yyyy"
    OTHER = "other"


class TransactionType(str, Enum):
    """Polarity of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class ColumnPattern(BaseModel):
    """Pattern used to find a logical column among header cells."""

    model_config = ConfigDict(frozen=True)

    text: str
    """Substring (or regular expression when ``regex`` is set)."""
    regex: bool = False
    """Match with ``re.search`` instead of a plain substring test."""

    def matches(self, header: str) -> bool:
        """Case-insensitive test of this pattern against a header cell."""
        if self.regex:
            return re.search(self.text, header, re.IGNORECASE) is not None
        return self.text.upper() in header.upper()


class BankSchema(BaseModel):
    """Column layout, date format and currency of one bank's export."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    date_column: ColumnPattern
    income_column: ColumnPattern
    expense_column: ColumnPattern
    """Same pattern as ``income_column`` when the bank exports one signed amount."""
    description_column: ColumnPattern
    recipient_column: ColumnPattern
    date_format: DateFormat = DateFormat.DOTTED
    currency_symbol: str = "€"
    scan_for_header_row: bool = False
    """Export has title/metadata rows above the real header row."""
    required_columns: tuple[str, ...] = ("date",)
    """Logical columns the transaction builder cannot do without."""

    @property
    def is_signed_amount(self) -> bool:
        return self.income_column == self.expense_column


class RawSheet(BaseModel):
    """One sheet of an input file as a grid of text cells."""

    sheet_name: str
    headers: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)


class ResolvedColumns(BaseModel):
    """Header row position and 0-based column indices for a sheet."""

    header_row_index: int = 0
    date: Optional[int] = None
    income: Optional[int] = None
    expense: Optional[int] = None
    description: Optional[int] = None
    recipient: Optional[int] = None
    data_rows: list[list[str]] = Field(default_factory=list)
    """Rows that follow the header row."""

    @property
    def amount(self) -> Optional[int]:
        """Single amount column of a signed-amount export."""
        return self.income


class Transaction(BaseModel):
    """A single canonical transaction record."""

    model_config = ConfigDict(frozen=True)

    transaction_date: date
    amount: Decimal = Field(gt=0)
    """Transaction amount (always positive, use transaction_type for polarity)."""
    description: str = UNKNOWN
    recipient: str = UNKNOWN
    transaction_type: TransactionType
    currency: str = "€"
    """Currency symbol of the bank; amounts are never converted."""


class CategoryBucket(BaseModel):
    """Transactions that share a category label."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Decimal("0")
    transactions: tuple[Transaction, ...] = ()


class RecipientSummary(BaseModel):
    """Totals for one normalized recipient name."""

    model_config = ConfigDict(frozen=True)

    name: str
    amount: Decimal
    count: int

    @property
    def label(self) -> str:
        return f"{self.name} ({self.count}x)"


class DailyBucket(BaseModel):
    """Totals for one calendar day."""

    model_config = ConfigDict(frozen=True)

    date: str
    """ISO calendar day (``yyyy-mm-dd``)."""
    amount: Decimal
    count: int
    transactions: tuple[Transaction, ...] = ()


class StatementParseResult(BaseModel):
    """Outcome of running the pipeline over one loaded file."""

    bank_id: str
    sheets: list[RawSheet] = Field(default_factory=list)
    is_transaction_file: bool = False
    transactions: list[Transaction] = Field(default_factory=list)
    message: Optional[str] = None
    """Single human-readable diagnostic for the file, if any."""
