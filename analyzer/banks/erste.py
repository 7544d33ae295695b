"""Erste Bank export schema.

Erste exports a single signed amount column ("Iznos": positive for money in,
negative for money out) and prefixes the table with account/title rows, so
the header row has to be located by scanning.
"""

from models import BankSchema, ColumnPattern, DateFormat

AMOUNT_COLUMN = ColumnPattern(text="Iznos")

SCHEMA = BankSchema(
    id="erste",
    name="Erste Bank",
    date_column=ColumnPattern(text="Datum valute"),
    income_column=AMOUNT_COLUMN,
    expense_column=AMOUNT_COLUMN,
    description_column=ColumnPattern(text="Opis"),
    recipient_column=ColumnPattern(text=r"(naziv\s+)?(primatelj|platitelj)", regex=True),
    date_format=DateFormat.DOTTED,
    currency_symbol="€",
    scan_for_header_row=True,
    required_columns=("date", "amount"),
)

from .registry import register_bank

register_bank(SCHEMA)
