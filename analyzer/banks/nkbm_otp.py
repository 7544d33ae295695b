"""NKBM / OTP banka export schema.

Account turnover export with separate debit (BREME) and credit (DOBRO)
columns and upper-case Slovenian headers, e.g. ``DATUM VALUTE``,
``NAMEN``, ``UDELEŽENEC - NAZIV``.
"""

from models import BankSchema, ColumnPattern, DateFormat

SCHEMA = BankSchema(
    id="nkbm-otp",
    name="NKBM / OTP banka",
    date_column=ColumnPattern(text="DATUM VALUTE"),
    income_column=ColumnPattern(text="DOBRO"),
    expense_column=ColumnPattern(text="BREME"),
    description_column=ColumnPattern(text="NAMEN"),
    recipient_column=ColumnPattern(text=r"UDELE.*NAZIV", regex=True),
    date_format=DateFormat.DOTTED,
    currency_symbol="€",
    required_columns=("date", "expense"),
)

from .registry import register_bank

register_bank(SCHEMA)
