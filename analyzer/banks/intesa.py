"""Intesa Sanpaolo export schema."""

from models import BankSchema, ColumnPattern, DateFormat

SCHEMA = BankSchema(
    id="intesa",
    name="Intesa Sanpaolo",
    date_column=ColumnPattern(text="Datum knjiženja"),
    income_column=ColumnPattern(text="Dobro"),
    expense_column=ColumnPattern(text="Breme"),
    description_column=ColumnPattern(text="Opis"),
    recipient_column=ColumnPattern(text=r"naziv|prejemnik|pla[cč]nik", regex=True),
    date_format=DateFormat.DOTTED,
    currency_symbol="€",
)

from .registry import register_bank

register_bank(SCHEMA)
