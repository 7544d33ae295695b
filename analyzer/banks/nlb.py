"""NLB export schema."""

from models import BankSchema, ColumnPattern, DateFormat

SCHEMA = BankSchema(
    id="nlb",
    name="NLB",
    date_column=ColumnPattern(text="Datum valute"),
    income_column=ColumnPattern(text="Priliv"),
    expense_column=ColumnPattern(text="Odliv"),
    description_column=ColumnPattern(text="Namen"),
    recipient_column=ColumnPattern(text=r"naziv\s+(prejemnika|pla[cč]nika)|partner", regex=True),
    date_format=DateFormat.DOTTED,
    currency_symbol="€",
)

from .registry import register_bank

register_bank(SCHEMA)
