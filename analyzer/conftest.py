"""Pytest configuration: readable test names and shared statement fixtures.

Test function docstrings are used as display names in pytest output,
making test reports more readable and understandable.
"""

from datetime import date
from decimal import Decimal

import pytest

from models import RawSheet, Transaction, TransactionType

# Logical column -> header text, in the column order each bank exports
BANK_HEADERS = {
    "nkbm-otp": {
        "date": "DATUM VALUTE",
        "expense": "V BREME",
        "income": "V DOBRO",
        "description": "NAMEN",
        "recipient": "UDELEŽENEC - NAZIV",
    },
    "nlb": {
        "date": "Datum valute",
        "recipient": "Naziv prejemnika/plačnika",
        "description": "Namen",
        "expense": "Odliv",
        "income": "Priliv",
    },
    "intesa": {
        "date": "Datum knjiženja",
        "description": "Opis",
        "recipient": "Naziv",
        "expense": "Breme",
        "income": "Dobro",
    },
    "erste": {
        "date": "Datum valute",
        "description": "Opis plaćanja",
        "recipient": "Naziv primatelja",
        "amount": "Iznos",
    },
}

ERSTE_PREAMBLE = [
    ["Erste&Steiermärkische Bank d.d."],
    ["Izvod prometa po računu", "01.03.2024 - 31.03.2024"],
    ["IBAN", "HR1224020061100000000"],
    [],
]


def pytest_collection_modifyitems(items):
    """
    Modify test items to use docstrings as human-readable names.

    For each test function, if it has a docstring, the first non-empty line
    of the docstring becomes the test name in reports. For parameterized tests,
    the parameter ID is preserved.
    """
    for item in items:
        doc = item.function.__doc__
        if doc:
            summary = next(
                (line.strip() for line in doc.strip().splitlines() if line.strip()),
                None
            )
            if summary:
                if hasattr(item, "callspec"):
                    start = item.nodeid.find('[')
                    param_part = item.nodeid[start:] if start != -1 else ''
                    item._nodeid = summary + param_part
                else:
                    item._nodeid = summary


def build_statement(bank_id: str, records: list[dict], preamble=None) -> RawSheet:
    """Build a sheet for a bank from records keyed by logical column name."""
    layout = BANK_HEADERS[bank_id]
    grid = list(preamble or [])
    grid.append(list(layout.values()))
    for record in records:
        grid.append([record.get(column, "") for column in layout])
    return RawSheet(sheet_name="Sheet1", headers=grid[0], rows=grid[1:])


@pytest.fixture
def make_statement():
    """Factory for single-sheet statements in a bank's layout."""
    return build_statement


@pytest.fixture
def erste_statement():
    """Erste export with title rows above the header."""
    return build_statement(
        "erste",
        [
            {
                "date": "01.03.2024",
                "description": "PLAĆA VELJAČA",
                "recipient": "Tvrtka d.o.o.",
                "amount": "2.150,00",
            },
            {
                "date": "03.03.2024",
                "description": "KONZUM MARKET 112",
                "recipient": "Konzum plus d.o.o.",
                "amount": "-45,20",
            },
            {
                "date": "",
                "description": "Ukupno",
                "amount": "2.104,80",
            },
        ],
        preamble=ERSTE_PREAMBLE,
    )


@pytest.fixture
def make_transaction():
    """Factory for transactions with sensible defaults."""

    def _make(
        amount="10.00",
        transaction_type=TransactionType.EXPENSE,
        description="Unknown",
        recipient="Unknown",
        transaction_date=date(2024, 3, 5),
    ):
        return Transaction(
            transaction_date=transaction_date,
            amount=Decimal(amount),
            description=description,
            recipient=recipient,
            transaction_type=transaction_type,
        )

    return _make
