"""Tests for the statement session and pipeline entry point."""

from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest

from errors import UnknownBankError
from models import RawSheet, TransactionType
from pipeline import (
    ChartMode,
    StatementSession,
    filter_transactions,
    format_amount,
    month_label,
    parse_statement,
)


@pytest.fixture
def nlb_statement(make_statement):
    """Two months of NLB activity."""
    return make_statement(
        "nlb",
        [
            {"date": "28.02.2024", "description": "Plača", "recipient": "Podjetje ABC d.o.o.",
             "income": "1.800,00"},
            {"date": "02.03.2024", "description": "SPAR", "recipient": "Spar Slovenija d.o.o.",
             "expense": "23,45"},
            {"date": "04.03.2024", "description": "Najemnina", "recipient": "Janez Novak",
             "expense": "650,00"},
            {"date": "04.03.2024", "description": "SPAR", "recipient": "Spar Slovenija d.o.o.",
             "expense": "11,55"},
            {"date": "15.03.2024", "description": "Vračilo", "recipient": "Spar Slovenija d.o.o.",
             "income": "5,00"},
        ],
    )


class TestParseStatement:
    """Tests for parse_statement()."""

    def test_qualifying_file_yields_transactions(self, nlb_statement):
        """A statement in the bank's layout is parsed."""
        # Act
        result = parse_statement("nlb", [nlb_statement])

        # Assert
        assert result.is_transaction_file is True
        assert len(result.transactions) == 5
        assert result.message is None

    def test_unknown_bank_is_fatal(self, nlb_statement):
        """Unknown bank ids raise before the file is looked at."""
        with pytest.raises(UnknownBankError):
            parse_statement("revolut", [nlb_statement])

    def test_wrong_bank_layout_skips_aggregation(self, nlb_statement):
        """A file from another bank keeps its sheets but has no transactions."""
        # Act
        result = parse_statement("nkbm-otp", [nlb_statement])

        # Assert
        assert result.is_transaction_file is False
        assert result.transactions == []
        assert result.sheets == [nlb_statement]
        assert "NKBM / OTP banka" in result.message

    def test_missing_required_column_is_reported(self):
        """Missing mandatory columns give an empty set and a message."""
        # Arrange
        sheet = RawSheet(
            sheet_name="S",
            headers=["DATUM VALUTE", "V DOBRO"],
            rows=[["01.03.2024", "10,00"]],
        )

        # Act
        result = parse_statement("nkbm-otp", [sheet])

        # Assert
        assert result.is_transaction_file is True
        assert result.transactions == []
        assert "Required columns not found" in result.message


class TestStatementSession:
    """Tests for StatementSession."""

    def test_unknown_bank_rejected_on_creation(self):
        """Creating a session for an unknown bank raises."""
        with pytest.raises(UnknownBankError):
            StatementSession("unknown")

    def test_available_months_newest_first(self, nlb_statement):
        """Months with transactions are listed newest first."""
        # Arrange
        session = StatementSession("nlb")

        # Act
        session.load_sheets([nlb_statement])

        # Assert
        assert session.available_months() == ["2024-03", "2024-02"]

    def test_selecting_bank_discards_previous_file(self, nlb_statement):
        """Switching banks drops the parsed transactions."""
        # Arrange
        session = StatementSession("nlb")
        session.load_sheets([nlb_statement])

        # Act
        session.select_bank("erste")

        # Assert
        assert session.bank_id == "erste"
        assert session.result is None
        assert session.transactions == []

    def test_selecting_unknown_bank_keeps_current_bank(self):
        """A failed bank switch leaves the session on its previous bank."""
        session = StatementSession("nlb")

        with pytest.raises(UnknownBankError):
            session.select_bank("nope")
        assert session.bank_id == "nlb"

    def test_loading_new_file_replaces_transactions(self, nlb_statement, make_statement):
        """A new file replaces, never merges with, the previous one."""
        # Arrange
        session = StatementSession("nlb")
        session.load_sheets([nlb_statement])
        second = make_statement("nlb", [{"date": "01.05.2024", "expense": "1,00"}])

        # Act
        session.load_sheets([second])

        # Assert
        assert len(session.transactions) == 1
        assert session.available_months() == ["2024-05"]

    def test_category_aggregate_for_month(self, nlb_statement):
        """Category view covers only the selected month and type."""
        # Arrange
        session = StatementSession("nlb")
        session.load_sheets([nlb_statement])

        # Act
        buckets = session.aggregate(2024, 3, TransactionType.EXPENSE, ChartMode.CATEGORY)

        # Assert
        assert {label: b.amount for label, b in buckets.items()} == {
            "Groceries": Decimal("35.00"),
            "Rent": Decimal("650.00"),
        }

    def test_bucket_sum_equals_total(self, nlb_statement):
        """Category buckets add up to the grand total for the selector."""
        session = StatementSession("nlb")
        session.load_sheets([nlb_statement])

        buckets = session.aggregate(2024, 3, TransactionType.EXPENSE)
        total = session.total(2024, 3, TransactionType.EXPENSE)

        assert sum(b.amount for b in buckets.values()) == total == Decimal("685.00")

    def test_recipient_aggregate_for_month(self, nlb_statement):
        """Recipient view ranks normalized names."""
        session = StatementSession("nlb")
        session.load_sheets([nlb_statement])

        ranking = session.aggregate(2024, 3, TransactionType.EXPENSE, ChartMode.RECIPIENT)

        assert list(ranking) == ["JANEZ NOVAK (1x)", "SPAR SLOVENIJA (2x)"]

    def test_day_aggregate_for_month(self, nlb_statement):
        """Day view lists each active day once."""
        session = StatementSession("nlb")
        session.load_sheets([nlb_statement])

        days = session.aggregate(2024, 3, TransactionType.EXPENSE, ChartMode.DAY)

        assert [(d.date, d.count) for d in days] == [("2024-03-02", 1), ("2024-03-04", 2)]

    def test_income_total(self, nlb_statement):
        """Income totals are separate from expenses."""
        session = StatementSession("nlb")
        session.load_sheets([nlb_statement])

        assert session.total(2024, 2, TransactionType.INCOME) == Decimal("1800.00")
        assert session.total(2024, 3, TransactionType.INCOME) == Decimal("5.00")
        assert session.total(2024, 4, TransactionType.INCOME) == Decimal("0")


class TestHelpers:
    """Tests for filtering and display helpers."""

    def test_filter_by_month_and_type(self, make_transaction):
        """Only matching month, year and type are kept."""
        # Arrange
        keep = make_transaction(transaction_date=date(2024, 3, 31))
        txs = [
            keep,
            make_transaction(transaction_date=date(2023, 3, 1)),
            make_transaction(transaction_date=date(2024, 4, 1)),
            make_transaction(
                transaction_type=TransactionType.INCOME,
                transaction_date=date(2024, 3, 2),
            ),
        ]

        # Act
        result = filter_transactions(txs, 2024, 3, TransactionType.EXPENSE)

        # Assert
        assert result == [keep]

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("2024-01", "January 2024"),
            ("2024-03", "March 2024"),
            ("2023-12", "December 2023"),
        ],
    )
    def test_month_label(self, key, expected):
        """Month keys are shown with English month names."""
        assert month_label(key) == expected

    def test_month_label_ignores_process_locale(self):
        """Labels do not go through locale-dependent strftime."""
        with patch("pipeline.date") as mock_date:
            assert month_label("2024-05") == "May 2024"
        mock_date.assert_not_called()

    def test_format_amount(self):
        """Amounts are shown with the currency symbol and two decimals."""
        assert format_amount(Decimal("1234.5"), "€") == "€1,234.50"
