"""Print a monthly spending/income report for a bank statement export."""

import argparse
import logging
import sys
from pathlib import Path

from banks import get_registered_banks
from errors import StatementFileError, UnknownBankError
from loader import load_sheets
from models import TransactionType
from pipeline import ChartMode, StatementSession, format_amount, month_label


def print_report(
    session: StatementSession,
    month: str,
    transaction_type: TransactionType,
    mode: ChartMode,
) -> None:
    """Print one aggregate view and the grand total for a month."""
    year, month_number = (int(part) for part in month.split("-"))
    symbol = session.schema.currency_symbol
    aggregate = session.aggregate(year, month_number, transaction_type, mode)

    print(f"\n=== {month_label(month)}: {transaction_type.value} by {mode.value} ===")
    if not aggregate:
        print("  (no transactions)")
    elif mode == ChartMode.DAY:
        for bucket in aggregate:
            print(
                f"  {bucket.date}: {format_amount(bucket.amount, symbol):>14s} "
                f"({bucket.count} transactions)"
            )
    elif mode == ChartMode.RECIPIENT:
        for label, summary in aggregate.items():
            print(f"  {label:34s} {format_amount(summary.amount, symbol):>14s}")
    else:
        for label, bucket in aggregate.items():
            print(
                f"  {label:20s} {format_amount(bucket.amount, symbol):>14s} "
                f"({len(bucket.transactions)} transactions)"
            )

    total = session.total(year, month_number, transaction_type)
    print(f"\n  Total {transaction_type.value}: {format_amount(total, symbol)}")


def main():
    """Main entry point for the report script."""
    bank_ids = [schema.id for schema in get_registered_banks()]

    parser = argparse.ArgumentParser(
        description="Categorize and summarize transactions from a bank statement export"
    )
    parser.add_argument(
        "statement",
        type=Path,
        help="Statement file (.xlsx, .xls or .csv)"
    )
    parser.add_argument(
        "-b", "--bank",
        required=True,
        help=f"Bank that produced the export ({', '.join(bank_ids)})"
    )
    parser.add_argument(
        "-m", "--month",
        default=None,
        help="Month to report as YYYY-MM (default: most recent month in the file)"
    )
    parser.add_argument(
        "-t", "--type",
        choices=[t.value for t in TransactionType],
        default=TransactionType.EXPENSE.value,
        help="Transaction type to aggregate (default: expense)"
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ChartMode],
        default=ChartMode.CATEGORY.value,
        help="Aggregate view (default: category)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log skipped rows and parsing details"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        session = StatementSession(args.bank)
    except UnknownBankError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not args.statement.exists():
        print(f"Error: File not found: {args.statement}", file=sys.stderr)
        sys.exit(1)

    try:
        sheets = load_sheets(args.statement)
    except StatementFileError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    result = session.load_sheets(sheets)
    print(f"Parsing {args.statement.name} ({session.schema.name})")
    print(f"Sheets: {', '.join(sheet.sheet_name for sheet in result.sheets)}")

    if result.message:
        print(f"Error: {result.message}", file=sys.stderr)
    if not result.transactions:
        print("No transactions found.")
        sys.exit(1)

    months = session.available_months()
    print(f"Extracted {len(result.transactions)} transactions")
    print(f"Months: {', '.join(month_label(key) for key in months)}")

    month = args.month or months[0]
    if month not in months:
        print(f"Error: No transactions in {month}", file=sys.stderr)
        sys.exit(1)

    print_report(session, month, TransactionType(args.type), ChartMode(args.mode))


if __name__ == "__main__":
    main()
