"""Parsers for locale-dependent amount and date cells."""

import logging
import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

import pandas as pd

from models import DateFormat

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9,.\-]")

_DATE_SEPARATORS = {
    DateFormat.DOTTED: ".",
    DateFormat.SLASHED: "/",
}


def parse_locale_amount(raw: Optional[str]) -> Decimal:
    """
    Parse an amount written with either decimal comma or decimal point.

    "1.234,56", "1,234.56" and "1234.56" all give Decimal("1234.56").
    With only commas present, the comma is a decimal separator when it
    splits the value in two and the fraction has at most two digits
    ("45,00" -> 45.00); otherwise commas separate thousands
    ("45,000" -> 45000).

    Args:
        raw: Cell text

    Returns:
        Signed Decimal value, or Decimal("0") for empty or non-numeric input
    """
    if not raw:
        return Decimal("0")

    cleaned = _NON_NUMERIC.sub("", str(raw))
    negative = cleaned.startswith("-")
    cleaned = cleaned.replace("-", "")

    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        parts = cleaned.split(",")
        if len(parts) == 2 and len(parts[1]) <= 2:
            cleaned = cleaned.replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")

    if negative:
        cleaned = "-" + cleaned

    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return Decimal("0")


def parse_date(raw: Optional[str], date_format: DateFormat) -> Optional[date]:
    """
    Parse a day-first date cell.

    Args:
        raw: Cell text (e.g., '05.03.2024' or '05/03/2024')
        date_format: Layout used by the bank export

    Returns:
        The calendar date, or None when the text is not a valid date
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None

    separator = _DATE_SEPARATORS.get(date_format)
    if separator is None:
        return _parse_generic_date(text)

    parts = [part.strip() for part in text.split(separator)]
    if (
        len(parts) != 3
        or not all(part.isdecimal() for part in parts)
        or len(parts[2]) != 4
    ):
        logger.debug("Invalid %s date: %r", date_format.value, raw)
        return None

    day, month, year = (int(part) for part in parts)
    try:
        return date(year, month, day)
    except ValueError:
        logger.debug("Date out of range: %r", raw)
        return None


def _parse_generic_date(text: str) -> Optional[date]:
    """Fallback for exports without a known day-first layout."""
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        logger.debug("Unrecognized date text: %r", text)
        return None
    return parsed.date()
