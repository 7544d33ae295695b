"""Aggregate a filtered transaction set by category, recipient and day.

Callers filter by month and transaction type first; the functions here
group whatever they are given and return fresh, immutable results.
"""

import re
from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from categorizer import categorize
from models import (
    UNKNOWN,
    CategoryBucket,
    DailyBucket,
    RecipientSummary,
    Transaction,
)

TOP_RECIPIENTS = 10
FREQUENCY_WEIGHT = 10
MIN_RECIPIENT_LENGTH = 3
MAX_RECIPIENT_LENGTH = 25
TRUNCATED_RECIPIENT_LENGTH = 22

# Legal-entity tokens around company names ("PODJETJE ABC D.O.O.")
_LEADING_ENTITY = re.compile(r"^(?:PODJETJE|DRUŽBA|DRUZBA)\b[\s,]*")
_TRAILING_ENTITY = re.compile(
    r"[\s,]*\b(?:"
    r"D\.\s*O\.\s*O\.?|D\.\s*N\.\s*O\.?|D\.\s*D\.?|K\.\s*D\.?|S\.\s*P\.?"
    r"|DOO|GMBH|LTD\.?|INC\.?"
    r")$"
)
_WHITESPACE = re.compile(r"\s+")


def aggregate_by_category(
    transactions: Iterable[Transaction],
) -> dict[str, CategoryBucket]:
    """
    Group transactions by category label.

    Returns:
        Mapping of category label to bucket, in order of first appearance
    """
    groups: dict[str, list[Transaction]] = defaultdict(list)
    for tx in transactions:
        groups[categorize(tx)].append(tx)

    return {
        label: CategoryBucket(
            amount=sum((tx.amount for tx in group), Decimal("0")),
            transactions=tuple(group),
        )
        for label, group in groups.items()
    }


def normalize_recipient(name: str) -> str:
    """
    Normalize a recipient name for grouping.

    Upper-cases, strips leading/trailing legal-entity tokens, collapses
    whitespace and shortens names longer than 25 characters.
    """
    normalized = _WHITESPACE.sub(" ", name.upper()).strip()

    previous = None
    while previous != normalized:
        previous = normalized
        normalized = _LEADING_ENTITY.sub("", normalized)
        normalized = _TRAILING_ENTITY.sub("", normalized)
        normalized = normalized.strip(" ,")

    if len(normalized) > MAX_RECIPIENT_LENGTH:
        normalized = normalized[:TRUNCATED_RECIPIENT_LENGTH] + "..."
    return normalized


def aggregate_by_recipient(
    transactions: Iterable[Transaction], limit: int = TOP_RECIPIENTS
) -> dict[str, RecipientSummary]:
    """
    Rank recipients by amount plus a bonus for repeat transactions.

    score = amount + count * 10, so a merchant visited often outranks a
    single payment of similar size. Unknown and very short names are left
    out.

    Returns:
        Mapping of "{name} ({count}x)" labels to summaries, best first
    """
    totals: dict[str, list[Transaction]] = defaultdict(list)
    for tx in transactions:
        name = normalize_recipient(tx.recipient)
        if name == UNKNOWN.upper() or len(name) < MIN_RECIPIENT_LENGTH:
            continue
        totals[name].append(tx)

    summaries = [
        RecipientSummary(
            name=name,
            amount=sum((tx.amount for tx in group), Decimal("0")),
            count=len(group),
        )
        for name, group in totals.items()
    ]
    # sorted() is stable: equal scores keep first-seen order
    ranked = sorted(
        summaries,
        key=lambda s: s.amount + s.count * FREQUENCY_WEIGHT,
        reverse=True,
    )
    return {summary.label: summary for summary in ranked[:limit]}


def aggregate_by_day(transactions: Iterable[Transaction]) -> list[DailyBucket]:
    """Group transactions by calendar day, oldest first."""
    days: dict[str, list[Transaction]] = defaultdict(list)
    for tx in transactions:
        days[tx.transaction_date.isoformat()].append(tx)

    return [
        DailyBucket(
            date=day,
            amount=sum((tx.amount for tx in group), Decimal("0")),
            count=len(group),
            transactions=tuple(group),
        )
        for day, group in sorted(days.items())
    ]
