"""Keyword-based transaction categorization.

Rules are checked in order and the first match wins, so overlapping
keywords resolve to the earlier rule (a "TELEMACH MARKET" purchase is
Groceries, not Telecom).
"""

from models import Transaction, TransactionType

DESCRIPTION = "description"
RECIPIENT = "recipient"

OTHER_EXPENSES = "Other Expenses"
OTHER_INCOME = "Other Income"

# (label, field searched, keywords)
EXPENSE_RULES: list[tuple[str, str, tuple[str, ...]]] = [
    ("Digital Payments", DESCRIPTION, ("REVOLUT", "PAYPAL")),
    ("Groceries", DESCRIPTION, ("MARKET", "TRGOVINA", "SPAR", "MERCATOR")),
    ("Restaurants", DESCRIPTION, ("RESTAVRACIJA", "GOSTINSTVO", "FOOD")),
    ("Gas", DESCRIPTION, ("BENCIN", "PETROL", "OMV")),
    ("Telecom", DESCRIPTION, ("TELEKOM", "A1", "TELEMACH")),
    ("Education", RECIPIENT, ("UNIVERZA",)),
    ("Insurance", DESCRIPTION, ("ZAVAROVANJE",)),
    ("Rent", DESCRIPTION, ("NAJEMNINA", "RENT")),
]

INCOME_RULES: list[tuple[str, str, tuple[str, ...]]] = [
    ("Salary", DESCRIPTION, ("PLAČA", "PLAĆA", "PLACA", "SALARY", "REGRES")),
    ("Dividends", DESCRIPTION, ("DIVIDEND",)),
    ("Interest", DESCRIPTION, ("OBRESTI", "INTEREST")),
    ("Transfer", DESCRIPTION, ("PRENOS", "TRANSFER", "NAKAZILO")),
    ("Refund", DESCRIPTION, ("VRAČILO", "VRACILO", "REFUND")),
    ("Freelance", DESCRIPTION, ("HONORAR", "AVTORSK", "PODJEMN", "FREELANCE")),
    ("Gift", DESCRIPTION, ("DARILO", "GIFT")),
]


def categorize(transaction: Transaction) -> str:
    """Return the category label for a transaction."""
    if transaction.transaction_type == TransactionType.INCOME:
        rules, fallback = INCOME_RULES, OTHER_INCOME
    else:
        rules, fallback = EXPENSE_RULES, OTHER_EXPENSES

    text = {
        DESCRIPTION: transaction.description.upper(),
        RECIPIENT: transaction.recipient.upper(),
    }
    for label, field, keywords in rules:
        if any(keyword in text[field] for keyword in keywords):
            return label
    return fallback
