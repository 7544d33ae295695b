"""Bank schema registry."""

from models import BankSchema
from errors import UnknownBankError

_registered_banks: dict[str, BankSchema] = {}


def register_bank(schema: BankSchema) -> None:
    """
    Register a bank schema so it can be looked up by id.

    Raises:
        ValueError: if a bank with the same id is already registered
    """
    if schema.id in _registered_banks:
        raise ValueError(f"Bank already registered: {schema.id!r}")
    _registered_banks[schema.id] = schema


def get_registered_banks() -> list[BankSchema]:
    """Get list of all registered bank schemas."""
    return list(_registered_banks.values())


def lookup(bank_id: str) -> BankSchema:
    """
    Look up the schema for a bank.

    Args:
        bank_id: Bank identifier (e.g., 'nlb', 'erste')

    Returns:
        The registered BankSchema

    Raises:
        UnknownBankError: if no bank with this id is registered
    """
    try:
        return _registered_banks[bank_id]
    except KeyError:
        raise UnknownBankError(bank_id) from None
