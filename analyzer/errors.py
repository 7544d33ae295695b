"""Exceptions raised by the statement pipeline."""


class UnknownBankError(KeyError):
    """Requested bank id is not in the registry."""

    def __init__(self, bank_id: str):
        super().__init__(bank_id)
        self.bank_id = bank_id

    def __str__(self) -> str:
        return f"Unknown bank: {self.bank_id!r}"


class MissingRequiredColumnsError(ValueError):
    """A column the bank's export must contain could not be resolved."""

    def __init__(self, bank_id: str, missing: list[str]):
        super().__init__(
            f"Required columns not found for {bank_id}: {', '.join(missing)}"
        )
        self.bank_id = bank_id
        self.missing = missing


class StatementFileError(Exception):
    """Input file could not be turned into sheets."""
