"""Bank export schemas with a lookup registry."""

from .registry import get_registered_banks, lookup, register_bank
from . import erste, intesa, nkbm_otp, nlb

__all__ = [
    "get_registered_banks",
    "lookup",
    "register_bank",
]
