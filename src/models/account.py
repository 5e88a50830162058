"""Account data model."""

from dataclasses import dataclass
from decimal import Decimal
from typing import NamedTuple


class AccountKey(NamedTuple):
    """Composite lookup key of an account."""

    card: int
    pin: int


@dataclass
class Account:
    """Represents an ATM account."""

    card: int
    pin: int
    owner_name: str
    balance: Decimal

    @property
    def key(self) -> AccountKey:
        """The (card, pin) pair the account is stored under."""
        return AccountKey(self.card, self.pin)
