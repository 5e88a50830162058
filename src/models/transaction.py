"""Transaction data model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

DEPOSIT = "Deposit"
WITHDRAWAL = "Withdrawal"


def format_money(value: Decimal) -> str:
    """Render an amount with a dollar sign and two decimals."""
    return f"${value:.2f}"


@dataclass
class Transaction:
    """Represents one deposit or withdrawal against an account."""

    id: int | None
    type: str
    card: int
    pin: int
    amount: Decimal
    balance: Decimal
    time: datetime

    @classmethod
    def record(
        cls,
        type: str,
        card: int,
        pin: int,
        amount: Decimal,
        balance: Decimal,
    ) -> "Transaction":
        """
        Create an unsaved transaction stamped with the current time.

        Args:
            type: DEPOSIT or WITHDRAWAL
            card: The card number of the account
            pin: The PIN of the account
            amount: The amount moved
            balance: The account balance after the movement

        Returns:
            A new Transaction with id=None
        """
        return cls(
            id=None,
            type=type,
            card=card,
            pin=pin,
            amount=amount,
            balance=balance,
            time=datetime.now(),
        )

    def describe(self) -> str:
        """The ledger line for this transaction."""
        return (
            f"{self.type} - Amount: {format_money(self.amount)}, "
            f"Updated Balance: {format_money(self.balance)}"
        )
