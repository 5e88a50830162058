"""ATM service for business logic layer."""

import logging
import os
import sqlite3
from decimal import Decimal, Inexact, InvalidOperation, localcontext
from typing import TextIO

from src.models.account import Account
from src.models.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidCredentialsError,
)
from src.models.transaction import DEPOSIT, WITHDRAWAL, Transaction
from src.repositories.account_repo import AccountRepository
from src.repositories.transaction_repo import TransactionRepository

logger = logging.getLogger(__name__)

# Largest value an SQLite INTEGER column holds.
MAX_KEY_VALUE = 2**63 - 1

# Largest single amount or opening balance; keeps balances far inside
# the 28 significant digits of the default decimal context.
DEFAULT_MAX_AMOUNT = 1_000_000_000_000
LARGEST_MAX_AMOUNT = 10**20


def to_amount(value) -> Decimal:
    """
    Convert a caller-supplied amount to a Decimal.

    Floats go through str() so that 300.30 stays 300.30.

    Raises:
        InvalidAmountError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Amount must be a number, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(f"Amount must be a number, got {value!r}")
    if not amount.is_finite():
        raise InvalidAmountError(f"Amount must be finite, got {value!r}")
    return amount


def _is_key_part(value) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= MAX_KEY_VALUE
    )


class AtmService:
    """Service layer for ATM operations."""

    def __init__(
        self,
        account_repo: AccountRepository | None = None,
        transaction_repo: TransactionRepository | None = None,
        ledger_encoding: str = "utf-8",
        max_amount: int = DEFAULT_MAX_AMOUNT,
    ):
        """
        Initialize the AtmService with repositories.

        When no repositories are given the service opens its own in-memory
        database, so every instance starts with empty stores. A missing
        repository is built on the connection of the one that was given.

        Args:
            account_repo: Repository for account data access
            transaction_repo: Repository for transaction data access
            ledger_encoding: Text encoding used for ledger files
            max_amount: Maximum allowed transaction amount and opening balance (default: 10^12)

        Raises:
            ValueError: If the repositories do not share one connection
                or max_amount is outside 1..10^20
        """
        if not 1 <= max_amount <= LARGEST_MAX_AMOUNT:
            raise ValueError(f"max_amount must be between 1 and {LARGEST_MAX_AMOUNT}, got {max_amount}")
        self._conn = None
        if account_repo is None and transaction_repo is None:
            self._conn = sqlite3.connect(":memory:")
        conn = self._conn
        if account_repo is None:
            account_repo = AccountRepository(conn or transaction_repo.connection)
            account_repo.create_table()
        if transaction_repo is None:
            transaction_repo = TransactionRepository(conn or account_repo.connection)
            transaction_repo.create_table()
        if account_repo.connection is not transaction_repo.connection:
            raise ValueError("Account and transaction repositories must share a connection")

        self._account_repo = account_repo
        self._transaction_repo = transaction_repo
        self._ledger_encoding = ledger_encoding
        self._max_amount = max_amount

    def close(self) -> None:
        """Release the in-memory database opened by this service, if any."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _find_account(self, card: int, pin: int) -> Account:
        """
        Fetch an account or fail.

        Keys that could never have been registered are reported the same
        way as unknown ones.

        Raises:
            AccountNotFoundError: If no account matches card and pin
        """
        account = None
        if _is_key_part(card) and _is_key_part(pin):
            account = self._account_repo.find(card, pin)
        if account is None:
            raise AccountNotFoundError(f"Account for card {card} not found")
        return account

    def _validate_amount(self, amount, operation: str) -> Decimal:
        amount = to_amount(amount)
        if amount < 0:
            raise InvalidAmountError(
                f"Cannot {operation} negative amount: {amount}. Amount must not be negative."
            )
        if amount > self._max_amount:
            raise InvalidAmountError(
                f"Amount {amount} exceeds maximum allowed {operation} of {self._max_amount}"
            )
        return amount

    def _exact(self, balance: Decimal, delta: Decimal) -> Decimal:
        """
        Add delta to balance without rounding.

        Raises:
            InvalidAmountError: If the sum needs more digits than a Decimal keeps
        """
        with localcontext() as ctx:
            ctx.traps[Inexact] = True
            try:
                return balance + delta
            except Inexact:
                raise InvalidAmountError(
                    f"Amount {delta.copy_abs()} cannot be applied exactly to the balance"
                )

    def _apply(self, account: Account, type: str, amount: Decimal, new_balance: Decimal) -> Transaction:
        """
        Store the new balance and its transaction in one database transaction.

        Returns:
            The stored Transaction
        """
        transaction = Transaction.record(
            type=type,
            card=account.card,
            pin=account.pin,
            amount=amount,
            balance=new_balance,
        )
        with self._account_repo.connection:
            self._account_repo.update_balance(
                account.card, account.pin, new_balance, commit=False
            )
            txn_id = self._transaction_repo.create(transaction, commit=False)
        return self._transaction_repo.find_by_id(txn_id)

    def register_account(
        self, card: int, pin: int, owner_name: str, initial_balance
    ) -> Account:
        """
        Register a new account with an empty transaction history.

        The sign of initial_balance is not checked, only its magnitude.

        Args:
            card: The card number
            pin: The PIN
            owner_name: The account holder's name
            initial_balance: The opening balance

        Returns:
            The created Account

        Raises:
            InvalidCredentialsError: If card or pin is not a non-negative integer
            InvalidAmountError: If initial_balance is not a finite number or exceeds max_amount
            AccountAlreadyExistsError: If the card number and PIN are already registered
        """
        if not (_is_key_part(card) and _is_key_part(pin)):
            raise InvalidCredentialsError(
                f"Card number and PIN must be non-negative integers, got {card!r}"
            )
        balance = to_amount(initial_balance)
        if balance.copy_abs() > self._max_amount:
            raise InvalidAmountError(
                f"Opening balance {balance} exceeds maximum allowed of {self._max_amount}"
            )
        balance = self._exact(Decimal(0), balance)

        if self._account_repo.exists(card, pin):
            raise AccountAlreadyExistsError(f"Account for card {card} already exists")

        account = Account(card=card, pin=pin, owner_name=owner_name, balance=balance)
        self._account_repo.create(account)
        logger.info("Registered account for card %s", card)
        return account

    def get_account(self, card: int, pin: int) -> Account:
        """Return the account registered under card and pin."""
        return self._find_account(card, pin)

    def check_balance(self, card: int, pin: int) -> Decimal:
        """
        Get the balance for an account.

        Raises:
            AccountNotFoundError: If the account doesn't exist
        """
        return self._find_account(card, pin).balance

    def deposit_cash(self, card: int, pin: int, amount) -> Transaction:
        """
        Deposit cash into an account.

        Args:
            card: The card number
            pin: The PIN
            amount: The amount to deposit (must not be negative)

        Returns:
            The recorded Transaction

        Raises:
            AccountNotFoundError: If the account doesn't exist
            InvalidAmountError: If the amount is negative, too large or not a number
        """
        account = self._find_account(card, pin)
        amount = self._validate_amount(amount, "deposit")

        new_balance = self._exact(account.balance, amount)
        transaction = self._apply(account, DEPOSIT, amount, new_balance)

        logger.info("Deposited %s on card %s", amount, card)
        return transaction

    def withdraw_cash(self, card: int, pin: int, amount) -> Transaction:
        """
        Withdraw cash from an account.

        Withdrawing the whole balance is allowed and leaves it at zero.

        Args:
            card: The card number
            pin: The PIN
            amount: The amount to withdraw (must not be negative)

        Returns:
            The recorded Transaction

        Raises:
            AccountNotFoundError: If the account doesn't exist
            InvalidAmountError: If the amount is negative, too large or not a number
            InsufficientBalanceError: If the amount exceeds the balance
        """
        account = self._find_account(card, pin)
        amount = self._validate_amount(amount, "withdraw")

        if amount > account.balance:
            raise InsufficientBalanceError(
                f"Insufficient balance: {account.balance} available, {amount} requested"
            )

        new_balance = self._exact(account.balance, amount.copy_negate())
        transaction = self._apply(account, WITHDRAWAL, amount, new_balance)

        logger.info("Withdrew %s from card %s", amount, card)
        return transaction

    def transaction_history(self, card: int, pin: int) -> list[str]:
        """
        Get the ledger lines of an account, oldest first.

        Raises:
            AccountNotFoundError: If the account doesn't exist
        """
        self._find_account(card, pin)
        return [
            txn.describe() for txn in self._transaction_repo.find_by_account(card, pin)
        ]

    def account_count(self) -> int:
        return self._account_repo.count()

    def print_ledger(self, destination: str | os.PathLike | TextIO, card: int, pin: int) -> None:
        """
        Write the header and every transaction of an account.

        Args:
            destination: A file path, or an open text stream to write into
            card: The card number
            pin: The PIN

        Raises:
            AccountNotFoundError: If the account doesn't exist
        """
        account = self._find_account(card, pin)
        lines = [
            f"Name: {account.owner_name}",
            f"Card Number: {account.card}",
            f"PIN: {account.pin}",
        ]
        lines.extend(self.transaction_history(card, pin))
        text = "".join(line + "\n" for line in lines)

        if hasattr(destination, "write"):
            destination.write(text)
        else:
            with open(destination, "w", encoding=self._ledger_encoding) as ledger:
                ledger.write(text)

        logger.info("Printed ledger for card %s", card)
