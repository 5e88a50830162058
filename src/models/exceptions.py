"""Custom exceptions for the ATM ledger."""

from enum import Enum


class ErrorKind(Enum):
    """Closed set of reasons an ATM operation can be rejected."""

    DUPLICATE_ACCOUNT = "duplicate_account"
    ACCOUNT_NOT_FOUND = "account_not_found"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_CREDENTIALS = "invalid_credentials"
    INSUFFICIENT_FUNDS = "insufficient_funds"


class BankError(Exception):
    """Base exception for all ATM-related errors.

    Concrete subclasses set kind; the base and category classes leave it None.
    """

    kind: ErrorKind | None = None


class InvalidArgumentError(BankError, ValueError):
    """Raised when the caller supplies an argument the ATM cannot accept."""
    pass


class AccountStateError(BankError, RuntimeError):
    """Raised when the account state does not allow the operation."""
    pass


class AccountNotFoundError(InvalidArgumentError):
    """Raised when no account matches the card number and PIN."""

    kind = ErrorKind.ACCOUNT_NOT_FOUND


class AccountAlreadyExistsError(InvalidArgumentError):
    """Raised when attempting to register a card number and PIN twice."""

    kind = ErrorKind.DUPLICATE_ACCOUNT


class InvalidAmountError(InvalidArgumentError):
    """Raised when an invalid amount is provided (e.g., negative amount)."""

    kind = ErrorKind.INVALID_AMOUNT


class InvalidCredentialsError(InvalidArgumentError):
    """Raised when a card number or PIN is not a non-negative integer."""

    kind = ErrorKind.INVALID_CREDENTIALS


class InsufficientBalanceError(AccountStateError):
    """Raised when an account has insufficient balance for a withdrawal."""

    kind = ErrorKind.INSUFFICIENT_FUNDS
