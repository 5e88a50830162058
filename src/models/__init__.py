"""Data models for the ATM ledger."""

from .account import Account, AccountKey
from .transaction import DEPOSIT, WITHDRAWAL, Transaction, format_money
from .exceptions import (
    ErrorKind,
    BankError,
    InvalidArgumentError,
    AccountStateError,
    AccountNotFoundError,
    AccountAlreadyExistsError,
    InvalidAmountError,
    InvalidCredentialsError,
    InsufficientBalanceError,
)

__all__ = [
    "Account",
    "AccountKey",
    "Transaction",
    "DEPOSIT",
    "WITHDRAWAL",
    "format_money",
    "ErrorKind",
    "BankError",
    "InvalidArgumentError",
    "AccountStateError",
    "AccountNotFoundError",
    "AccountAlreadyExistsError",
    "InvalidAmountError",
    "InvalidCredentialsError",
    "InsufficientBalanceError",
]
