"""Account repository for database operations."""

import sqlite3
from decimal import Decimal

from src.models.account import Account
from src.models.exceptions import AccountAlreadyExistsError


class AccountRepository:
    """Repository for Account data access operations."""

    def __init__(self, conn: sqlite3.Connection):
        """
        Initialize the repository with a database connection.

        Args:
            conn: SQLite database connection
        """
        self._conn = conn
        self._conn.row_factory = sqlite3.Row

    @property
    def connection(self) -> sqlite3.Connection:
        """The SQLite connection this repository writes through."""
        return self._conn

    def create_table(self) -> None:
        """Create the Accounts table if it doesn't exist."""
        cursor = self._conn.cursor()
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS Accounts (
                Card INTEGER NOT NULL,
                Pin INTEGER NOT NULL,
                Name TEXT NOT NULL,
                Balance TEXT NOT NULL,
                PRIMARY KEY (Card, Pin)
            )
        """
        )
        self._conn.commit()

    def find(self, card: int, pin: int) -> Account | None:
        """
        Find an account by card number and PIN.

        Args:
            card: The card number to search for
            pin: The PIN that must match exactly

        Returns:
            Account object if found, None otherwise
        """
        cursor = self._conn.cursor()
        cursor.execute(
            "SELECT Card, Pin, Name, Balance FROM Accounts WHERE Card = ? AND Pin = ?",
            (card, pin),
        )
        row = cursor.fetchone()

        if row is None:
            return None

        return Account(
            card=row["Card"],
            pin=row["Pin"],
            owner_name=row["Name"],
            balance=Decimal(row["Balance"]),
        )

    def create(self, account: Account) -> None:
        """
        Create a new account.

        Args:
            account: The Account object to create

        Raises:
            AccountAlreadyExistsError: If the card number and PIN are already registered
        """
        cursor = self._conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO Accounts (Card, Pin, Name, Balance) VALUES (?, ?, ?, ?)",
                (account.card, account.pin, account.owner_name, str(account.balance)),
            )
            self._conn.commit()
        except sqlite3.IntegrityError:
            raise AccountAlreadyExistsError(
                f"Account for card {account.card} already exists"
            )

    def exists(self, card: int, pin: int) -> bool:
        """Check if an account is registered under card number and PIN."""
        cursor = self._conn.cursor()
        cursor.execute(
            "SELECT 1 FROM Accounts WHERE Card = ? AND Pin = ?", (card, pin)
        )
        return cursor.fetchone() is not None

    def update_balance(
        self, card: int, pin: int, balance: Decimal, commit: bool = True
    ) -> None:
        """
        Replace the stored balance of an account.

        Args:
            card: The card number of the account
            pin: The PIN of the account
            balance: The new balance
            commit: Commit immediately; pass False when the caller owns the transaction
        """
        cursor = self._conn.cursor()
        cursor.execute(
            "UPDATE Accounts SET Balance = ? WHERE Card = ? AND Pin = ?",
            (str(balance), card, pin),
        )
        if commit:
            self._conn.commit()

    def count(self) -> int:
        """Return the number of registered accounts."""
        cursor = self._conn.cursor()
        cursor.execute("SELECT COUNT(*) FROM Accounts")
        return cursor.fetchone()[0]
