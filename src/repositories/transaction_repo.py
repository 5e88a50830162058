"""Transaction repository for database operations."""

import sqlite3
from datetime import datetime
from decimal import Decimal

from src.models.transaction import Transaction


class TransactionRepository:
    """Append-only store of deposits and withdrawals."""

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
        """Create the Transactions table if it doesn't exist."""
        cursor = self._conn.cursor()
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS Transactions (
                TransactionID INTEGER PRIMARY KEY AUTOINCREMENT,
                Type TEXT NOT NULL,
                Time TEXT NOT NULL,
                Card INTEGER NOT NULL,
                Pin INTEGER NOT NULL,
                Amount TEXT NOT NULL,
                Balance TEXT NOT NULL
            )
        """
        )
        self._conn.commit()

    def create(self, txn: Transaction, commit: bool = True) -> int:
        """
        Append a transaction.

        Args:
            txn: The Transaction object to store
            commit: Commit immediately; pass False when the caller owns the transaction

        Returns:
            The ID of the newly created transaction
        """
        cursor = self._conn.cursor()
        cursor.execute(
            """
            INSERT INTO Transactions (Type, Time, Card, Pin, Amount, Balance)
            VALUES (?, ?, ?, ?, ?, ?)
        """,
            (
                txn.type,
                txn.time.isoformat(),
                txn.card,
                txn.pin,
                str(txn.amount),
                str(txn.balance),
            ),
        )
        if commit:
            self._conn.commit()
        return cursor.lastrowid

    def find_by_id(self, txn_id: int) -> Transaction | None:
        """
        Find a transaction by ID.

        Args:
            txn_id: The transaction ID to search for

        Returns:
            Transaction object if found, None otherwise
        """
        cursor = self._conn.cursor()
        cursor.execute(
            """SELECT TransactionID, Type, Time, Card, Pin, Amount, Balance
               FROM Transactions WHERE TransactionID = ?""",
            (txn_id,),
        )
        row = cursor.fetchone()

        if row is None:
            return None

        return self._from_row(row)

    def find_by_account(self, card: int, pin: int) -> list[Transaction]:
        """
        Find every transaction of an account.

        Args:
            card: The card number of the account
            pin: The PIN of the account

        Returns:
            List of transactions in the order they were recorded, oldest first
        """
        cursor = self._conn.cursor()
        cursor.execute(
            """SELECT TransactionID, Type, Time, Card, Pin, Amount, Balance
               FROM Transactions
               WHERE Card = ? AND Pin = ?
               ORDER BY TransactionID ASC""",
            (card, pin),
        )
        return [self._from_row(row) for row in cursor.fetchall()]

    @staticmethod
    def _from_row(row: sqlite3.Row) -> Transaction:
        return Transaction(
            id=row["TransactionID"],
            type=row["Type"],
            card=row["Card"],
            pin=row["Pin"],
            amount=Decimal(row["Amount"]),
            balance=Decimal(row["Balance"]),
            time=datetime.fromisoformat(row["Time"]),
        )
