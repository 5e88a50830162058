"""Tests for AtmService deposit operations."""

import sqlite3
from decimal import Decimal

import pytest

from src.models.exceptions import AccountNotFoundError, InvalidAmountError
from src.models.transaction import DEPOSIT
from src.services.atm_service import AtmService

CARD = 12345678
PIN = 1234


@pytest.fixture
def atm():
    """Create an AtmService with its own in-memory stores."""
    service = AtmService()
    service.register_account(CARD, PIN, "Alice", 100.00)
    yield service
    service.close()


def test_deposit_increases_balance_and_records(atm):
    """Deposit adds exactly the amount and appends one transaction."""
    before = atm.check_balance(CARD, PIN)

    transaction = atm.deposit_cash(CARD, PIN, 200.25)

    assert atm.check_balance(CARD, PIN) == before + Decimal("200.25")
    assert transaction.id is not None
    assert transaction.type == DEPOSIT
    assert transaction.amount == Decimal("200.25")

    history = atm.transaction_history(CARD, PIN)
    assert len(history) == 1
    assert "Deposit" in history[-1]
    assert "200.25" in history[-1]
    assert history[-1].endswith("Updated Balance: $300.25")


def test_deposit_line_format(atm):
    atm.deposit_cash(CARD, PIN, 40000)

    assert atm.transaction_history(CARD, PIN) == [
        "Deposit - Amount: $40000.00, Updated Balance: $40100.00"
    ]


def test_deposit_zero_is_recorded(atm):
    atm.deposit_cash(CARD, PIN, 0)

    assert atm.check_balance(CARD, PIN) == Decimal("100")
    assert len(atm.transaction_history(CARD, PIN)) == 1


def test_deposit_negative_amount_raises_error(atm):
    """Negative deposit fails and leaves balance and history unchanged."""
    with pytest.raises(InvalidAmountError) as exc_info:
        atm.deposit_cash(CARD, PIN, -0.01)

    assert "negative" in str(exc_info.value).lower()
    assert atm.check_balance(CARD, PIN) == Decimal("100")
    assert atm.transaction_history(CARD, PIN) == []


def test_deposit_non_numeric_amount(atm):
    with pytest.raises(InvalidAmountError):
        atm.deposit_cash(CARD, PIN, "ten")
    assert atm.transaction_history(CARD, PIN) == []


def test_deposit_account_not_found(atm):
    """Unknown key is reported before the amount is looked at."""
    with pytest.raises(AccountNotFoundError):
        atm.deposit_cash(1, 1, -5)


def test_repeated_deposits_are_not_idempotent(atm):
    atm.deposit_cash(CARD, PIN, 10)
    atm.deposit_cash(CARD, PIN, 10)

    assert atm.check_balance(CARD, PIN) == Decimal("120")
    assert len(atm.transaction_history(CARD, PIN)) == 2


def test_deposit_over_max_amount_raises_error(atm):
    """Amounts above the limit are invalid amounts, not decimal errors."""
    with pytest.raises(InvalidAmountError) as exc_info:
        atm.deposit_cash(CARD, PIN, "9e999999")

    assert "exceeds maximum" in str(exc_info.value)
    with pytest.raises(InvalidAmountError):
        atm.deposit_cash(CARD, PIN, "9e999999")
    assert atm.check_balance(CARD, PIN) == Decimal("100")
    assert atm.transaction_history(CARD, PIN) == []


def test_deposit_at_max_amount_is_exact(atm):
    """Depositing the limit keeps every cent."""
    atm.deposit_cash(CARD, PIN, 1_000_000_000_000)
    atm.deposit_cash(CARD, PIN, "0.01")

    assert atm.check_balance(CARD, PIN) == Decimal("1000000000100.01")
    assert atm.transaction_history(CARD, PIN)[-1] == (
        "Deposit - Amount: $0.01, Updated Balance: $1000000000100.01"
    )


def test_deposit_that_cannot_be_added_exactly_is_rejected(atm):
    with pytest.raises(InvalidAmountError):
        atm.deposit_cash(CARD, PIN, "1e-30")

    assert atm.check_balance(CARD, PIN) == Decimal("100")
    assert atm.transaction_history(CARD, PIN) == []


def test_deposit_returns_stored_transaction(atm):
    transaction = atm.deposit_cash(CARD, PIN, "12.50")
    again = atm.deposit_cash(CARD, PIN, "1")

    assert transaction.id is not None
    assert again.id > transaction.id
    assert transaction.balance == Decimal("112.50")
    assert transaction.describe() == atm.transaction_history(CARD, PIN)[0]


def test_deposit_rolls_back_when_record_fails(atm, monkeypatch):
    """The balance is not kept if its transaction row cannot be written."""
    def fail(*args, **kwargs):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(atm._transaction_repo, "create", fail)

    with pytest.raises(sqlite3.OperationalError):
        atm.deposit_cash(CARD, PIN, 50)

    assert atm.check_balance(CARD, PIN) == Decimal("100")
    assert atm.transaction_history(CARD, PIN) == []


def test_custom_max_amount():
    service = AtmService(max_amount=500)
    service.register_account(CARD, PIN, "Alice", 0)

    service.deposit_cash(CARD, PIN, 500)
    with pytest.raises(InvalidAmountError):
        service.deposit_cash(CARD, PIN, "500.01")

    assert service.check_balance(CARD, PIN) == Decimal("500")
    service.close()
