"""Unit tests for transaction kinds and construction"""

import uuid
import pytest
from datetime import timezone
from cash_ledger.domain.models import Transaction, TransactionKind
from cash_ledger.domain.exceptions import TransactionValidationError


@pytest.mark.parametrize("value", ["cash", "card", "transfer"])
def test_parse_accepts_known_kinds(value):
    assert TransactionKind.parse(value).value == value


def test_parse_rejects_unknown_kind_and_lists_accepted():
    with pytest.raises(TransactionValidationError) as exc_info:
        TransactionKind.parse("barter")

    message = str(exc_info.value)
    assert "barter" in message
    assert "cash, card, transfer" in message


def test_only_cash_affects_balance():
    assert TransactionKind.CASH.affects_balance is True
    assert TransactionKind.CARD.affects_balance is False
    assert TransactionKind.TRANSFER.affects_balance is False


def test_create_assigns_unique_uuid_and_utc_timestamp():
    a = Transaction.create(TransactionKind.CASH, 100, created_by="demo")
    b = Transaction.create(TransactionKind.CASH, 100, created_by="demo")

    assert a.id != b.id
    assert str(uuid.UUID(a.id)) == a.id
    assert a.created_at.tzinfo == timezone.utc
    assert b.created_at >= a.created_at
    assert a.cart_id is None


def test_transaction_is_immutable():
    transaction = Transaction.create(TransactionKind.CASH, 100, created_by="demo")

    with pytest.raises(AttributeError):
        transaction.amount = 5
