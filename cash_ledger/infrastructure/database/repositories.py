"""Data access layer for ledger transactions"""

from typing import List
from sqlalchemy.orm import Session
from cash_ledger.infrastructure.database.models import CashTransaction
from cash_ledger.domain.models import Transaction, TransactionKind
from cash_ledger.utils.date_utils import ensure_utc


class TransactionRepository:
    """Repository for persisted transactions"""

    def __init__(self, db: Session):
        self.db = db

    def add(self, transaction: Transaction) -> CashTransaction:
        """Stage a transaction row; the caller commits"""
        row = CashTransaction(
            id=transaction.id,
            cart_id=transaction.cart_id,
            kind=transaction.kind.value,
            amount=transaction.amount,
            reference=transaction.reference,
            comment=transaction.comment,
            created_by=transaction.created_by,
            created_at=transaction.created_at,
        )
        self.db.add(row)
        self.db.flush()
        return row

    def list_all(self) -> List[Transaction]:
        """All stored transactions in the order they were written"""
        rows = self.db.query(CashTransaction).order_by(CashTransaction.position).all()
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(row: CashTransaction) -> Transaction:
        # SQLite hands back naive datetimes
        return Transaction(
            id=row.id,
            kind=TransactionKind(row.kind),
            amount=row.amount,
            reference=row.reference,
            comment=row.comment,
            created_by=row.created_by,
            created_at=ensure_utc(row.created_at),
            cart_id=row.cart_id,
        )
