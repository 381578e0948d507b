"""Transaction log - append-only ledger with a running cash balance"""

from datetime import datetime
from typing import Iterable, List, Tuple

from cash_ledger.domain.exceptions import LedgerConsistencyError
from cash_ledger.domain.models import Transaction


class TransactionLog:
    """
    Ordered, append-only collection of transactions.

    Invariant: balance == sum(t.amount for t in transactions if t.kind.affects_balance)

    There is no update or delete; corrections are recorded as new
    compensating transactions. Not safe for concurrent use on its own,
    callers serialise access (see CashService).
    """

    def __init__(self, transactions: Iterable[Transaction] = ()):
        self._transactions: List[Transaction] = []
        self._balance = 0
        for transaction in transactions:
            self.add_transaction(transaction)

    def __len__(self) -> int:
        return len(self._transactions)

    def add_transaction(self, transaction: Transaction) -> Transaction:
        """
        Append a transaction and apply it to the balance.

        Returns:
            The stored transaction (most recent entry)

        Raises:
            LedgerConsistencyError: If the last stored entry is not the one just inserted
        """
        self._transactions.append(transaction)
        if transaction.kind.affects_balance:
            self._balance += transaction.amount

        if not self._transactions or self._transactions[-1].id != transaction.id:
            raise LedgerConsistencyError(
                f"Error while inserting transaction {transaction.id}: last stored entry does not match"
            )
        return self._transactions[-1]

    def get_balance(self) -> int:
        return self._balance

    def get_transactions(self) -> Tuple[Transaction, ...]:
        """All transactions in insertion order, as a read-only snapshot"""
        return tuple(self._transactions)

    def get_log(self, from_: datetime, till: datetime) -> List[Transaction]:
        """Transactions created within [from_, till], both ends inclusive"""
        return [t for t in self._transactions if from_ <= t.created_at <= till]
