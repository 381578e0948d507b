"""Cash service - serialised access to the transaction log"""

import asyncio
import logging
import uuid
from datetime import datetime
from typing import AsyncIterator, Callable, Iterable, List, Optional, Set, Tuple

from sqlalchemy.orm import Session

from cash_ledger.config import settings
from cash_ledger.domain.exceptions import TransactionNotFoundError, TransactionValidationError
from cash_ledger.domain.ledger import TransactionLog
from cash_ledger.domain.models import Transaction, TransactionKind
from cash_ledger.infrastructure.database.repositories import TransactionRepository
from cash_ledger.utils.date_utils import parse_timestamp

logger = logging.getLogger(__name__)

_END_OF_STREAM = object()


def _normalize_id(transaction_id: str) -> str:
    """Canonical string form of a UUID; raises ValueError when malformed"""
    return str(uuid.UUID(str(transaction_id)))


class CashService:
    """
    Adapts requests into TransactionLog calls.

    The log is owned by this service and guarded by a single lock. Every
    operation, read or write, holds the lock for its whole duration, so
    the transaction list and balance are never observed half-updated.
    When a session factory is given, new transactions are written to the
    database before create_transaction returns.
    """

    def __init__(
        self,
        log: Optional[TransactionLog] = None,
        session_factory: Optional[Callable[[], Session]] = None,
        bulk_buffer_size: Optional[int] = None,
    ):
        self._log = log if log is not None else TransactionLog()
        self._session_factory = session_factory
        self._bulk_buffer_size = bulk_buffer_size or settings.bulk_stream_buffer_size
        self._lock = asyncio.Lock()

    @classmethod
    def load_or_init(
        cls,
        session_factory: Callable[[], Session],
        bulk_buffer_size: Optional[int] = None,
    ) -> "CashService":
        """Rebuild the log from persisted transactions, or start empty"""
        with session_factory() as db:
            stored = TransactionRepository(db).list_all()
        log = TransactionLog(stored)
        logger.info(
            "Transaction log loaded",
            extra={"transaction_count": len(log), "balance": log.get_balance()},
        )
        return cls(log, session_factory=session_factory, bulk_buffer_size=bulk_buffer_size)

    async def create_transaction(
        self,
        kind: str,
        amount: int,
        reference: str,
        comment: str,
        created_by: str,
        cart_id: Optional[str] = None,
    ) -> Transaction:
        """Record a new transaction and return it (see record_transaction)"""
        transaction, _ = await self.record_transaction(
            kind, amount, reference, comment, created_by, cart_id
        )
        return transaction

    async def record_transaction(
        self,
        kind: str,
        amount: int,
        reference: str,
        comment: str,
        created_by: str,
        cart_id: Optional[str] = None,
    ) -> Tuple[Transaction, int]:
        """
        Record a new transaction.

        The row is committed before the log is touched, so a failed write
        leaves both the log and the balance unchanged.

        Returns:
            The stored transaction and the balance right after it was applied

        Raises:
            TransactionValidationError: If kind is not one of the accepted values
            LedgerConsistencyError: If the log fails its post-insert check
        """
        transaction = Transaction.create(
            kind=TransactionKind.parse(kind),
            amount=amount,
            reference=reference,
            comment=comment,
            created_by=created_by,
            cart_id=cart_id,
        )

        async with self._lock:
            if self._session_factory is not None:
                self._persist(transaction)
            stored = self._log.add_transaction(transaction)
            return stored, self._log.get_balance()

    def _persist(self, transaction: Transaction) -> None:
        with self._session_factory() as db:
            TransactionRepository(db).add(transaction)
            db.commit()

    async def get_balance(self) -> int:
        async with self._lock:
            return self._log.get_balance()

    async def get_by_id(self, transaction_id: str) -> Transaction:
        """
        Look up one transaction.

        Raises:
            TransactionValidationError: If the identifier is not a UUID
            TransactionNotFoundError: If nothing is stored under the identifier
        """
        try:
            wanted = _normalize_id(transaction_id)
        except ValueError:
            raise TransactionValidationError(f"Invalid transaction id: {transaction_id}") from None

        async with self._lock:
            for transaction in self._log.get_transactions():
                if transaction.id == wanted:
                    return transaction
        raise TransactionNotFoundError(wanted)

    async def get_bulk(self, transaction_ids: Iterable[str]) -> List[Transaction]:
        """Stored transactions whose id was requested; unknown ids are omitted"""
        return [transaction async for transaction in self.stream_bulk(transaction_ids)]

    async def stream_bulk(self, transaction_ids: Iterable[str]) -> AsyncIterator[Transaction]:
        """
        Yield requested transactions as the producer hands them over.

        A producer task snapshots the matches under the lock and feeds them
        through a bounded queue. Closing this iterator early cancels the
        producer; results already yielded are not retracted.
        """
        wanted = self._parse_ids(transaction_ids)
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._bulk_buffer_size)
        producer = asyncio.create_task(self._produce_bulk(wanted, queue))
        try:
            while True:
                item = await queue.get()
                if item is _END_OF_STREAM:
                    break
                yield item
        finally:
            producer.cancel()

    async def _produce_bulk(self, wanted: Set[str], queue: asyncio.Queue) -> None:
        async with self._lock:
            matches = [t for t in self._log.get_transactions() if t.id in wanted]
        for transaction in matches:
            await queue.put(transaction)
        await queue.put(_END_OF_STREAM)

    @staticmethod
    def _parse_ids(transaction_ids: Iterable[str]) -> Set[str]:
        wanted = set()
        for transaction_id in transaction_ids:
            try:
                wanted.add(_normalize_id(transaction_id))
            except ValueError:
                # Malformed ids can never match a stored transaction
                continue
        return wanted

    async def get_by_date_range(self, from_: str, till: str) -> List[str]:
        """Identifiers of transactions created within [from_, till]"""
        return [t.id for t in await self.get_log(from_, till)]

    async def get_log(self, from_: str, till: str) -> List[Transaction]:
        """
        Transactions created within [from_, till], both ends inclusive.

        An inverted range yields an empty list rather than an error.

        Raises:
            TransactionValidationError: If either bound is not a valid timestamp
        """
        start, end = self._parse_range(from_, till)
        async with self._lock:
            return self._log.get_log(start, end)

    @staticmethod
    def _parse_range(from_: str, till: str) -> tuple[datetime, datetime]:
        try:
            start = parse_timestamp(from_)
        except ValueError:
            raise TransactionValidationError("From date invalid") from None
        try:
            end = parse_timestamp(till)
        except ValueError:
            raise TransactionValidationError("Till date invalid") from None
        return start, end
