"""Domain models - pure Python dataclasses representing ledger entities"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from cash_ledger.domain.exceptions import TransactionValidationError
from cash_ledger.utils.date_utils import utc_now


class TransactionKind(str, Enum):
    """Payment method of a transaction"""

    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"

    @property
    def affects_balance(self) -> bool:
        """Only cash movements change the drawer balance"""
        return self is TransactionKind.CASH

    @classmethod
    def parse(cls, value: str) -> "TransactionKind":
        """Map request text to a kind, rejecting anything outside the closed set"""
        try:
            return cls(value)
        except ValueError:
            accepted = ", ".join(kind.value for kind in cls)
            raise TransactionValidationError(
                f"Invalid transaction kind '{value}'. Accepted values: {accepted}"
            ) from None


@dataclass(frozen=True)
class Transaction:
    """Single recorded money movement; immutable once created"""

    id: str
    kind: TransactionKind
    amount: int  # minor currency units, positive = inflow
    reference: str
    comment: str
    created_by: str
    created_at: datetime
    cart_id: Optional[str] = None

    @classmethod
    def create(
        cls,
        kind: TransactionKind,
        amount: int,
        reference: str = "",
        comment: str = "",
        created_by: str = "",
        cart_id: Optional[str] = None,
    ) -> "Transaction":
        """Build a new transaction with a fresh identifier and creation time"""
        return cls(
            id=str(uuid.uuid4()),
            kind=kind,
            amount=amount,
            reference=reference,
            comment=comment,
            created_by=created_by,
            created_at=utc_now(),
            cart_id=cart_id,
        )
