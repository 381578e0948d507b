"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import List, Optional

from cash_ledger.domain.models import Transaction
from cash_ledger.utils.date_utils import format_timestamp


class CreateTransactionRequest(BaseModel):
    """Request body for POST /v1/transactions"""

    # Kind is checked by the service so an unknown value is a 400, not a 422
    kind: str = Field(..., description="Payment method: cash, card or transfer")
    amount: int = Field(..., description="Signed amount in minor currency units")
    reference: str = Field("", description="External reference")
    comment: str = Field("", description="Free-text annotation")
    created_by: str = Field(..., description="Acting user identifier")
    cart_id: Optional[str] = Field(None, description="Linked cart, if any")


class TransactionSchema(BaseModel):
    """Stored transaction"""

    id: str
    cart_id: Optional[str] = None
    kind: str
    amount: int
    reference: str
    comment: str
    created_by: str
    created_at: str

    @classmethod
    def from_domain(cls, transaction: Transaction) -> "TransactionSchema":
        return cls(
            id=transaction.id,
            cart_id=transaction.cart_id,
            kind=transaction.kind.value,
            amount=transaction.amount,
            reference=transaction.reference,
            comment=transaction.comment,
            created_by=transaction.created_by,
            created_at=format_timestamp(transaction.created_at),
        )


class BalanceResponse(BaseModel):
    """Response for GET /v1/balance"""

    balance: int


class BulkRequest(BaseModel):
    """Request body for POST /v1/transactions/bulk"""

    transaction_ids: List[str] = Field(default_factory=list)


class DateRangeResponse(BaseModel):
    """Response for GET /v1/transactions/by-date"""

    transaction_ids: List[str]


class LogResponse(BaseModel):
    """Response for GET /v1/log"""

    transactions: List[TransactionSchema]
