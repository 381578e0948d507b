"""Transaction endpoints - record, look up and list ledger entries"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import StreamingResponse

from cash_ledger.api.v1.schemas import (
    BulkRequest,
    CreateTransactionRequest,
    DateRangeResponse,
    LogResponse,
    TransactionSchema,
)
from cash_ledger.api.dependencies import get_cash_service, get_request_id
from cash_ledger.services.cash import CashService
from cash_ledger.domain.exceptions import (
    LedgerConsistencyError,
    TransactionNotFoundError,
    TransactionValidationError,
)
from cash_ledger.infrastructure.observability.metrics import record_transaction, lookup_miss_counter
from cash_ledger.infrastructure.observability.logging import log_transaction

router = APIRouter()


@router.post("/transactions", response_model=TransactionSchema)
async def create_transaction(
    request_body: CreateTransactionRequest,
    request: Request,
    cash_service: CashService = Depends(get_cash_service),
):
    """
    Record a transaction.

    Cash transactions change the balance; card and transfer are stored
    for lookup only. The transaction is durable once this returns.
    """
    request_id = get_request_id(request)

    try:
        transaction, balance = await cash_service.record_transaction(
            kind=request_body.kind,
            amount=request_body.amount,
            reference=request_body.reference,
            comment=request_body.comment,
            created_by=request_body.created_by,
            cart_id=request_body.cart_id,
        )

    except TransactionValidationError as e:
        logging.warning(f"Rejected transaction: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except LedgerConsistencyError as e:
        logging.error(f"Ledger consistency error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_transaction(transaction.kind.value, balance)
    log_transaction(
        request_id,
        transaction.id,
        transaction.kind.value,
        transaction.amount,
        balance,
        transaction.created_by,
        transaction.cart_id,
    )

    return TransactionSchema.from_domain(transaction)


@router.get("/transactions/by-date", response_model=DateRangeResponse)
async def get_by_date_range(
    request: Request,
    from_: str = Query(..., alias="from", description="Range start, RFC 3339"),
    till: str = Query(..., description="Range end, RFC 3339"),
    cash_service: CashService = Depends(get_cash_service),
):
    """Identifiers of transactions created within [from, till]"""
    try:
        transaction_ids = await cash_service.get_by_date_range(from_, till)
    except TransactionValidationError as e:
        logging.warning(f"Invalid date range: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=400, detail=str(e))

    return DateRangeResponse(transaction_ids=transaction_ids)


@router.get("/log", response_model=LogResponse)
async def get_log(
    request: Request,
    from_: str = Query(..., alias="from", description="Range start, RFC 3339"),
    till: str = Query(..., description="Range end, RFC 3339"),
    cash_service: CashService = Depends(get_cash_service),
):
    """Full transactions created within [from, till], in insertion order"""
    try:
        transactions = await cash_service.get_log(from_, till)
    except TransactionValidationError as e:
        logging.warning(f"Invalid date range: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=400, detail=str(e))

    return LogResponse(transactions=[TransactionSchema.from_domain(t) for t in transactions])


@router.post("/transactions/bulk")
async def get_bulk(
    request_body: BulkRequest,
    cash_service: CashService = Depends(get_cash_service),
):
    """
    Stream requested transactions as newline-delimited JSON.

    Unknown or malformed identifiers are left out of the stream.
    """

    async def ndjson_lines():
        async for transaction in cash_service.stream_bulk(request_body.transaction_ids):
            yield TransactionSchema.from_domain(transaction).model_dump_json() + "\n"

    return StreamingResponse(ndjson_lines(), media_type="application/x-ndjson")


@router.get("/transactions/{transaction_id}", response_model=TransactionSchema)
async def get_by_id(
    transaction_id: str,
    request: Request,
    cash_service: CashService = Depends(get_cash_service),
):
    """Retrieve a single transaction by identifier"""
    try:
        transaction = await cash_service.get_by_id(transaction_id)
    except TransactionValidationError:
        raise HTTPException(status_code=400, detail="Invalid transaction ID format")
    except TransactionNotFoundError:
        lookup_miss_counter.inc()
        logging.info("Transaction not found", extra={"request_id": get_request_id(request), "transaction_id": transaction_id})
        raise HTTPException(status_code=404, detail="Transaction not found")

    return TransactionSchema.from_domain(transaction)
