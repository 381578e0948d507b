"""GET /v1/balance - Current running cash balance"""

from fastapi import APIRouter, Depends

from cash_ledger.api.v1.schemas import BalanceResponse
from cash_ledger.api.dependencies import get_cash_service
from cash_ledger.services.cash import CashService

router = APIRouter()


@router.get("/balance", response_model=BalanceResponse)
async def get_balance(cash_service: CashService = Depends(get_cash_service)):
    """Sum of all cash-kind transaction amounts"""
    return BalanceResponse(balance=await cash_service.get_balance())
