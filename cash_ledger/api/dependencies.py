"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from cash_ledger.services.cash import CashService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_cash_service(request: Request) -> CashService:
    """Provide the process-wide cash service loaded at startup"""
    return request.app.state.cash_service
