"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from cash_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from cash_ledger.api.v1 import balance, transactions
from cash_ledger.infrastructure.database.session import SessionLocal, init_db
from cash_ledger.infrastructure.observability.logging import setup_logging
from cash_ledger.infrastructure.observability.metrics import balance_gauge
from cash_ledger.services.cash import CashService
from cash_ledger.config import settings

# Setup structured logging
setup_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the transaction log on startup, log shutdown once requests drain"""
    init_db()
    cash_service = CashService.load_or_init(SessionLocal)
    app.state.cash_service = cash_service
    balance_gauge.set(await cash_service.get_balance())
    logger.info("Cash service ready", extra={"address": settings.service_addr_cash})

    yield

    logger.info("Cash service shutting down")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Cash Ledger",
        description="Transaction log and running cash balance service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(balance.router, prefix="/v1", tags=["balance"])

    return app


app = create_app()
