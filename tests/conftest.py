"""Pytest fixtures for testing"""

import os

# Keep the module-level engine off the filesystem during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import datetime, timedelta, timezone
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from cash_ledger.api.main import create_app
from cash_ledger.api.dependencies import get_cash_service
from cash_ledger.domain.models import Transaction, TransactionKind
from cash_ledger.infrastructure.database.models import Base
from cash_ledger.services.cash import CashService


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database shared across sessions"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> Callable[[], Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def cash_service(session_factory: Callable[[], Session]) -> CashService:
    """Cash service backed by the in-memory database"""
    return CashService.load_or_init(session_factory, bulk_buffer_size=2)


@pytest.fixture
def client(cash_service: CashService) -> TestClient:
    """Create FastAPI test client wired to the test cash service"""
    app = create_app()
    app.dependency_overrides[get_cash_service] = lambda: cash_service
    return TestClient(app)


@pytest.fixture
def base_time() -> datetime:
    return datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_transaction(base_time: datetime) -> Callable[..., Transaction]:
    """Factory for transactions with a controlled creation time"""
    counter = iter(range(10_000))

    def _make(
        amount: int,
        kind: TransactionKind = TransactionKind.CASH,
        minutes: int | None = None,
        cart_id: str | None = None,
    ) -> Transaction:
        n = next(counter)
        offset = n if minutes is None else minutes
        return Transaction(
            id=f"00000000-0000-4000-8000-{n:012d}",
            kind=kind,
            amount=amount,
            reference=f"ref-{n}",
            comment="",
            created_by="tester",
            created_at=base_time + timedelta(minutes=offset),
            cart_id=cart_id,
        )

    return _make
