"""Database engine and session management"""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from cash_ledger.config import settings
from cash_ledger.infrastructure.database.models import Base


def build_engine(database_url: str) -> Engine:
    """Create an engine, preparing the data directory for file-backed SQLite"""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(database_url, connect_args={"check_same_thread": False})

    # Server databases: verify pooled connections and recycle after 1 hour
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=10,
        pool_recycle=3600,
    )


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = engine) -> None:
    """Create tables that do not exist yet"""
    Base.metadata.create_all(bind=bind)
