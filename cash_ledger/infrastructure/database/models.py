"""SQLAlchemy ORM models for persisted ledger state"""

from sqlalchemy import Column, String, BigInteger, Integer, DateTime, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class CashTransaction(Base):
    """Persisted transaction row"""

    __tablename__ = "cash_transaction"

    # Storage order only; transaction identity is the UUID in `id`
    position = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), nullable=False, unique=True, index=True)
    cart_id = Column(String(64), nullable=True)
    kind = Column(String(16), nullable=False)
    amount = Column(BigInteger, nullable=False)
    reference = Column(Text, nullable=False, default="")
    comment = Column(Text, nullable=False, default="")
    created_by = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
