"""
PIX 交易数据库模型 - SQLAlchemy ORM模型

One row per provider transaction, updated in place by webhook events.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON
from datetime import datetime, timezone

from .base import Base


class PixTransactionModel(Base):
    __tablename__ = "pix_transactions"

    id = Column(Integer, primary_key=True, index=True)
    transaction_id = Column(String(200), unique=True, index=True, nullable=False, comment="Provider transaction id")
    status = Column(String(50), nullable=False, index=True, comment="Last status reported by the provider")
    payload = Column(JSON, nullable=True, comment="Raw webhook data object")

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self):
        return f"<PixTransactionModel(transaction_id='{self.transaction_id}', status='{self.status}')>"
