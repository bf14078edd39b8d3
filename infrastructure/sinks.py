"""
Transaction sink selection.

With ``DATABASE_URL`` configured webhook events are upserted through
SQLAlchemy; otherwise they are only logged.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from application.dtos.payments import WebhookEvent
from application.ports.transaction_sink import TransactionSink
from core.config import Settings
from core.logging_config import get_logger
from infrastructure.database import create_engine, create_session_factory
from infrastructure.repositories.transaction_repository import SQLAlchemyTransactionSink


logger = get_logger(__name__)


class LoggingTransactionSink:
    """Sink used when no database is configured."""

    async def upsert(self, event: WebhookEvent) -> None:
        logger.info(
            "pix_transaction_status",
            transaction_id=event.transaction_id,
            status=event.status,
        )


def build_transaction_sink(settings: Settings) -> tuple[TransactionSink, Optional[AsyncEngine]]:
    """Return the sink for these settings and the engine backing it, if any."""
    if not settings.DATABASE_URL:
        return LoggingTransactionSink(), None
    engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    return SQLAlchemyTransactionSink(create_session_factory(engine)), engine
