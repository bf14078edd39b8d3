"""
PIX 交易仓储实现 - 使用SQLAlchemy实现 webhook 事件的 upsert
"""
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from application.dtos.payments import WebhookEvent
from infrastructure.models.pix_transaction import PixTransactionModel
from core.logging_config import get_logger


logger = get_logger(__name__)


class SQLAlchemyTransactionSink:
    """Upserts webhook events into ``pix_transactions`` keyed by transaction id."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def upsert(self, event: WebhookEvent) -> None:
        async with self.session_factory() as session:
            try:
                created = await self._write(session, event)
                await session.commit()
            except IntegrityError:
                # A concurrent event inserted the same transaction first.
                await session.rollback()
                created = await self._write(session, event)
                await session.commit()
        logger.info(
            "pix_transaction_upserted",
            transaction_id=event.transaction_id,
            status=event.status,
            created=created,
        )

    async def get(self, transaction_id: str) -> PixTransactionModel | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(PixTransactionModel).where(PixTransactionModel.transaction_id == transaction_id)
            )
            return result.scalar_one_or_none()

    async def _write(self, session: AsyncSession, event: WebhookEvent) -> bool:
        result = await session.execute(
            select(PixTransactionModel).where(PixTransactionModel.transaction_id == event.transaction_id)
        )
        row = result.scalar_one_or_none()
        if row is None:
            session.add(
                PixTransactionModel(
                    transaction_id=event.transaction_id,
                    status=event.status,
                    payload=event.data,
                )
            )
            await session.flush()
            return True
        row.status = event.status
        row.payload = event.data
        row.updated_at = datetime.now(timezone.utc)
        return False
