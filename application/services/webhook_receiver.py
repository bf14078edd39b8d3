"""
Receives provider webhook events and hands them to the transaction sink.

Delivery is fire-and-forget: :meth:`WebhookReceiver.receive` schedules the
sink write as an asyncio task and returns at once. Sink errors are logged and
never reach the HTTP response, so the provider is not pushed into retries by
downstream failures. Each event is written at most once.
"""
from __future__ import annotations

import asyncio
import contextlib
from typing import Any

from application.dtos.payments import WebhookEvent
from application.ports.transaction_sink import TransactionSink
from core.logging_config import get_logger
from shared.codes.payment_codes import PIX_TRANSACTION_STATUSES


logger = get_logger(__name__)


class WebhookReceiver:
    def __init__(self, sink: TransactionSink) -> None:
        self.sink = sink
        self._active_tasks: set[asyncio.Task[Any]] = set()

    @property
    def pending(self) -> int:
        return len(self._active_tasks)

    def receive(self, event: WebhookEvent) -> None:
        logger.info(
            "webhook_received",
            transaction_id=event.transaction_id,
            status=event.status,
            known_status=event.status in PIX_TRANSACTION_STATUSES,
        )
        task = asyncio.create_task(self._deliver(event))
        self._active_tasks.add(task)
        task.add_done_callback(self._active_tasks.discard)

    async def _deliver(self, event: WebhookEvent) -> None:
        try:
            await self.sink.upsert(event)
        except Exception as exc:
            logger.error(
                "webhook_sink_failed",
                transaction_id=event.transaction_id,
                status=event.status,
                error=str(exc),
                error_type=type(exc).__name__,
                exc_info=True,
            )

    async def drain(self, timeout_seconds: float = 10.0) -> None:
        """Wait for pending sink writes during shutdown, cancelling stragglers."""
        if not self._active_tasks:
            return
        pending_now = list(self._active_tasks)
        logger.info("webhook_sink_drain", pending_tasks=len(pending_now), timeout_seconds=timeout_seconds)
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return
        for task in pending:
            task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await asyncio.gather(*pending, return_exceptions=True)
        logger.warning("webhook_sink_drain_cancelled", cancelled_tasks=len(pending))
