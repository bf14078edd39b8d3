"""
Transaction sink port: where provider webhook events end up.

The only contract is an upsert keyed by the provider transaction id.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from application.dtos.payments import WebhookEvent


@runtime_checkable
class TransactionSink(Protocol):
    async def upsert(self, event: WebhookEvent) -> None: ...
