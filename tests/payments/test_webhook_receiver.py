import asyncio

import pytest

from application.dtos.payments import WebhookEvent
from application.services.webhook_receiver import WebhookReceiver


def _event(tx_id="tx_1", status="paid") -> WebhookEvent:
    return WebhookEvent.from_payload({"data": {"id": tx_id, "status": status}})


@pytest.mark.asyncio
async def test_events_are_delivered_once(sink):
    receiver = WebhookReceiver(sink)
    receiver.receive(_event("tx_1"))
    receiver.receive(_event("tx_2", "refused"))
    await receiver.drain()

    assert [(e.transaction_id, e.status) for e in sink.events] == [("tx_1", "paid"), ("tx_2", "refused")]
    assert receiver.pending == 0


@pytest.mark.asyncio
async def test_sink_failure_does_not_propagate(failing_sink):
    receiver = WebhookReceiver(failing_sink)
    receiver.receive(_event())
    await receiver.drain()
    assert len(failing_sink.events) == 1


@pytest.mark.asyncio
async def test_drain_cancels_slow_writes():
    finished = []

    class SlowSink:
        async def upsert(self, event):
            await asyncio.sleep(5)
            finished.append(event)

    receiver = WebhookReceiver(SlowSink())
    receiver.receive(_event())
    await receiver.drain(timeout_seconds=0.01)
    assert finished == []


@pytest.mark.asyncio
async def test_drain_without_pending_tasks_returns(sink):
    await WebhookReceiver(sink).drain()
    assert sink.events == []
