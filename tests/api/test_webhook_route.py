import pytest
from fastapi.testclient import TestClient

from main import create_app


def test_events_reach_the_sink(settings, provider, sink):
    app = create_app(settings, transport=provider.transport, sink=sink)
    with TestClient(app) as client:
        first = client.post("/api/webhook/pix", json={"type": "transaction", "data": {"id": "tx_1", "status": "paid"}})
        second = client.post("/api/webhook/pix", json={"data": {"id": 42, "status": "refunded", "amount": 100}})
        assert first.status_code == 200
        assert first.text == "OK"
        assert second.status_code == 200

    # 退出 with 时 lifespan 关闭阶段会等待所有写入完成
    assert [(e.transaction_id, e.status) for e in sink.events] == [("tx_1", "paid"), ("42", "refunded")]
    assert sink.events[1].data == {"id": 42, "status": "refunded", "amount": 100}
    assert provider.requests == []


def test_sink_failure_still_acknowledges(settings, provider, failing_sink):
    app = create_app(settings, transport=provider.transport, sink=failing_sink)
    with TestClient(app) as client:
        resp = client.post("/api/webhook/pix", json={"data": {"id": "tx_1", "status": "paid"}})
        assert resp.status_code == 200
        assert resp.text == "OK"
    assert len(failing_sink.events) == 1


@pytest.mark.parametrize(
    "raw",
    ["", "not json", "[]", "{}", '{"data": null}', '{"data": {"status": "paid"}}', '{"data": {"id": "tx_1"}}'],
)
def test_malformed_notifications_are_acknowledged_and_dropped(settings, provider, sink, raw):
    app = create_app(settings, transport=provider.transport, sink=sink)
    with TestClient(app) as client:
        resp = client.post("/api/webhook/pix", content=raw, headers={"Content-Type": "application/json"})
        assert resp.status_code == 200
        assert resp.text == "OK"
    assert sink.events == []
