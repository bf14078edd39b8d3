import httpx
import pytest
from fastapi.testclient import TestClient

from infrastructure.external.payments.auth import basic_credential
from main import create_app


ORDER = {
    "identifier": "PED-1001",
    "client": {"name": "Ana", "email": "ana@example.com", "document": {"number": "12345678909", "type": "cpf"}},
    "products": [{"id": 1, "name": "Camiseta", "unitPrice": 19.9, "quantity": 2}],
    "callbackUrl": "https://example.com/cb",
}


@pytest.fixture
def client(settings, provider, sink):
    app = create_app(settings, transport=provider.transport, sink=sink)
    with TestClient(app) as test_client:
        yield test_client


def test_liveness_routes(client):
    assert client.get("/").json() == {"ok": True, "message": "root OK"}
    assert client.get("/api").json() == {"ok": True, "message": "/api OK"}


def test_create_returns_transaction_summary(client, provider):
    resp = client.post("/api/pix/create", json=ORDER)

    assert resp.status_code == 201
    assert resp.json() == {
        "transactionId": "tx_123",
        "qrUrl": "00020126580014br.gov.bcb.pix",
        "paymentUrl": "https://pay.example/tx_123",
        "pix": {"qrcode": "00020126580014br.gov.bcb.pix", "expirationDate": "2026-10-20"},
    }
    assert resp.headers["X-Request-ID"]


def test_create_sends_authenticated_canonical_request(client, provider):
    client.post("/api/pix/create", json=ORDER)

    request = provider.requests[0]
    assert str(request.url) == "https://provider.test/v1/transactions"
    assert request.headers["authorization"] == basic_credential("sk_test_123")
    assert request.headers["x-company-id"] == "company-42"
    assert provider.last_json() == {
        "currency": "BRL",
        "paymentMethod": "PIX",
        "amount": 3980,
        "items": [{"title": "Camiseta", "unitPrice": 1990, "quantity": 2, "externalRef": "1"}],
        "customer": ORDER["client"],
        "description": "Order PED-1001",
        "postbackUrl": "https://example.com/cb",
    }


def test_create_derives_postback_from_public_base(client, provider):
    client.post("/api/pix/create", json={"amount": 10})
    assert provider.last_json()["postbackUrl"] == "https://host/api/webhook/pix"
    assert provider.last_json()["description"].startswith("Order ")


def test_provider_rejection_is_passed_through(client, provider):
    provider.create_response = httpx.Response(402, json={"error": "insufficient_funds"})
    resp = client.post("/api/pix/create", json=ORDER)
    assert resp.status_code == 402
    assert resp.json() == {"error": "insufficient_funds"}


def test_empty_provider_rejection_gets_message(client, provider):
    provider.create_response = httpx.Response(503)
    resp = client.post("/api/pix/create", json=ORDER)
    assert resp.status_code == 503
    assert resp.json()["message"]


def test_timeout_becomes_500_with_message(client, provider):
    provider.error = httpx.ReadTimeout("timed out")
    resp = client.post("/api/pix/create", json=ORDER)
    assert resp.status_code == 500
    assert resp.json() == {"message": "timed out"}


def test_order_without_amount_source_is_rejected(client, provider):
    resp = client.post("/api/pix/create", json={"identifier": "x", "products": []})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"]
    assert body["field"] == "amount"
    assert provider.requests == []


def test_product_without_price_is_rejected(client, provider):
    resp = client.post("/api/pix/create", json={"products": [{"name": "Sem preço"}]})
    assert resp.status_code == 400
    assert "message" in resp.json()
    assert provider.requests == []


@pytest.mark.parametrize("raw", ["[1, 2]", "\"text\"", "{not json"])
def test_non_object_body_is_rejected(client, provider, raw):
    resp = client.post("/api/pix/create", content=raw, headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert "message" in resp.json()
    assert provider.requests == []


def test_status_is_passed_through(client, provider):
    resp = client.get("/api/pix/status/tx_123")
    assert resp.status_code == 200
    assert resp.json() == {"id": "tx_123", "status": "paid", "amount": 1990}
    assert str(provider.requests[0].url) == "https://provider.test/v1/transactions/tx_123"
    assert provider.requests[0].headers["authorization"] == basic_credential("sk_test_123")


def test_status_not_found_is_passed_through(client, provider):
    provider.status_response = httpx.Response(404, json={"message": "Transaction not found"})
    resp = client.get("/api/pix/status/missing")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Transaction not found"}


@pytest.mark.parametrize(
    "order, field",
    [
        ({"amount": 1e30}, "amount"),
        ({"amount": "1e40"}, "amount"),
        ({"products": [{"name": "A", "unitPrice": 1, "quantity": 10 ** 400}]}, "products[0].quantity"),
        ({"items": [{"title": "Plano", "unitPrice": "49.90"}]}, "amount"),
    ],
)
def test_unusable_amounts_are_rejected_with_400(client, provider, order, field):
    resp = client.post("/api/pix/create", json=order)
    assert resp.status_code == 400
    body = resp.json()
    assert body["field"] == field
    assert body["message"]
    assert provider.requests == []


def test_unknown_order_keys_reach_the_provider(client, provider):
    resp = client.post("/api/pix/create", json={**ORDER, "expiresInDays": 1, "currency": "USD"})
    assert resp.status_code == 201
    sent = provider.last_json()
    assert sent["expiresInDays"] == 1
    assert sent["currency"] == "BRL"
