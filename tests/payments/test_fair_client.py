import httpx
import pytest

from application.dtos.payments import TransactionCreatePayload
from infrastructure.external.payments.auth import AuthHeaderBuilder, basic_credential
from infrastructure.external.payments.exceptions import TransportError, UpstreamError
from infrastructure.external.payments.fair_client import FairPaymentsClient


HEADERS = AuthHeaderBuilder("sk_test_123", "company-42").build()


def _client(provider) -> FairPaymentsClient:
    return FairPaymentsClient("https://provider.test/v1/", transport=provider.transport)


def _payload() -> TransactionCreatePayload:
    return TransactionCreatePayload(amount=1990, description="Order A-1", postback_url="https://host/api/webhook/pix")


@pytest.mark.asyncio
async def test_create_transaction_posts_canonical_body(provider):
    client = _client(provider)
    result = await client.create_transaction(_payload(), HEADERS)
    await client.aclose()

    request = provider.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://provider.test/v1/transactions"
    assert request.headers["authorization"] == basic_credential("sk_test_123")
    assert request.headers["x-company-id"] == "company-42"
    assert provider.last_json() == {
        "currency": "BRL",
        "paymentMethod": "PIX",
        "amount": 1990,
        "description": "Order A-1",
        "postbackUrl": "https://host/api/webhook/pix",
    }
    assert result.transaction_id == "tx_123"
    assert result.qr_url == "00020126580014br.gov.bcb.pix"
    assert result.payment_url == "https://pay.example/tx_123"
    assert result.pix["expirationDate"] == "2026-10-20"


@pytest.mark.asyncio
async def test_camel_case_payment_url_is_accepted(provider):
    provider.create_response = httpx.Response(200, json={"id": 99, "paymentUrl": "https://pay.example/99"})
    result = await _client(provider).create_transaction(_payload(), HEADERS)
    assert result.transaction_id == "99"
    assert result.payment_url == "https://pay.example/99"
    assert result.qr_url is None
    assert result.to_response() == {"transactionId": "99", "paymentUrl": "https://pay.example/99"}


@pytest.mark.asyncio
async def test_create_without_id_is_a_transport_error(provider):
    provider.create_response = httpx.Response(200, json={"status": "waiting_payment"})
    with pytest.raises(TransportError):
        await _client(provider).create_transaction(_payload(), HEADERS)


@pytest.mark.asyncio
async def test_non_json_success_is_a_transport_error(provider):
    provider.create_response = httpx.Response(200, text="<html>ok</html>")
    with pytest.raises(TransportError):
        await _client(provider).create_transaction(_payload(), HEADERS)


@pytest.mark.asyncio
async def test_provider_rejection_keeps_status_and_body(provider):
    provider.create_response = httpx.Response(402, json={"error": "insufficient_funds"})
    with pytest.raises(UpstreamError) as excinfo:
        await _client(provider).create_transaction(_payload(), HEADERS)
    assert excinfo.value.status_code == 402
    assert excinfo.value.body == {"error": "insufficient_funds"}


@pytest.mark.asyncio
async def test_plain_text_rejection_body_is_kept_as_text(provider):
    provider.create_response = httpx.Response(503, text="upstream unavailable")
    with pytest.raises(UpstreamError) as excinfo:
        await _client(provider).create_transaction(_payload(), HEADERS)
    assert excinfo.value.body == "upstream unavailable"


@pytest.mark.asyncio
async def test_timeout_is_a_transport_error(provider):
    provider.error = httpx.ReadTimeout("timed out")
    with pytest.raises(TransportError) as excinfo:
        await _client(provider).create_transaction(_payload(), HEADERS)
    assert excinfo.value.message == "timed out"
    assert len(provider.requests) == 1


@pytest.mark.asyncio
async def test_get_transaction_returns_body_unchanged(provider):
    body = await _client(provider).get_transaction("tx_123", HEADERS)
    assert body == {"id": "tx_123", "status": "paid", "amount": 1990}
    request = provider.requests[0]
    assert request.method == "GET"
    assert str(request.url) == "https://provider.test/v1/transactions/tx_123"
    assert request.headers["authorization"] == basic_credential("sk_test_123")


@pytest.mark.asyncio
async def test_get_transaction_quotes_the_id(provider):
    await _client(provider).get_transaction("tx/1 2", HEADERS)
    assert provider.requests[0].url.raw_path == b"/v1/transactions/tx%2F1%202"


@pytest.mark.asyncio
async def test_get_transaction_not_found(provider):
    provider.status_response = httpx.Response(404, json={"message": "Transaction not found"})
    with pytest.raises(UpstreamError) as excinfo:
        await _client(provider).get_transaction("missing", HEADERS)
    assert excinfo.value.status_code == 404
    assert excinfo.value.body == {"message": "Transaction not found"}
