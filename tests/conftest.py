"""Pytest bootstrap configuration.

Ensure mandatory environment variables are set before test collection
and module imports that depend on application settings.
"""
import os

# Mandatory provider secret for settings validation (main.app is built on import)
os.environ.setdefault("FAIR_SECRET_KEY", "test-secret-key")

import json
from datetime import datetime, timezone

import httpx
import pytest

from application.dtos.payments import WebhookEvent
from core.config import Settings


class RecordingSink:
    def __init__(self, error: Exception | None = None):
        self.events: list[WebhookEvent] = []
        self.error = error

    async def upsert(self, event: WebhookEvent) -> None:
        self.events.append(event)
        if self.error is not None:
            raise self.error


class FakeFairPayments:
    """In-process stand-in for the provider, served through httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.create_response = httpx.Response(
            200,
            json={
                "id": "tx_123",
                "status": "waiting_payment",
                "pix": {"qrcode": "00020126580014br.gov.bcb.pix", "expirationDate": "2026-10-20"},
                "payment_url": "https://pay.example/tx_123",
            },
        )
        self.status_response = httpx.Response(200, json={"id": "tx_123", "status": "paid", "amount": 1990})
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        template = self.create_response if request.method == "POST" else self.status_response
        # 每次返回新的 Response，避免同一对象被多次读取
        return httpx.Response(template.status_code, headers=template.headers, content=template.content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        FAIR_SECRET_KEY="sk_test_123",
        FAIR_COMPANY_ID="company-42",
        FAIR_API_BASE="https://provider.test/v1",
        PUBLIC_BASE_URL="https://host/",
        DATABASE_URL=None,
    )


@pytest.fixture
def provider() -> FakeFairPayments:
    return FakeFairPayments()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def fixed_clock():
    moment = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)
    return lambda: moment


@pytest.fixture
def failing_sink() -> RecordingSink:
    return RecordingSink(error=RuntimeError("database is down"))
