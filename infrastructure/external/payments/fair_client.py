"""
FairPayments PIX transactions adapter.

Endpoints (relative to ``FAIR_API_BASE``):
- ``POST /transactions``       create a PIX transaction
- ``GET  /transactions/{id}``  fetch a transaction
"""
from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

from application.dtos.payments import TransactionCreatePayload, TransactionResult
from domain.pix.fields import PAYMENT_URL_FIELDS, first_present
from infrastructure.external.payments.auth import FairHeaders
from infrastructure.external.payments.base import BasePaymentClient
from infrastructure.external.payments.exceptions import TransportError


class FairPaymentsClient(BasePaymentClient):
    provider = "fairpayments"

    async def create_transaction(
        self, payload: TransactionCreatePayload, headers: FairHeaders
    ) -> TransactionResult:
        body = payload.to_provider_json()
        self._log(
            "fair_transaction_create_request",
            amount=payload.amount,
            items=len(payload.items or ()),
            postback_url=payload.postback_url,
        )
        response = await self._send("POST", "/transactions", headers=headers.as_dict(), json_body=body)
        data = self._parse_json(response)
        result = self.to_result(data)
        self._log(
            "fair_transaction_created",
            transaction_id=result.transaction_id,
            status=data.get("status"),
        )
        return result

    async def get_transaction(self, transaction_id: str, headers: FairHeaders) -> Any:
        """Return the provider's transaction body unmodified."""
        path = f"/transactions/{quote(transaction_id, safe='')}"
        response = await self._send("GET", path, headers=headers.as_dict())
        self._log("fair_transaction_fetched", transaction_id=transaction_id)
        return self._decode_body(response)

    def to_result(self, data: Any) -> TransactionResult:
        if not isinstance(data, Mapping) or data.get("id") in (None, ""):
            raise TransportError(
                f"{self.provider} create response has no transaction id",
                provider=self.provider,
            )
        pix = data.get("pix")
        qr_url = pix.get("qrcode") if isinstance(pix, Mapping) else None
        return TransactionResult(
            transaction_id=str(data["id"]),
            qr_url=qr_url,
            payment_url=first_present(data, PAYMENT_URL_FIELDS),
            pix=pix,
        )
