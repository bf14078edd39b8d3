"""
Application service orchestrating PIX payment use-cases.

This class depends only on the application ports and DTOs. The gateway and
the header factory are provided by infrastructure and injected from the
composition root (API), keeping dependencies one-way.
"""
from __future__ import annotations

from typing import Any, Callable

from application.dtos.payments import OrderRequest, TransactionResult
from application.ports.payment_gateway import AuthHeaders, PixGateway
from application.services.payload_mapper import PayloadMapper
from core.logging_config import get_logger
from domain.common.exceptions import ValidationError


logger = get_logger(__name__)


class PixService:
    def __init__(
        self,
        gateway: PixGateway,
        mapper: PayloadMapper,
        headers_factory: Callable[[], AuthHeaders],
    ) -> None:
        self.gateway = gateway
        self.mapper = mapper
        self.headers_factory = headers_factory

    async def create_transaction(self, raw_order: Any) -> TransactionResult:
        order = OrderRequest.from_payload(raw_order)
        payload = self.mapper.build(order)
        logger.info(
            "pix_create_request",
            identifier=order.identifier,
            amount=payload.amount,
            items=len(payload.items or ()),
            splits=len(payload.splits or ()),
            forwarded=sorted(order.provider_options),
        )
        # Headers are rebuilt per call so they always reflect current credentials.
        result = await self.gateway.create_transaction(payload, self.headers_factory())
        logger.info("pix_create_response", transaction_id=result.transaction_id)
        return result

    async def get_status(self, transaction_id: str) -> Any:
        if not transaction_id or not transaction_id.strip():
            raise ValidationError("transaction id is required", field="id")
        logger.info("pix_status_request", transaction_id=transaction_id)
        return await self.gateway.get_transaction(transaction_id, self.headers_factory())
