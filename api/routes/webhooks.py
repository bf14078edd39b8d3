"""
Provider webhook endpoint.

Always answers 200: malformed notifications are logged and dropped, sink
failures are handled off the request path. No signature or origin checks
are performed.
"""
from __future__ import annotations

import json

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from api.dependencies import WebhookReceiverDep
from application.dtos.payments import WebhookEvent
from application.services.webhook_receiver import WebhookReceiver
from core.logging_config import get_logger
from domain.common.exceptions import ValidationError


router = APIRouter(prefix="/webhook", tags=["Webhooks"])
logger = get_logger(__name__)


@router.post("/pix", response_class=PlainTextResponse)
async def pix_webhook(request: Request, receiver: WebhookReceiver = WebhookReceiverDep):
    raw_body = await request.body()
    try:
        event = WebhookEvent.from_payload(json.loads(raw_body or b"null"))
    except (ValueError, ValidationError) as exc:
        logger.warning("webhook_payload_ignored", reason=str(exc), size=len(raw_body))
        return PlainTextResponse("OK")

    receiver.receive(event)
    return PlainTextResponse("OK")
