"""
Factory for payment gateway clients.
"""
from __future__ import annotations

from typing import Optional

import httpx

from core.config import Settings
from .fair_client import FairPaymentsClient


def get_payment_gateway(
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FairPaymentsClient:
    return FairPaymentsClient(settings.FAIR_API_BASE, transport=transport)


__all__ = ["FairPaymentsClient", "get_payment_gateway"]
