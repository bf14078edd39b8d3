"""
PIX payment API routes.

Keep this thin: order normalization lives in the application service and
provider details in infrastructure. Failures are turned into responses by
the handlers in ``core.exceptions``.
"""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Path, status

from api.dependencies import PixServiceDep
from application.services.payment_service import PixService


router = APIRouter(prefix="/pix", tags=["PIX"])


@router.post("/create", status_code=status.HTTP_201_CREATED, summary="Create PIX transaction")
async def create_pix_transaction(
    order: dict[str, Any] = Body(..., description="Order in any accepted shape"),
    service: PixService = PixServiceDep,
):
    result = await service.create_transaction(order)
    return result.to_response()


@router.get("/status/{transaction_id}", summary="Query PIX transaction")
async def get_pix_status(
    transaction_id: str = Path(..., min_length=1),
    service: PixService = PixServiceDep,
):
    return await service.get_status(transaction_id)
