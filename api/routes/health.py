"""
Liveness probes.
"""
from fastapi import APIRouter

from core.response import health_body


router = APIRouter(tags=["Health"])


@router.get("/")
async def root():
    return health_body("root OK")


@router.get("/api")
async def api_root():
    return health_body("/api OK")
