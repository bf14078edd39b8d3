"""
API依赖项 - 从应用状态中取出启动时构建的组件

Everything here is built once in ``create_app`` and is read-only afterwards.
"""
from fastapi import Depends, Request

from application.services.payment_service import PixService
from application.services.webhook_receiver import WebhookReceiver


def get_pix_service(request: Request) -> PixService:
    state = request.app.state
    return PixService(
        gateway=state.payment_gateway,
        mapper=state.payload_mapper,
        headers_factory=state.auth_headers.build,
    )


def get_webhook_receiver(request: Request) -> WebhookReceiver:
    return request.app.state.webhook_receiver


PixServiceDep = Depends(get_pix_service)
WebhookReceiverDep = Depends(get_webhook_receiver)
