"""
Error translation and global exception handlers.

Every failure leaves the service as JSON: provider failures keep the
provider's status and body, anything else becomes ``{"message": ...}``.
"""
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status as http_status

from core.logging_config import get_logger
from core.response import message_body, validation_error_body
from domain.common.exceptions import ValidationError
from infrastructure.external.payments.exceptions import TransportError, UpstreamError


def translate_gateway_error(exc: Exception) -> tuple[int, Any]:
    """Derive ``(status_code, body)`` for a failed provider call.

    A provider response is propagated unchanged. An empty provider body, a
    transport failure or any other error yields ``{"message": ...}``, the
    latter two with status 500.
    """
    if isinstance(exc, UpstreamError):
        if exc.body not in (None, "", {}, []):
            return exc.status_code, exc.body
        return exc.status_code, message_body(exc.message)
    message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
    return http_status.HTTP_500_INTERNAL_SERVER_ERROR, message_body(message)


def register_exception_handlers(app: FastAPI):
    """
    注册全局异常处理器

    Args:
        app: FastAPI应用实例
    """

    logger = get_logger(__name__)

    @app.exception_handler(ValidationError)
    async def order_validation_handler(request: Request, exc: ValidationError):
        errors = (exc.details or {}).get("errors")
        logger.warning("order_rejected", field=exc.field, reason=exc.message)
        return JSONResponse(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(validation_error_body(exc.message, field=exc.field, errors=errors)),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Bodies that are not JSON objects never reach the mapper."""
        errors = exc.errors()
        first_error = errors[0] if errors else {}
        field = ".".join(str(loc) for loc in first_error.get("loc", [])[1:])
        return JSONResponse(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(
                validation_error_body(
                    f"invalid request: {first_error.get('msg', 'unknown')}",
                    field=field,
                    errors=errors,
                )
            ),
        )

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        status_code, body = translate_gateway_error(exc)
        return JSONResponse(status_code=status_code, content=jsonable_encoder(body))

    @app.exception_handler(TransportError)
    async def transport_error_handler(request: Request, exc: TransportError):
        status_code, body = translate_gateway_error(exc)
        return JSONResponse(status_code=status_code, content=body)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """处理所有未捕获的异常"""
        request_id = getattr(getattr(request, "state", object()), "request_id", None)
        logger.error(
            "unhandled_exception",
            request_id=request_id,
            error=str(exc),
            exc_info=True,
        )
        status_code, body = translate_gateway_error(exc)
        return JSONResponse(status_code=status_code, content=body)
