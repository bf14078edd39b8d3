"""
FastAPI应用主入口

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import RequestIDMiddleware, LoggingMiddleware
from api.routes import health as health_routes
from api.routes import payments as payments_routes
from api.routes import webhooks as webhook_routes
from application.ports.transaction_sink import TransactionSink
from application.services.payload_mapper import PayloadMapper
from application.services.webhook_receiver import WebhookReceiver
from core.config import Settings, get_settings
from core.exceptions import register_exception_handlers
from core.logging_config import get_logger, configure_logging
from infrastructure.database import create_tables
from infrastructure.external.payments import get_payment_gateway
from infrastructure.external.payments.auth import AuthHeaderBuilder
from infrastructure.sinks import build_transaction_sink


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    engine = app.state.db_engine
    if engine is not None:
        await create_tables(engine)
        logger.info("transaction_sink_ready", sink="sqlalchemy")

    logger.info(
        "application_started",
        api_base=app.state.settings.FAIR_API_BASE,
        company_id_header=app.state.auth_headers.company_id is not None,
        postback_base=app.state.settings.PUBLIC_BASE_URL,
    )
    yield

    # 关闭时的清理工作
    await app.state.webhook_receiver.drain()
    await app.state.payment_gateway.aclose()
    if engine is not None:
        await engine.dispose()
    logger.info("application_shutdown", message="Application shutdown")


def create_app(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    sink: Optional[TransactionSink] = None,
) -> FastAPI:
    """Build the application.

    Provider credentials are validated here, so a missing ``FAIR_SECRET_KEY``
    raises ``ConfigurationError`` before any traffic is served.

    Args:
        settings: explicit settings; defaults to the process-wide ones.
        transport: httpx transport for provider calls (tests use MockTransport).
        sink: transaction sink overriding the one derived from settings.
    """
    settings = settings or get_settings()
    configure_logging(settings.DEBUG)

    auth_headers = AuthHeaderBuilder.from_settings(settings)

    engine = None
    if sink is None:
        sink, engine = build_transaction_sink(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        description="PIX payment gateway adapter for FairPayments",
    )
    app.state.settings = settings
    app.state.auth_headers = auth_headers
    app.state.payload_mapper = PayloadMapper(webhook_base_url=settings.PUBLIC_BASE_URL)
    app.state.payment_gateway = get_payment_gateway(settings, transport=transport)
    app.state.webhook_receiver = WebhookReceiver(sink)
    app.state.db_engine = engine

    # 添加中间件（注意顺序：从下往上执行）
    app.add_middleware(
        LoggingMiddleware,
        log_body=settings.LOG_REQUEST_BODY_ENABLE_BY_DEFAULT and settings.DEBUG,
        max_body_log_bytes=settings.LOG_REQUEST_BODY_MAX_BYTES,
    )
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_routes.router)
    app.include_router(payments_routes.router, prefix="/api")
    app.include_router(webhook_routes.router, prefix="/api")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().DEBUG,
        log_level="debug" if get_settings().DEBUG else "info",
    )
