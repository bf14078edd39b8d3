"""
Base payment client implementing shared concerns: http, error mapping, logging.

Concrete providers subclass and implement provider-specific calls. Calls are
single round-trips: no retries and no timeout override beyond the httpx
default.
"""
from __future__ import annotations

import json
from typing import Any, Optional
from contextlib import asynccontextmanager

import httpx

from core.logging_config import get_logger
from infrastructure.external.payments.exceptions import TransportError, UpstreamError


logger = get_logger(__name__)


class BasePaymentClient:
    provider: str = "base"

    def __init__(
        self,
        base_url: str,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @asynccontextmanager
    async def client(self):
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, transport=self._transport)
        try:
            yield self._client
        finally:
            # Keep open for reuse; explicit aclose() will close.
            ...

    async def aclose(self) -> None:
        """Close underlying HTTP client if created."""
        if self._client is not None:
            try:
                await self._client.aclose()
            finally:
                self._client = None

    async def _send(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str],
        json_body: Any = None,
    ) -> httpx.Response:
        """Send one request and map failures onto the provider error taxonomy.

        Raises:
            UpstreamError: the provider answered with a non-2xx status.
            TransportError: no response was received.
        """
        try:
            async with self.client() as http:
                response = await http.request(method, path, headers=headers, json=json_body)
        except httpx.HTTPError as exc:
            self._log_failure("transport", path=path, error=str(exc) or type(exc).__name__)
            raise TransportError(str(exc) or type(exc).__name__, provider=self.provider) from exc

        if not response.is_success:
            body = self._decode_body(response)
            self._log_failure("upstream", path=path, status_code=response.status_code, body=body)
            raise UpstreamError(response.status_code, body, provider=self.provider)
        return response

    def _parse_json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise TransportError(
                f"{self.provider} returned a response that is not valid JSON",
                provider=self.provider,
                details={"status_code": response.status_code},
            ) from exc

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return response.text

    def _log(self, event: str, **kwargs) -> None:
        logger.info(
            event,
            provider=self.provider,
            **kwargs,
        )

    def _log_failure(self, kind: str, **kwargs) -> None:
        logger.error(
            "payment_provider_request_failed",
            provider=self.provider,
            kind=kind,
            **kwargs,
        )
