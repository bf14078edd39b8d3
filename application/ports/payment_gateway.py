"""
Payment gateway port (application/ports) exposing a replaceable protocol.

Application depends on this Protocol; infrastructure implements adapters.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from application.dtos.payments import TransactionCreatePayload, TransactionResult


@runtime_checkable
class AuthHeaders(Protocol):
    def as_dict(self) -> dict[str, str]: ...


@runtime_checkable
class PixGateway(Protocol):
    """Gateway protocol for the PIX provider.

    Implementations should be async and side-effect free beyond IO.
    """

    provider: str

    async def create_transaction(
        self, payload: TransactionCreatePayload, headers: AuthHeaders
    ) -> TransactionResult: ...

    async def get_transaction(self, transaction_id: str, headers: AuthHeaders) -> Any: ...

    async def aclose(self) -> None: ...
