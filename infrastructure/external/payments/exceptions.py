"""
Exceptions for payment providers mapped to unified BusinessException variants.
"""
from __future__ import annotations

from typing import Any, Optional
from domain.common.exceptions import BusinessException
from shared.codes.payment_codes import PaymentCode


class UpstreamError(BusinessException):
    """The provider answered with a non-2xx status.

    ``body`` is the provider's response body, parsed as JSON when possible and
    the raw text otherwise.
    """

    def __init__(self, status_code: int, body: Any, *, provider: str, details: Optional[dict] = None):
        self.status_code = status_code
        self.body = body
        full_details = {"provider": provider, "status_code": status_code}
        if details:
            full_details.update(details)
        super().__init__(
            code=PaymentCode.PROVIDER_ERROR,
            message=f"{provider} responded with HTTP {status_code}",
            error_type="UpstreamError",
            details=full_details,
        )


class TransportError(BusinessException):
    """The provider could not be reached (connect failure, timeout, broken stream)."""

    def __init__(self, message: str, *, provider: str, details: Optional[dict] = None):
        full_details = {"provider": provider}
        if details:
            full_details.update(details)
        super().__init__(
            code=PaymentCode.TRANSPORT_ERROR,
            message=message,
            error_type="TransportError",
            details=full_details,
        )
