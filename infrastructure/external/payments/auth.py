"""
FairPayments authentication headers.

The provider uses HTTP Basic auth with the secret key as user name and a
literal ``x`` as password, plus an optional tenant header.
"""
from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Optional

from core.config import Settings
from domain.common.exceptions import ConfigurationError

COMPANY_ID_HEADER = "x-company-id"
CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class FairHeaders:
    authorization: str
    company_id: Optional[str] = None
    content_type: str = CONTENT_TYPE

    def as_dict(self) -> dict[str, str]:
        headers = {"Authorization": self.authorization, "Content-Type": self.content_type}
        if self.company_id:
            headers[COMPANY_ID_HEADER] = self.company_id
        return headers


def basic_credential(secret_key: str) -> str:
    token = base64.b64encode(f"{secret_key}:x".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class AuthHeaderBuilder:
    """Builds a fresh :class:`FairHeaders` for every outgoing provider call."""

    def __init__(self, secret_key: str, company_id: Optional[str] = None) -> None:
        if not secret_key or not secret_key.strip():
            raise ConfigurationError("FAIR_SECRET_KEY is not configured")
        self._secret_key = secret_key
        self.company_id = company_id or None

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthHeaderBuilder":
        """Validate provider credentials at startup.

        Raises:
            ConfigurationError: the secret key is missing, or the company id
                is missing while ``FAIR_REQUIRE_COMPANY_ID`` is set.
        """
        if not settings.FAIR_SECRET_KEY or not settings.FAIR_SECRET_KEY.strip():
            raise ConfigurationError("FAIR_SECRET_KEY is not configured")
        if settings.FAIR_REQUIRE_COMPANY_ID and not settings.FAIR_COMPANY_ID:
            raise ConfigurationError("FAIR_COMPANY_ID is required but not configured")
        return cls(settings.FAIR_SECRET_KEY, settings.FAIR_COMPANY_ID)

    def build(self) -> FairHeaders:
        return FairHeaders(
            authorization=basic_credential(self._secret_key),
            company_id=self.company_id,
        )

    def __repr__(self) -> str:
        return f"AuthHeaderBuilder(company_id={self.company_id!r})"
