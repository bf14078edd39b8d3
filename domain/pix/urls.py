"""
Postback URL helpers.
"""
from __future__ import annotations

from typing import Any

from pydantic import AnyHttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

WEBHOOK_PATH = "/api/webhook/pix"

_http_url = TypeAdapter(AnyHttpUrl)


def is_absolute_http_url(value: Any) -> bool:
    """True for absolute ``http``/``https`` URLs that name a host."""
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        url = _http_url.validate_python(value)
    except PydanticValidationError:
        return False
    return bool(url.host)


def webhook_url_from_base(base_url: str) -> str:
    """``https://host/`` -> ``https://host/api/webhook/pix``."""
    return base_url.rstrip("/") + WEBHOOK_PATH
