"""
Response body helpers.

Success bodies are route-specific (provider pass-through or a small result
object); errors raised locally share one shape whose only guaranteed key is
``message``.
"""
from typing import Any, Optional


def message_body(message: str, **extra: Any) -> dict[str, Any]:
    """``{"message": ...}`` plus any non-None extra keys."""
    body: dict[str, Any] = {"message": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return body


def health_body(message: str) -> dict[str, Any]:
    return {"ok": True, "message": message}


def validation_error_body(
    message: str,
    *,
    field: Optional[str] = None,
    errors: Optional[list] = None,
) -> dict[str, Any]:
    return message_body(message, type="ValidationError", field=field or None, errors=errors or None)
