"""PIX order domain exports."""
from .amounts import to_minor_units, resolve_unit_price
from .fields import first_present
from .urls import is_absolute_http_url, webhook_url_from_base

__all__ = [
    "to_minor_units",
    "resolve_unit_price",
    "first_present",
    "is_absolute_http_url",
    "webhook_url_from_base",
]
