"""
Accepted field-name variants for caller and provider payloads.

Callers send orders in several shapes (``customer`` or ``client``,
``products`` or ``items`` ...). Every accepted name is listed here in
precedence order so resolution never probes attributes dynamically.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

# Order request
CUSTOMER_FIELDS = ("customer", "client")
PREBUILT_ITEMS_FIELDS = ("items",)
PRODUCT_FIELDS = ("products",)

# Product entries
PRODUCT_TITLE_FIELDS = ("name", "title")
PRODUCT_PRICE_FIELDS = ("unitPrice", "amount")
PRODUCT_REF_FIELDS = ("id", "externalRef")

# Order keys read by the mapper; everything else is forwarded to the provider
ORDER_FIELDS = (
    "identifier", "amount", "metadata", "splits", "callbackUrl",
    *CUSTOMER_FIELDS, *PREBUILT_ITEMS_FIELDS, *PRODUCT_FIELDS,
)

# Provider create body keys always set by the mapper; callers cannot override them
PROVIDER_FIELDS = (
    "currency", "paymentMethod", "amount", "items", "customer",
    "description", "splits", "metadata", "postbackUrl",
)

# Provider create response
PAYMENT_URL_FIELDS = ("payment_url", "paymentUrl")


def first_present(source: Mapping[str, Any], fields: Sequence[str]) -> Optional[Any]:
    """Return the value of the first field in ``fields`` that is not None."""
    for name in fields:
        value = source.get(name)
        if value is not None:
            return value
    return None


def first_present_field(source: Mapping[str, Any], fields: Sequence[str]) -> Optional[str]:
    """Like :func:`first_present` but returns the matching field name."""
    for name in fields:
        if source.get(name) is not None:
            return name
    return None


def unconsumed_fields(source: Mapping[str, Any], consumed: Sequence[str]) -> dict[str, Any]:
    """Keys of ``source`` outside ``consumed``, e.g. provider options to forward."""
    return {k: v for k, v in source.items() if k not in consumed}
