"""
Major-unit to minor-unit (cents) conversion for BRL amounts.
"""
from __future__ import annotations

from decimal import Decimal, DecimalException, InvalidOperation, ROUND_HALF_UP
from typing import Any, Mapping

from domain.common.exceptions import ValidationError
from domain.pix.fields import PRODUCT_PRICE_FIELDS, first_present

_CENTS = Decimal(100)


def to_minor_units(value: Any, *, field: str = "amount") -> int:
    """Convert a major-unit amount (e.g. 19.9) into integer cents (1990).

    Halves round up, so 0.005 becomes 1 cent. Strings are accepted as long
    as they parse as a decimal number.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field} must be a number", field=field)
    try:
        # str() first so binary floats like 19.9 are taken at face value
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field} must be a number", field=field) from exc
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number", field=field)
    if amount < 0:
        raise ValidationError(f"{field} must not be negative", field=field)
    try:
        cents = (amount * _CENTS).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    except DecimalException as exc:
        # 超出 decimal 上下文精度（如 1e30）
        raise ValidationError(f"{field} is out of range", field=field) from exc
    return int(cents)


def resolve_unit_price(product: Mapping[str, Any], *, index: int = 0) -> int:
    """Unit price in cents for a product entry (``unitPrice`` wins over ``amount``).

    A product without any price field is rejected instead of priced at zero.
    """
    field = f"products[{index}].unitPrice"
    raw = first_present(product, PRODUCT_PRICE_FIELDS)
    if raw is None:
        raise ValidationError(
            "product has no unitPrice or amount",
            field=field,
            details={"index": index},
        )
    return to_minor_units(raw, field=field)
