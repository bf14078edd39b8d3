"""
Maps a caller :class:`OrderRequest` into the FairPayments transaction body.
"""
from __future__ import annotations

from datetime import datetime, timezone
from numbers import Real
from typing import Any, Callable, Mapping, Optional

from application.dtos.payments import (
    LineItem,
    OrderRequest,
    Split,
    TransactionCreatePayload,
)
from core.logging_config import get_logger
from domain.common.exceptions import ValidationError
from domain.pix.amounts import resolve_unit_price
from domain.pix.fields import PRODUCT_REF_FIELDS, PRODUCT_TITLE_FIELDS, first_present
from domain.pix.urls import is_absolute_http_url, webhook_url_from_base


logger = get_logger(__name__)


class PayloadMapper:
    """Builds :class:`TransactionCreatePayload` objects.

    Args:
        webhook_base_url: externally reachable base used to derive a default
            ``postbackUrl`` when the caller does not send a usable one.
        clock: source of "now" for descriptions of orders without identifier.
    """

    def __init__(
        self,
        webhook_base_url: Optional[str] = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.webhook_base_url = webhook_base_url
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def build(self, order: OrderRequest) -> TransactionCreatePayload:
        items = self.resolve_items(order)
        amount = order.amount_cents
        if amount is None:
            amount = _items_total(items)
            if amount <= 0:
                raise ValidationError(
                    "items total must be greater than zero; send amount explicitly",
                    field="amount",
                )
        splits = self.resolve_splits(order.splits)
        return TransactionCreatePayload(
            amount=amount,
            items=items or None,
            customer=order.customer,
            description=self.describe(order),
            splits=splits or None,
            metadata=order.metadata,
            postback_url=self.resolve_postback_url(order.callback_url),
            provider_options=order.provider_options,
        )

    def resolve_items(self, order: OrderRequest) -> list[Any]:
        # Pre-built items are the provider's shape already; send them untouched.
        if order.items:
            return list(order.items)
        return [
            self.to_line_item(product, index).model_dump(by_alias=True, exclude_none=True)
            for index, product in enumerate(order.products or [])
        ]

    @staticmethod
    def to_line_item(product: Mapping[str, Any], index: int = 0) -> LineItem:
        title = first_present(product, PRODUCT_TITLE_FIELDS)
        ref = first_present(product, PRODUCT_REF_FIELDS)
        return LineItem(
            title=str(title) if title is not None else f"Item {index + 1}",
            unit_price_cents=resolve_unit_price(product, index=index),
            quantity=_quantity(product.get("quantity"), index),
            external_ref=str(ref) if ref is not None else None,
        )

    @staticmethod
    def resolve_splits(entries: list[Any]) -> list[Split]:
        splits: list[Split] = []
        for index, entry in enumerate(entries):
            reason = _split_rejection(entry)
            if reason:
                logger.warning("split_entry_dropped", index=index, reason=reason)
                continue
            splits.append(Split(recipient_id=str(entry["recipientId"]), percentage=float(entry["percentage"])))
        return splits

    def resolve_postback_url(self, callback_url: Optional[str]) -> Optional[str]:
        if is_absolute_http_url(callback_url):
            return callback_url
        if callback_url:
            logger.warning("callback_url_rejected", callback_url=callback_url)
        if self.webhook_base_url:
            return webhook_url_from_base(self.webhook_base_url)
        return None

    def describe(self, order: OrderRequest) -> str:
        if order.identifier:
            return f"Order {order.identifier}"
        return f"Order {int(self._clock().timestamp() * 1000)}"


def _quantity(raw: Any, index: int) -> int:
    if raw is None:
        return 1
    field = f"products[{index}].quantity"
    try:
        if isinstance(raw, str) and raw.strip().lstrip("+-").isdigit():
            quantity = int(raw)
        elif isinstance(raw, Real) and not isinstance(raw, bool) and float(raw).is_integer():
            quantity = int(raw)
        else:
            raise ValidationError("quantity must be an integer", field=field)
    except (ValueError, OverflowError) as exc:
        # int() 拒绝超长数字串, float() 拒绝超大整数
        raise ValidationError("quantity is out of range", field=field) from exc
    return quantity if quantity > 0 else 1


def _split_rejection(entry: Any) -> Optional[str]:
    if not isinstance(entry, Mapping):
        return "not an object"
    recipient = entry.get("recipientId")
    if recipient is None or str(recipient).strip() == "":
        return "missing recipientId"
    percentage = entry.get("percentage")
    if isinstance(percentage, bool) or not isinstance(percentage, Real):
        return "percentage is not a number"
    if not 0 <= percentage <= 100:
        return "percentage out of range"
    return None


def _items_total(items: list[Any]) -> int:
    total = 0
    for item in items:
        if not isinstance(item, Mapping):
            continue
        price = item.get("unitPrice")
        quantity = item.get("quantity", 1)
        if isinstance(price, int) and not isinstance(price, bool) and isinstance(quantity, int):
            total += price * max(quantity, 1)
    return total
