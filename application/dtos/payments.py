"""
PIX payment DTOs (Pydantic v2) used at application boundaries.

Caller-facing and provider-facing shapes use camelCase aliases; Python code
works with the snake_case field names.
"""
from __future__ import annotations

from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from domain.common.exceptions import ValidationError
from domain.pix.amounts import to_minor_units
from domain.pix.fields import (
    CUSTOMER_FIELDS,
    ORDER_FIELDS,
    PREBUILT_ITEMS_FIELDS,
    PRODUCT_FIELDS,
    PROVIDER_FIELDS,
    first_present,
    first_present_field,
    unconsumed_fields,
)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class LineItem(_Frozen):
    """A product normalized into the provider's item shape."""

    title: str
    unit_price_cents: int = Field(ge=0, alias="unitPrice")
    quantity: int = Field(default=1, gt=0)
    external_ref: Optional[str] = Field(default=None, alias="externalRef")


class Split(_Frozen):
    recipient_id: str = Field(alias="recipientId", min_length=1)
    percentage: float = Field(ge=0, le=100)


class OrderRequest(_Frozen):
    """Caller order with field-name variants already resolved.

    Build it with :meth:`from_payload`; the constructor expects resolved names.
    """

    identifier: Optional[str] = None
    amount_cents: Optional[int] = Field(default=None, ge=0)
    customer: Optional[dict[str, Any]] = None
    items: Optional[list[Any]] = None
    products: Optional[list[dict[str, Any]]] = None
    splits: list[Any] = Field(default_factory=list)
    metadata: Optional[dict[str, Any]] = None
    callback_url: Optional[str] = None
    # Unrecognized top-level keys (expiry, shipping ...), forwarded as-is
    provider_options: dict[str, Any] = Field(default_factory=dict)

    @field_validator("identifier", mode="before")
    @classmethod
    def _identifier_as_text(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return v
        if isinstance(v, (int, float)):
            return str(v)
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("callback_url", mode="before")
    @classmethod
    def _blank_callback_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_payload(cls, raw: Any) -> "OrderRequest":
        """Resolve a raw JSON body into an :class:`OrderRequest`.

        Raises:
            ValidationError: the body is not an object, has wrongly typed
                fields, or carries no amount-bearing source.
        """
        if not isinstance(raw, Mapping):
            raise ValidationError("order must be a JSON object")

        amount_cents = None
        if raw.get("amount") is not None:
            amount_cents = to_minor_units(raw["amount"], field="amount")

        items = first_present(raw, PREBUILT_ITEMS_FIELDS)
        if isinstance(items, list) and not items:
            # An empty pre-built list does not shadow products.
            items = None

        splits = raw.get("splits")
        candidate = {
            "identifier": raw.get("identifier"),
            "amount_cents": amount_cents,
            "customer": first_present(raw, CUSTOMER_FIELDS),
            "items": items,
            "products": first_present(raw, PRODUCT_FIELDS),
            "splits": [] if splits is None else splits,
            "metadata": raw.get("metadata"),
            "callback_url": raw.get("callbackUrl"),
            "provider_options": unconsumed_fields(raw, (*ORDER_FIELDS, *PROVIDER_FIELDS)),
        }
        try:
            order = cls.model_validate(candidate)
        except PydanticValidationError as exc:
            errors = exc.errors(include_url=False, include_context=False, include_input=False)
            first = errors[0] if errors else {}
            field = ".".join(str(loc) for loc in first.get("loc", ()))
            raise ValidationError(
                f"invalid order: {first.get('msg', 'unknown')}",
                field=_public_field(field, raw),
                details={"errors": errors},
            ) from exc

        if order.amount_cents is None and not order.items and not order.products:
            raise ValidationError(
                "order needs an amount or a non-empty products/items list",
                field="amount",
            )
        return order


def _public_field(field: str, raw: Mapping[str, Any]) -> str:
    """Map an internal field path back to the name the caller actually sent."""
    head, _, rest = field.partition(".")
    names = {
        "customer": first_present_field(raw, CUSTOMER_FIELDS) or "customer",
        "callback_url": "callbackUrl",
        "amount_cents": "amount",
    }
    public = names.get(head, head)
    return f"{public}.{rest}" if rest else public


class TransactionCreatePayload(_Frozen):
    """Provider-canonical transaction creation body."""

    currency: Literal["BRL"] = "BRL"
    payment_method: Literal["PIX"] = Field(default="PIX", alias="paymentMethod")
    amount: int = Field(ge=0)
    items: Optional[list[Any]] = None
    customer: Optional[dict[str, Any]] = None
    description: str = Field(min_length=1)
    splits: Optional[list[Split]] = None
    metadata: Optional[dict[str, Any]] = None
    postback_url: Optional[str] = Field(default=None, alias="postbackUrl")
    provider_options: dict[str, Any] = Field(default_factory=dict, exclude=True)

    def to_provider_json(self) -> dict[str, Any]:
        """Provider body; mapped keys take precedence over forwarded options."""
        body = dict(self.provider_options)
        body.update(self.model_dump(by_alias=True, exclude_none=True, mode="json"))
        return body


class TransactionResult(_Frozen):
    transaction_id: str = Field(alias="transactionId")
    qr_url: Optional[str] = Field(default=None, alias="qrUrl")
    payment_url: Optional[str] = Field(default=None, alias="paymentUrl")
    pix: Optional[Any] = None

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class WebhookEvent(_Frozen):
    """Status-change notification pushed by the provider."""

    transaction_id: str
    status: str
    data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, body: Any) -> "WebhookEvent":
        data = body.get("data") if isinstance(body, Mapping) else None
        if not isinstance(data, Mapping):
            raise ValidationError("webhook body has no data object", field="data")
        tx_id = data.get("id")
        status = data.get("status")
        if tx_id is None or isinstance(tx_id, bool) or str(tx_id) == "":
            raise ValidationError("webhook data has no id", field="data.id")
        if not isinstance(status, str) or not status:
            raise ValidationError("webhook data has no status", field="data.status")
        return cls(transaction_id=str(tx_id), status=status, data=dict(data))
