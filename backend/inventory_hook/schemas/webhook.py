import math
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from inventory_hook.core.exceptions import InvalidPayloadError


class WebhookEvent(BaseModel):
    id: str = Field(..., description="Provider event ID")
    type: str = Field(..., description="Event type, e.g. checkout.session.completed")
    data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def parse_body(cls, raw: bytes) -> "WebhookEvent":
        try:
            return cls.model_validate_json(raw)
        except ValidationError as ve:
            raise InvalidPayloadError(f"Invalid payload: {ve.error_count()} error(s)") from ve

    @property
    def object(self) -> dict[str, Any]:
        return self.data.get("object") or {}


class CheckoutSession(BaseModel):
    id: str
    payment_status: str | None = None

    @property
    def is_unpaid(self) -> bool:
        return bool(self.payment_status) and self.payment_status != "paid"


class LineItem(BaseModel):
    id: str | None = None
    description: str | None = None
    quantity: Any = None
    price_id: str | None = None

    @property
    def product_name(self) -> str:
        return (self.description or "").strip()

    def summary(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "quantity": self.quantity,
            "priceId": self.price_id,
        }


def coerce_quantity(value: Any) -> int | float | None:
    """Return a finite number for a line item quantity, or None if there isn't one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        qty = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(qty):
        return None
    return int(qty) if qty.is_integer() else qty
