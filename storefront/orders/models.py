"""Order models"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..catalog.models import Money


class LineItem(BaseModel):
    """One unit of a product, priced from the catalog at order time."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_id: int = Field(alias="productId")
    name: str
    price: Money


class PricedCart(BaseModel):
    """Server-side view of a cart: trusted line items and their sum."""

    model_config = ConfigDict(frozen=True)

    line_items: List[LineItem]
    total: Decimal


class OrderRecord(BaseModel):
    """Recorded order. Immutable; owned by ``user_id``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    order_id: int = Field(alias="orderId")
    user_id: int = Field(alias="userId")
    line_items: List[LineItem] = Field(alias="lineItems")
    total: Money
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="createdAt"
    )
    payment_intent_id: Optional[str] = Field(default=None, alias="paymentIntentId")
