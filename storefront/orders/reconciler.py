"""
Pricing and order reconciliation.

Checkout is two-phase:

    cart --[price from catalog]--> intent created --[client confirms with gateway]--> order recorded

The client's cart only tells us *which* products were picked; every price,
name and total is recomputed from the trusted catalog. Client-supplied
prices are ignored.

When ``require_confirmed_payment`` is on, an order is only recorded against
a payment intent the gateway reports as succeeded for exactly the
recomputed amount, for this caller, and not already used by another order.
With it off, recording trusts the client's word that payment went through
(the legacy checkout behavior, a known gap).
"""

from __future__ import annotations

import threading
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List, Optional, Sequence

from .models import LineItem, OrderRecord, PricedCart
from .store import OrderRepository
from ..catalog.store import CatalogService
from ..payments.gateway import PaymentGateway, PaymentIntent
from ..utils.exceptions import InvalidCartError, UnknownProductError, ValidationError
from ..utils.logger import get_logger

logger = get_logger(__name__)


def to_minor_units(total: Decimal) -> int:
    """Convert a currency amount to cents, rounding half up."""
    cents = (Decimal(str(total)) * Decimal("100")).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(cents)


def _cart_product_ids(cart: Any) -> List[int]:
    if not isinstance(cart, list) or not cart:
        raise InvalidCartError("Cart is empty or invalid.")
    ids: List[int] = []
    for line in cart:
        if not isinstance(line, dict):
            raise InvalidCartError("Cart is empty or invalid.")
        product_id = line.get("id")
        if isinstance(product_id, bool) or not isinstance(product_id, int):
            raise InvalidCartError("Every cart item needs an integer product id.")
        ids.append(product_id)
    return ids


class OrderReconciler:
    def __init__(
        self,
        catalog: CatalogService,
        orders: OrderRepository,
        gateway: PaymentGateway,
        currency: str = "usd",
        require_confirmed_payment: bool = True,
    ):
        self.catalog = catalog
        self.orders = orders
        self.gateway = gateway
        self.currency = currency
        self.require_confirmed_payment = require_confirmed_payment
        self._record_lock = threading.Lock()

    def price_cart(self, cart: Sequence[Any]) -> PricedCart:
        """Rebuild the cart from catalog data. Fails as a whole on any unknown id."""
        line_items: List[LineItem] = []
        for product_id in _cart_product_ids(cart):
            product = self.catalog.find(product_id)
            if product is None:
                raise UnknownProductError(product_id)
            line_items.append(
                LineItem(product_id=product.id, name=product.name, price=product.price)
            )
        total = sum((item.price for item in line_items), Decimal("0"))
        return PricedCart(line_items=line_items, total=total)

    def create_payment_intent(self, caller_id: int, cart: Sequence[Any]) -> PaymentIntent:
        priced = self.price_cart(cart)
        amount = to_minor_units(priced.total)
        intent = self.gateway.create_intent(
            amount=amount,
            currency=self.currency,
            metadata={"user_id": str(caller_id)},
        )
        logger.info(
            "Payment intent created",
            user_id=caller_id,
            intent_id=intent.id,
            amount=amount,
            currency=self.currency,
        )
        return intent

    def record_order(
        self,
        caller_id: int,
        cart: Sequence[Any],
        payment_intent_id: Optional[str] = None,
    ) -> OrderRecord:
        priced = self.price_cart(cart)

        if not self.require_confirmed_payment:
            order = self.orders.insert(caller_id, priced.line_items, priced.total, payment_intent_id)
            logger.info("Order recorded", order_id=order.order_id, user_id=caller_id, verified=False)
            return order

        if not payment_intent_id:
            raise ValidationError("paymentIntentId is required to record an order.")
        intent = self.gateway.retrieve_intent(payment_intent_id)
        self._check_intent(intent, caller_id, to_minor_units(priced.total))

        with self._record_lock:
            if self.orders.find_by_payment_intent(intent.id) is not None:
                raise ValidationError("An order was already recorded for this payment.")
            order = self.orders.insert(caller_id, priced.line_items, priced.total, intent.id)

        logger.info("Order recorded", order_id=order.order_id, user_id=caller_id, intent_id=intent.id)
        return order

    def _check_intent(self, intent: PaymentIntent, caller_id: int, amount: int) -> None:
        if not intent.succeeded:
            logger.warning("Order rejected: payment not completed", intent_id=intent.id, status=intent.status)
            raise ValidationError("Payment has not been completed.")
        if intent.metadata.get("user_id") != str(caller_id):
            logger.warning("Order rejected: payment owner mismatch", intent_id=intent.id, user_id=caller_id)
            raise ValidationError("Payment does not belong to this account.")
        if intent.amount != amount:
            logger.warning(
                "Order rejected: amount mismatch",
                intent_id=intent.id,
                paid=intent.amount,
                expected=amount,
            )
            raise ValidationError("Paid amount does not match the cart total.")

    def list_orders_for_user(self, caller_id: int) -> List[OrderRecord]:
        """Caller's orders, newest first."""
        return list(reversed(self.orders.list_for_user(caller_id)))
