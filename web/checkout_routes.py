"""
Checkout routes: payment intents and order history.

The cart in request bodies is whatever the browser kept in local storage
(whole product objects, one per unit). Only the ``id`` of each entry is
used; prices always come from the catalog.
"""

from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict, Field

from storefront.auth.models import TokenClaims
from storefront.core.container import Storefront
from storefront.orders.models import OrderRecord
from .auth_middleware import get_storefront, require_login


router = APIRouter(prefix="/api", tags=["checkout"])


class CartRequest(BaseModel):
    # Left untyped so the reconciler reports a malformed cart as InvalidCart
    cart: Any = None


class OrderRequest(CartRequest):
    model_config = ConfigDict(populate_by_name=True)

    payment_intent_id: Optional[str] = Field(default=None, alias="paymentIntentId")


class PaymentIntentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_secret: str = Field(alias="clientSecret")
    payment_intent_id: str = Field(alias="paymentIntentId")
    amount: int


class OrderCreatedResponse(BaseModel):
    message: str
    order: OrderRecord


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    body: CartRequest,
    claims: TokenClaims = Depends(require_login),
    storefront: Storefront = Depends(get_storefront),
) -> PaymentIntentResponse:
    intent = await run_in_threadpool(
        storefront.reconciler.create_payment_intent, claims.user_id, body.cart
    )
    return PaymentIntentResponse(
        client_secret=intent.client_secret,
        payment_intent_id=intent.id,
        amount=intent.amount,
    )


@router.post("/orders", response_model=OrderCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    body: OrderRequest,
    claims: TokenClaims = Depends(require_login),
    storefront: Storefront = Depends(get_storefront),
) -> OrderCreatedResponse:
    order = await run_in_threadpool(
        storefront.reconciler.record_order,
        claims.user_id,
        body.cart,
        body.payment_intent_id,
    )
    return OrderCreatedResponse(message="Order created successfully", order=order)


@router.get("/orders", response_model=List[OrderRecord])
async def list_orders(
    claims: TokenClaims = Depends(require_login),
    storefront: Storefront = Depends(get_storefront),
) -> List[OrderRecord]:
    # Owner is always the token subject; nothing in the request can widen it
    return storefront.reconciler.list_orders_for_user(claims.user_id)
