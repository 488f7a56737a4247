"""
Payment gateway client.

PaymentGateway is the seam the order reconciler talks to; StripeGateway is
the production implementation. Amounts are always in the smallest currency
unit (cents). Nothing here retries: a failed call surfaces as GatewayError
with the provider's message.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional

import stripe

from ..utils.exceptions import GatewayError
from ..utils.logger import get_logger

logger = get_logger(__name__)

STATUS_SUCCEEDED = "succeeded"


@dataclass(frozen=True)
class PaymentIntent:
    id: str
    client_secret: str
    amount: int
    currency: str
    status: str
    metadata: Dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == STATUS_SUCCEEDED


class PaymentGateway(ABC):
    @abstractmethod
    def create_intent(
        self, amount: int, currency: str, metadata: Optional[Dict[str, str]] = None
    ) -> PaymentIntent: ...

    @abstractmethod
    def retrieve_intent(self, intent_id: str) -> PaymentIntent: ...


class StripeGateway(PaymentGateway):
    """Stripe PaymentIntents. The API key is passed per call, never stored globally."""

    def __init__(self, api_key: str):
        self._api_key = api_key

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _require_key(self) -> None:
        if not self._api_key:
            raise GatewayError("Payments are not configured: STRIPE_SECRET_KEY is not set.")

    def create_intent(
        self, amount: int, currency: str, metadata: Optional[Dict[str, str]] = None
    ) -> PaymentIntent:
        self._require_key()
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=currency,
                metadata=metadata or {},
                api_key=self._api_key,
            )
        except stripe.StripeError as e:
            logger.error("Stripe create_intent failed", amount=amount, error=e.user_message or str(e))
            raise GatewayError(e.user_message or str(e)) from e
        return self._to_intent(intent)

    def retrieve_intent(self, intent_id: str) -> PaymentIntent:
        self._require_key()
        try:
            intent = stripe.PaymentIntent.retrieve(intent_id, api_key=self._api_key)
        except stripe.StripeError as e:
            logger.error("Stripe retrieve_intent failed", intent_id=intent_id, error=e.user_message or str(e))
            raise GatewayError(e.user_message or str(e)) from e
        return self._to_intent(intent)

    @staticmethod
    def _to_intent(intent) -> PaymentIntent:
        metadata = getattr(intent, "metadata", None) or {}
        if hasattr(metadata, "to_dict"):
            metadata = metadata.to_dict()
        return PaymentIntent(
            id=intent.id,
            client_secret=intent.client_secret or "",
            amount=int(intent.amount),
            currency=intent.currency,
            status=intent.status,
            metadata={str(k): str(v) for k, v in dict(metadata).items()},
        )
