"""Payment provider integration."""

from .gateway import PaymentGateway, PaymentIntent, StripeGateway

__all__ = ["PaymentGateway", "PaymentIntent", "StripeGateway"]
