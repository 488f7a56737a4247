"""Checkout: trusted pricing, payment intents and order records."""

from .models import LineItem, OrderRecord, PricedCart
from .reconciler import OrderReconciler, to_minor_units
from .store import InMemoryOrderRepository, OrderRepository

__all__ = [
    "LineItem",
    "OrderRecord",
    "PricedCart",
    "OrderReconciler",
    "to_minor_units",
    "InMemoryOrderRepository",
    "OrderRepository",
]
