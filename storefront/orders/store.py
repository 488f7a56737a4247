"""
Order storage.

The repository assigns order ids; ids start at 1 and only grow. Orders are
only ever read back filtered by owner.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional

from .models import LineItem, OrderRecord


class OrderRepository(ABC):
    @abstractmethod
    def insert(
        self,
        user_id: int,
        line_items: List[LineItem],
        total: Decimal,
        payment_intent_id: Optional[str] = None,
    ) -> OrderRecord:
        """Assign the next order id and append the order."""

    @abstractmethod
    def list_for_user(self, user_id: int) -> List[OrderRecord]:
        """Orders owned by ``user_id`` in insertion order."""

    @abstractmethod
    def find_by_payment_intent(self, payment_intent_id: str) -> Optional[OrderRecord]: ...


class InMemoryOrderRepository(OrderRepository):
    def __init__(self) -> None:
        self._orders: List[OrderRecord] = []
        self._lock = threading.Lock()

    def insert(
        self,
        user_id: int,
        line_items: List[LineItem],
        total: Decimal,
        payment_intent_id: Optional[str] = None,
    ) -> OrderRecord:
        with self._lock:
            order = OrderRecord(
                order_id=len(self._orders) + 1,
                user_id=user_id,
                line_items=line_items,
                total=total,
                payment_intent_id=payment_intent_id,
            )
            self._orders.append(order)
        return order

    def list_for_user(self, user_id: int) -> List[OrderRecord]:
        with self._lock:
            return [o for o in self._orders if o.user_id == user_id]

    def find_by_payment_intent(self, payment_intent_id: str) -> Optional[OrderRecord]:
        with self._lock:
            return next((o for o in self._orders if o.payment_intent_id == payment_intent_id), None)
