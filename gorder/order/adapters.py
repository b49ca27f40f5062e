"""In-memory order repository."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from gorder.order.domain import NotFoundError, Order

logger = logging.getLogger(__name__)


class MemoryOrderRepository:
    """Thread-safe order store kept in a list, seeded with one placeholder order."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._store: list[Order] = [
            Order(
                id="fake-ID",
                customer_id="fake-customer-id",
                status="fake-status",
                payment_link="fake-payment-link",
            )
        ]

    def create(self, order: Order) -> Order:
        """Store a copy of ``order`` under a new time-based identifier and return it."""
        with self._lock:
            created = Order(
                id=str(int(time.time())),
                customer_id=order.customer_id,
                status=order.status,
                payment_link=order.payment_link,
                items=order.items,
            )
            self._store.append(created)
            logger.info(
                "memory_order_repo_create",
                extra={"input_order": order, "store_after_create": list(self._store)},
            )
            return created

    def get(self, order_id: str, customer_id: str) -> Order:
        """Return the order with ``order_id`` belonging to ``customer_id``."""
        with self._lock:
            for order in self._store:
                if order.id == order_id and order.customer_id == customer_id:
                    logger.info(
                        "memory_order_repo_get found id=%s customerID=%s res=%r",
                        order_id,
                        customer_id,
                        order,
                    )
                    return order
        raise NotFoundError(order_id)

    def update(self, order: Order, update_fn: Callable[[Order], Order]) -> None:
        """Replace every stored order matching ``order`` with ``update_fn(order)``."""
        with self._lock:
            found = False
            for index, stored in enumerate(self._store):
                if stored.id == order.id and stored.customer_id == order.customer_id:
                    found = True
                    self._store[index] = update_fn(order)
            if not found:
                raise NotFoundError(order.id)