"""Orders, their validation and the repository that stores them."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from gorder.stock.domain import Item

PAYMENT_STATUS_PAID = "paid"


class OrderNotPaidError(ValueError):
    """The order has not been paid."""

    def __init__(self, order_id: str, status: str) -> None:
        self.order_id = order_id
        self.status = status
        super().__init__(f"order status not paid, order id = {order_id}, status = {status}")


class NotFoundError(LookupError):
    """No order with the given identifier exists for the customer."""

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"order '{order_id}' not found")


@dataclass
class Order:
    """A customer's order."""

    id: str = ""
    customer_id: str = ""
    status: str = ""
    payment_link: str = ""
    items: list[Item] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ID": self.id,
            "CustomerID": self.customer_id,
            "Status": self.status,
            "PaymentLink": self.payment_link,
            "Items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Order:
        if not isinstance(data, Mapping):
            raise TypeError(f"cannot build an order from {type(data).__name__}")
        fields = {str(key).lower(): value for key, value in data.items()}
        raw_items = fields.get("items") or []
        if not isinstance(raw_items, list):
            raise TypeError("order items must be a list")
        return cls(
            id=fields.get("id") or "",
            customer_id=fields.get("customerid") or "",
            status=fields.get("status") or "",
            payment_link=fields.get("paymentlink") or "",
            items=[Item.from_dict(item) for item in raw_items],
        )

    def is_paid(self) -> None:
        """Raise OrderNotPaidError unless the order's status is paid."""
        if self.status != PAYMENT_STATUS_PAID:
            raise OrderNotPaidError(self.id, self.status)


def new_order(
    order_id: str,
    customer_id: str,
    status: str,
    payment_link: str,
    items: Iterable[Item] | None,
) -> Order:
    """Build an order, rejecting missing identifiers, status or items."""
    if not order_id:
        raise ValueError("empty id")
    if not customer_id:
        raise ValueError("empty customerID")
    if not status:
        raise ValueError("empty status")
    if items is None:
        raise ValueError("empty items")
    return Order(
        id=order_id,
        customer_id=customer_id,
        status=status,
        payment_link=payment_link,
        items=list(items),
    )


class Repository(Protocol):
    """Storage of orders."""

    def create(self, order: Order) -> Order: ...

    def get(self, order_id: str, customer_id: str) -> Order: ...

    def update(self, order: Order, update_fn: Callable[[Order], Order]) -> None: ...