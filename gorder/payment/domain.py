"""Payment-side view of orders and the services payments depend on."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from gorder.stock.domain import Item


@dataclass
class Order:
    """An order as seen by the payment service."""

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
        if not all(isinstance(item, Mapping) for item in raw_items):
            raise TypeError("every order item must be an object")
        return cls(
            id=fields.get("id") or "",
            customer_id=fields.get("customerid") or "",
            status=fields.get("status") or "",
            payment_link=fields.get("paymentlink") or "",
            items=[Item.from_dict(item) for item in raw_items],
        )


class Processor(Protocol):
    """A payment provider that can create a payment link for an order."""

    def create_payment_link(self, order: Order) -> str: ...


class OrderService(Protocol):
    """Access to the order service."""

    def update_order(self, order: Order) -> None: ...