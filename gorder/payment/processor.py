"""Payment processors."""

from __future__ import annotations

from dataclasses import dataclass, field

from gorder.payment.domain import Order

INMEM_PAYMENT_LINK = "inmem-payment-link"


@dataclass
class InmemProcessor:
    """Stub processor that hands out a fixed payment link and remembers the orders it linked."""

    link: str = INMEM_PAYMENT_LINK
    issued: dict[str, str] = field(default_factory=dict)

    def create_payment_link(self, order: Order) -> str:
        """Return the fixed link, recording it against the order's id."""
        self.issued[order.id] = self.link
        return self.link