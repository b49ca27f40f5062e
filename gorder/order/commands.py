"""Commands handled by the order service."""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

import pika

from gorder.common.broker import EVENT_ORDER_CREATED
from gorder.common.decorator import MetricsClient, QueryLoggingDecorator, apply_command_decorators
from gorder.order.domain import Order, Repository
from gorder.stock.domain import Item, ItemWithQuantity

logger = logging.getLogger(__name__)

_PERSISTENT_DELIVERY = 2


class StockService(Protocol):
    """Access to the stock service."""

    def check_if_items_in_stock(self, items: list[ItemWithQuantity]) -> list[Item]: ...

    def get_items(self, item_ids: list[str]) -> list[Item]: ...


@dataclass
class CreateOrder:
    customer_id: str
    items: list[ItemWithQuantity] = field(default_factory=list)


@dataclass
class CreateOrderResult:
    order_id: str


@dataclass
class UpdateOrder:
    order: Order
    update_fn: Callable[[Order], Order] | None = None


def pack_items(items: Iterable[ItemWithQuantity]) -> list[ItemWithQuantity]:
    """Merge entries for the same item, summing their quantities."""
    merged: dict[str, int] = {}
    for item in items:
        merged[item.id] = merged.get(item.id, 0) + item.quantity
    return [ItemWithQuantity(id=item_id, quantity=quantity) for item_id, quantity in merged.items()]


@dataclass
class CreateOrderHandler:
    """Validates items against stock, stores the order and announces it."""

    order_repo: Repository
    stock_service: StockService
    channel: Any

    def handle(self, cmd: CreateOrder) -> CreateOrderResult:
        valid_items = self._validate(cmd.items)
        order = self.order_repo.create(Order(customer_id=cmd.customer_id, items=valid_items))
        declared = self.channel.queue_declare(queue=EVENT_ORDER_CREATED, durable=True)
        self.channel.basic_publish(
            exchange="",
            routing_key=declared.method.queue,
            body=json.dumps(order.to_dict()).encode("utf-8"),
            properties=pika.BasicProperties(
                content_type="application/json", delivery_mode=_PERSISTENT_DELIVERY
            ),
        )
        return CreateOrderResult(order_id=order.id)

    def _validate(self, items: list[ItemWithQuantity]) -> list[Item]:
        if not items:
            raise ValueError("must have at least one item")
        return self.stock_service.check_if_items_in_stock(pack_items(items))


@dataclass
class UpdateOrderHandler:
    """Applies an update function to a stored order."""

    order_repo: Repository

    def handle(self, cmd: UpdateOrder) -> None:
        update_fn = cmd.update_fn
        if update_fn is None:
            logger.warning("update order handler got no update function, order=%r", cmd.order)
            # Without an update function the given order replaces the stored one as is.
            update_fn = copy.copy
        self.order_repo.update(cmd.order, update_fn)


def new_create_order_handler(
    order_repo: Repository,
    stock_service: StockService,
    channel: Any,
    logger: logging.Logger | logging.LoggerAdapter,
    metrics_client: MetricsClient,
) -> QueryLoggingDecorator[CreateOrder, CreateOrderResult]:
    """Build the decorated create-order handler."""
    if order_repo is None:
        raise ValueError("order_repo must not be None")
    if stock_service is None:
        raise ValueError("stock_service must not be None")
    if channel is None:
        raise ValueError("channel must not be None")
    return apply_command_decorators(
        CreateOrderHandler(order_repo, stock_service, channel), logger, metrics_client
    )


def new_update_order_handler(
    order_repo: Repository,
    logger: logging.Logger | logging.LoggerAdapter,
    metrics_client: MetricsClient,
) -> QueryLoggingDecorator[UpdateOrder, None]:
    """Build the decorated update-order handler."""
    if order_repo is None:
        raise ValueError("order_repo must not be None")
    return apply_command_decorators(UpdateOrderHandler(order_repo), logger, metrics_client)