"""Consumer of payment events that marks orders as paid."""

from __future__ import annotations

import json
import logging
from typing import Any

from gorder.common.broker import EVENT_ORDER_PAID
from gorder.order.commands import UpdateOrder
from gorder.order.domain import Order
from gorder.order.service import Application

logger = logging.getLogger(__name__)


def _require_paid(order: Order) -> Order:
    order.is_paid()
    return order


class Consumer:
    """Listens for paid orders and records their new status."""

    def __init__(self, app: Application) -> None:
        self.app = app

    def listen(self, channel: Any) -> None:
        """Declare and bind the paid-order queue, then consume it until stopped."""
        declared = channel.queue_declare(queue=EVENT_ORDER_PAID, durable=True, auto_delete=True)
        queue_name = declared.method.queue
        channel.queue_bind(queue=queue_name, exchange=EVENT_ORDER_PAID, routing_key="")
        channel.basic_consume(
            queue=queue_name, on_message_callback=self.handle_message, auto_ack=False
        )
        channel.start_consuming()

    def handle_message(self, channel: Any, method: Any, properties: Any, body: bytes) -> None:
        """Update the order in ``body``; ack on success, nack if it cannot be read."""
        try:
            order = Order.from_dict(json.loads(body))
        except (ValueError, TypeError, AttributeError) as err:
            logger.info("error unmarshal msg.body into order, err = %s", err)
            channel.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
            return
        try:
            self.app.commands.update_order.handle(UpdateOrder(order, _require_paid))
        except Exception as err:
            logger.info("error updating order, orderID = %s, err = %s", order.id, err)
            return
        channel.basic_ack(delivery_tag=method.delivery_tag)
        logger.info("order consume paid event success!")