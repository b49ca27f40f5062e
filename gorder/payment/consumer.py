"""Consumer of created-order events that starts payments."""

from __future__ import annotations

import json
import logging
from typing import Any

from gorder.common.broker import EVENT_ORDER_CREATED
from gorder.payment.commands import CreatePayment
from gorder.payment.domain import Order
from gorder.payment.service import Application

logger = logging.getLogger(__name__)


class Consumer:
    """Listens for created orders and creates a payment for each."""

    def __init__(self, app: Application) -> None:
        self.app = app

    def listen(self, channel: Any) -> None:
        """Declare the created-order queue and consume it until stopped."""
        declared = channel.queue_declare(queue=EVENT_ORDER_CREATED, durable=True)
        queue_name = declared.method.queue
        channel.basic_consume(
            queue=queue_name, on_message_callback=self.handle_message, auto_ack=False
        )
        channel.start_consuming()

    def handle_message(self, channel: Any, method: Any, properties: Any, body: bytes) -> None:
        """Create a payment for the order in ``body``; ack on success, nack otherwise."""
        logger.info(
            "Payment received a message from %s, msg = %s",
            getattr(method, "routing_key", EVENT_ORDER_CREATED),
            body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body,
        )
        try:
            order = Order.from_dict(json.loads(body))
        except (ValueError, TypeError, AttributeError) as err:
            logger.info("fail to unmarshal msg to order, err=%s", err)
            channel.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
            return
        try:
            self.app.commands.create_payment.handle(CreatePayment(order))
        except Exception as err:
            logger.info("fail to create payment, err=%s", err)
            channel.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
            return
        channel.basic_ack(delivery_tag=method.delivery_tag)
        logger.info("consume success")