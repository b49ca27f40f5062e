"""Commands handled by the payment service."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from gorder.common.decorator import MetricsClient, QueryLoggingDecorator, apply_command_decorators
from gorder.payment.domain import Order, OrderService, Processor

logger = logging.getLogger(__name__)

STATUS_WAITING_FOR_PAYMENT = "waiting_for_payment"


@dataclass
class CreatePayment:
    order: Order


@dataclass
class CreatePaymentHandler:
    """Creates a payment link and records it on the order."""

    processor: Processor
    order_service: OrderService

    def handle(self, cmd: CreatePayment) -> str:
        link = self.processor.create_payment_link(cmd.order)
        logger.info(
            "create payment link for order: %s success, payment link:%s", cmd.order.id, link
        )
        updated = Order(
            id=cmd.order.id,
            customer_id=cmd.order.customer_id,
            status=STATUS_WAITING_FOR_PAYMENT,
            payment_link=link,
            items=cmd.order.items,
        )
        self.order_service.update_order(updated)
        return link


def new_create_payment_handler(
    processor: Processor,
    order_service: OrderService,
    logger: logging.Logger | logging.LoggerAdapter,
    metrics_client: MetricsClient,
) -> QueryLoggingDecorator[CreatePayment, str]:
    """Build the decorated create-payment handler."""
    return apply_command_decorators(
        CreatePaymentHandler(processor, order_service), logger, metrics_client
    )