"""Wiring of the payment service application."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from gorder.common.decorator import QueryLoggingDecorator, TodoMetrics
from gorder.payment.commands import CreatePayment, new_create_payment_handler
from gorder.payment.domain import OrderService, Processor


@dataclass
class Commands:
    create_payment: QueryLoggingDecorator[CreatePayment, str]


@dataclass
class Application:
    commands: Commands


def new_application(order_service: OrderService, processor: Processor) -> Application:
    """Build the payment application over the given order service and processor."""
    logger = logging.getLogger("gorder.payment")
    metrics_client = TodoMetrics()
    return Application(
        commands=Commands(
            create_payment=new_create_payment_handler(
                processor, order_service, logger, metrics_client
            ),
        )
    )