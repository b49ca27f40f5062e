"""Wiring of the order service application."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from gorder.common.decorator import QueryLoggingDecorator, TodoMetrics
from gorder.order.adapters import MemoryOrderRepository
from gorder.order.commands import (
    CreateOrder,
    CreateOrderResult,
    StockService,
    UpdateOrder,
    new_create_order_handler,
    new_update_order_handler,
)
from gorder.order.domain import Order
from gorder.order.queries import GetCustomerOrder, new_get_customer_order_handler


@dataclass
class Commands:
    create_order: QueryLoggingDecorator[CreateOrder, CreateOrderResult]
    update_order: QueryLoggingDecorator[UpdateOrder, None]


@dataclass
class Queries:
    get_customer_order: QueryLoggingDecorator[GetCustomerOrder, Order]


@dataclass
class Application:
    commands: Commands
    queries: Queries


def new_application(stock_service: StockService, channel: Any) -> Application:
    """Build the order application over the in-memory repository."""
    order_repo = MemoryOrderRepository()
    logger = logging.getLogger("gorder.order")
    metrics_client = TodoMetrics()
    return Application(
        commands=Commands(
            create_order=new_create_order_handler(
                order_repo, stock_service, channel, logger, metrics_client
            ),
            update_order=new_update_order_handler(order_repo, logger, metrics_client),
        ),
        queries=Queries(
            get_customer_order=new_get_customer_order_handler(order_repo, logger, metrics_client),
        ),
    )