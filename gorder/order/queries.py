"""Queries served by the order service."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from gorder.common.decorator import MetricsClient, QueryLoggingDecorator, apply_query_decorators
from gorder.order.domain import Order, Repository


@dataclass
class GetCustomerOrder:
    customer_id: str
    order_id: str


@dataclass
class GetCustomerOrderHandler:
    """Looks up a customer's order."""

    order_repo: Repository

    def handle(self, query: GetCustomerOrder) -> Order:
        return self.order_repo.get(query.order_id, query.customer_id)


def new_get_customer_order_handler(
    order_repo: Repository,
    logger: logging.Logger | logging.LoggerAdapter,
    metrics_client: MetricsClient,
) -> QueryLoggingDecorator[GetCustomerOrder, Order]:
    """Build the decorated order lookup handler."""
    if order_repo is None:
        raise ValueError("order_repo must not be None")
    return apply_query_decorators(GetCustomerOrderHandler(order_repo), logger, metrics_client)