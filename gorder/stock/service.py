"""Wiring of the stock service application."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from gorder.common.decorator import QueryLoggingDecorator, TodoMetrics
from gorder.stock.adapters import MemoryStockRepository
from gorder.stock.domain import Item
from gorder.stock.queries import (
    CheckIfItemsInStock,
    GetItems,
    new_check_if_items_in_stock_handler,
    new_get_items_handler,
)


@dataclass
class Queries:
    check_if_items_in_stock: QueryLoggingDecorator[CheckIfItemsInStock, list[Item]]
    get_items: QueryLoggingDecorator[GetItems, list[Item]]


@dataclass
class Application:
    queries: Queries


def new_application() -> Application:
    """Build the stock application over the in-memory repository."""
    stock_repo = MemoryStockRepository()
    logger = logging.getLogger("gorder.stock")
    metrics_client = TodoMetrics()
    return Application(
        queries=Queries(
            check_if_items_in_stock=new_check_if_items_in_stock_handler(
                stock_repo, logger, metrics_client
            ),
            get_items=new_get_items_handler(stock_repo, logger, metrics_client),
        )
    )