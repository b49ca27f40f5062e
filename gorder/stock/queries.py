"""Queries served by the stock service."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gorder.common.decorator import MetricsClient, QueryLoggingDecorator, apply_query_decorators
from gorder.stock.domain import Item, ItemWithQuantity, Repository

_PRICE_IDS = {
    "1": "price_1QJtUG03vhJsKPuLo6rBxH6M",
    "2": "price_1QJtxM03vhJsKPuLKy9IaeeK",
}


@dataclass
class CheckIfItemsInStock:
    items: list[ItemWithQuantity] = field(default_factory=list)


@dataclass
class GetItems:
    item_ids: list[str] = field(default_factory=list)


@dataclass
class CheckIfItemsInStockHandler:
    """Resolves requested items to stock items with their price identifiers."""

    stock_repo: Repository

    def handle(self, query: CheckIfItemsInStock) -> list[Item]:
        return [
            Item(
                id=wanted.id,
                quantity=wanted.quantity,
                price_id=_PRICE_IDS.get(wanted.id, _PRICE_IDS["1"]),
            )
            for wanted in query.items
        ]


@dataclass
class GetItemsHandler:
    """Looks items up in the stock repository."""

    stock_repo: Repository

    def handle(self, query: GetItems) -> list[Item]:
        return self.stock_repo.get_items(query.item_ids)


def _require_repo(stock_repo: Repository | None) -> Repository:
    if stock_repo is None:
        raise ValueError("stock_repo must not be None")
    return stock_repo


def new_check_if_items_in_stock_handler(
    stock_repo: Repository,
    logger: logging.Logger | logging.LoggerAdapter,
    metrics_client: MetricsClient,
) -> QueryLoggingDecorator[CheckIfItemsInStock, list[Item]]:
    """Build the decorated stock-check handler."""
    return apply_query_decorators(
        CheckIfItemsInStockHandler(_require_repo(stock_repo)), logger, metrics_client
    )


def new_get_items_handler(
    stock_repo: Repository,
    logger: logging.Logger | logging.LoggerAdapter,
    metrics_client: MetricsClient,
) -> QueryLoggingDecorator[GetItems, list[Item]]:
    """Build the decorated item lookup handler."""
    return apply_query_decorators(GetItemsHandler(_require_repo(stock_repo)), logger, metrics_client)