import logging

import pytest

from gorder.common.decorator import TodoMetrics
from gorder.stock.adapters import MemoryStockRepository
from gorder.stock.domain import ItemWithQuantity, NotFoundError
from gorder.stock.queries import (
    CheckIfItemsInStock,
    CheckIfItemsInStockHandler,
    GetItems,
    GetItemsHandler,
    new_check_if_items_in_stock_handler,
    new_get_items_handler,
)

LOGGER = logging.getLogger("tests.stock.queries")


def test_check_assigns_price_ids():
    handler = CheckIfItemsInStockHandler(MemoryStockRepository())
    query = CheckIfItemsInStock(
        [ItemWithQuantity("1", 2), ItemWithQuantity("2", 3), ItemWithQuantity("zzz", 4)]
    )
    result = handler.handle(query)
    assert [item.id for item in result] == ["1", "2", "zzz"]
    assert [item.quantity for item in result] == [2, 3, 4]
    assert result[0].price_id == "price_1QJtUG03vhJsKPuLo6rBxH6M"
    assert result[1].price_id == "price_1QJtxM03vhJsKPuLKy9IaeeK"
    assert result[2].price_id == result[0].price_id


def test_check_empty_query():
    assert CheckIfItemsInStockHandler(MemoryStockRepository()).handle(CheckIfItemsInStock()) == []


def test_get_items_handler_reads_repository():
    items = GetItemsHandler(MemoryStockRepository()).handle(GetItems(["item3"]))
    assert [item.name for item in items] == ["stub item 3"]


def test_decorated_handlers_work_end_to_end():
    check = new_check_if_items_in_stock_handler(MemoryStockRepository(), LOGGER, TodoMetrics())
    get = new_get_items_handler(MemoryStockRepository(), LOGGER, TodoMetrics())
    assert [item.id for item in check.handle(CheckIfItemsInStock([ItemWithQuantity("9", 1)]))] == ["9"]
    assert [item.id for item in get.handle(GetItems(["item1", "item2"]))] == ["item1", "item2"]


def test_decorated_get_items_propagates_not_found():
    get = new_get_items_handler(MemoryStockRepository(), LOGGER, TodoMetrics())
    with pytest.raises(NotFoundError) as info:
        get.handle(GetItems(["missing"]))
    assert info.value.missing == ["missing"]


@pytest.mark.parametrize("factory", [new_check_if_items_in_stock_handler, new_get_items_handler])
def test_factories_reject_missing_repository(factory):
    with pytest.raises(ValueError, match="stock_repo"):
        factory(None, LOGGER, TodoMetrics())