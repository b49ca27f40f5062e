import json
import logging
from types import SimpleNamespace

import pytest

from gorder.common.decorator import TodoMetrics
from gorder.order.adapters import MemoryOrderRepository
from gorder.order.commands import (
    CreateOrder,
    UpdateOrder,
    new_create_order_handler,
    new_update_order_handler,
    pack_items,
)
from gorder.order.domain import NotFoundError, Order
from gorder.stock.domain import Item, ItemWithQuantity

LOG = logging.getLogger("test.order.commands")


class FakeChannel:
    def __init__(self):
        self.declared = []
        self.published = []

    def queue_declare(self, queue, **kwargs):
        self.declared.append((queue, kwargs))
        return SimpleNamespace(method=SimpleNamespace(queue=queue))

    def basic_publish(self, exchange, routing_key, body, properties=None):
        self.published.append((exchange, routing_key, body, properties))


class FakeStock:
    def __init__(self):
        self.requests = []

    def check_if_items_in_stock(self, items):
        self.requests.append(items)
        return [Item(id=i.id, quantity=i.quantity, price_id=f"price-{i.id}") for i in items]

    def get_items(self, item_ids):
        return [Item(id=i) for i in item_ids]


class RecordingMetrics:
    def __init__(self):
        self.keys = []

    def inc(self, key, value):
        self.keys.append(key)


def test_pack_items_merges_duplicates():
    items = [
        ItemWithQuantity("a", 1),
        ItemWithQuantity("b", 2),
        ItemWithQuantity("a", 3),
    ]
    packed = pack_items(items)
    ids = [i.id for i in packed]
    assert sorted(ids) == ["a", "b"]
    assert sum(i.quantity for i in packed) == sum(i.quantity for i in items)
    assert {i.id: i.quantity for i in packed}["b"] == 2


def test_create_order_stores_and_publishes():
    repo = MemoryOrderRepository()
    stock = FakeStock()
    channel = FakeChannel()
    handler = new_create_order_handler(repo, stock, channel, LOG, TodoMetrics())
    result = handler.handle(
        CreateOrder("c1", [ItemWithQuantity("item1", 1), ItemWithQuantity("item1", 2)])
    )

    assert len(stock.requests[0]) == 1
    stored = repo.get(result.order_id, "c1")
    assert stored.items == [Item(id="item1", quantity=3, price_id="price-item1")]

    assert channel.declared[0][0] == "order.created"
    assert channel.declared[0][1]["durable"] is True
    exchange, routing_key, body, properties = channel.published[0]
    assert (exchange, routing_key) == ("", "order.created")
    assert Order.from_dict(json.loads(body)) == stored
    assert properties.content_type == "application/json"
    assert properties.delivery_mode == 2


def test_create_order_requires_items():
    channel = FakeChannel()
    handler = new_create_order_handler(
        MemoryOrderRepository(), FakeStock(), channel, LOG, TodoMetrics()
    )
    with pytest.raises(ValueError, match="must have at least one item"):
        handler.handle(CreateOrder("c1", []))
    assert channel.published == []


def test_create_order_metrics_record_outcome():
    metrics = RecordingMetrics()
    handler = new_create_order_handler(
        MemoryOrderRepository(), FakeStock(), FakeChannel(), LOG, metrics
    )
    handler.handle(CreateOrder("c1", [ItemWithQuantity("item1", 1)]))
    with pytest.raises(ValueError):
        handler.handle(CreateOrder("c1", []))
    assert "querys.createorder.success" in metrics.keys
    assert "querys.createorder.failure" in metrics.keys


@pytest.mark.parametrize("missing", ["repo", "stock", "channel"])
def test_create_handler_requires_dependencies(missing):
    args = {"repo": MemoryOrderRepository(), "stock": FakeStock(), "channel": FakeChannel()}
    args[missing] = None
    with pytest.raises(ValueError):
        new_create_order_handler(args["repo"], args["stock"], args["channel"], LOG, TodoMetrics())


def test_update_order_applies_update_fn():
    repo = MemoryOrderRepository()
    handler = new_update_order_handler(repo, LOG, TodoMetrics())
    order = Order(id="fake-ID", customer_id="fake-customer-id", status="paid")
    result = handler.handle(
        UpdateOrder(order, lambda o: Order(o.id, o.customer_id, "shipped", "link"))
    )
    assert result is None
    assert repo.get("fake-ID", "fake-customer-id").status == "shipped"


def test_update_order_without_fn_stores_given_order():
    repo = MemoryOrderRepository()
    handler = new_update_order_handler(repo, LOG, TodoMetrics())
    order = Order(id="fake-ID", customer_id="fake-customer-id", status="paid")
    handler.handle(UpdateOrder(order))
    assert repo.get("fake-ID", "fake-customer-id") == order


def test_update_order_missing_raises():
    handler = new_update_order_handler(MemoryOrderRepository(), LOG, TodoMetrics())
    with pytest.raises(NotFoundError):
        handler.handle(UpdateOrder(Order(id="x", customer_id="y")))


def test_update_handler_requires_repo():
    with pytest.raises(ValueError):
        new_update_order_handler(None, LOG, TodoMetrics())