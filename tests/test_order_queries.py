import logging

import pytest

from gorder.common.decorator import TodoMetrics
from gorder.order.adapters import MemoryOrderRepository
from gorder.order.domain import NotFoundError
from gorder.order.queries import GetCustomerOrder, new_get_customer_order_handler

LOG = logging.getLogger("test.order.queries")


class RecordingMetrics:
    def __init__(self):
        self.keys = []

    def inc(self, key, value):
        self.keys.append(key)


def test_get_customer_order_returns_stored_order():
    handler = new_get_customer_order_handler(MemoryOrderRepository(), LOG, TodoMetrics())
    order = handler.handle(GetCustomerOrder(customer_id="fake-customer-id", order_id="fake-ID"))
    assert order.id == "fake-ID"
    assert order.payment_link == "fake-payment-link"


def test_get_customer_order_missing_raises_and_counts_failure():
    metrics = RecordingMetrics()
    handler = new_get_customer_order_handler(MemoryOrderRepository(), LOG, metrics)
    with pytest.raises(NotFoundError, match="order 'zzz' not found"):
        handler.handle(GetCustomerOrder(customer_id="fake-customer-id", order_id="zzz"))
    assert "querys.getcustomerorder.failure" in metrics.keys


def test_handler_requires_repo():
    with pytest.raises(ValueError):
        new_get_customer_order_handler(None, LOG, TodoMetrics())