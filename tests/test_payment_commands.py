import logging

import pytest

from gorder.payment.commands import (
    CreatePayment,
    CreatePaymentHandler,
    new_create_payment_handler,
)
from gorder.payment.domain import Order
from gorder.stock.domain import Item


class FakeProcessor:
    def __init__(self, link="link-1", error=None):
        self.link = link
        self.error = error
        self.seen = []

    def create_payment_link(self, order):
        self.seen.append(order)
        if self.error:
            raise self.error
        return self.link


class FakeOrderService:
    def __init__(self, error=None):
        self.updates = []
        self.error = error

    def update_order(self, order):
        self.updates.append(order)
        if self.error:
            raise self.error


class RecordingMetrics:
    def __init__(self):
        self.keys = []

    def inc(self, key, value):
        self.keys.append(key)


def _order():
    return Order(id="o-1", customer_id="c-1", status="created", items=[Item(id="item1")])


def test_handle_updates_order_with_link():
    processor = FakeProcessor()
    orders = FakeOrderService()
    link = CreatePaymentHandler(processor, orders).handle(CreatePayment(_order()))
    assert link == "link-1"
    [updated] = orders.updates
    assert updated.status == "waiting_for_payment"
    assert updated.payment_link == "link-1"
    assert updated.id == "o-1"
    assert updated.customer_id == "c-1"
    assert updated.items == [Item(id="item1")]


def test_processor_failure_skips_update():
    orders = FakeOrderService()
    handler = CreatePaymentHandler(FakeProcessor(error=RuntimeError("down")), orders)
    with pytest.raises(RuntimeError, match="down"):
        handler.handle(CreatePayment(_order()))
    assert orders.updates == []


def test_order_service_failure_propagates():
    handler = CreatePaymentHandler(FakeProcessor(), FakeOrderService(error=RuntimeError("boom")))
    with pytest.raises(RuntimeError, match="boom"):
        handler.handle(CreatePayment(_order()))


def test_decorated_handler_records_success():
    metrics = RecordingMetrics()
    handler = new_create_payment_handler(
        FakeProcessor(), FakeOrderService(), logging.getLogger("test"), metrics
    )
    assert handler.handle(CreatePayment(_order())) == "link-1"
    assert "querys.createpayment.success" in metrics.keys


def test_decorated_handler_records_failure():
    metrics = RecordingMetrics()
    handler = new_create_payment_handler(
        FakeProcessor(error=ValueError("bad")),
        FakeOrderService(),
        logging.getLogger("test"),
        metrics,
    )
    with pytest.raises(ValueError):
        handler.handle(CreatePayment(_order()))
    assert any(key.endswith(".failure") for key in metrics.keys)