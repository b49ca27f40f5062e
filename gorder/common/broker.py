"""Message broker events and connection setup."""

from __future__ import annotations

from collections.abc import Callable

import pika
from pika.adapters.blocking_connection import BlockingChannel

EVENT_ORDER_CREATED = "order.created"
EVENT_ORDER_PAID = "order.paid"


def amqp_url(user: str, password: str, host: str, port: str | int) -> str:
    """Build the AMQP URL for a broker."""
    return f"amqp://{user}:{password}@{host}:{port}"


def connect(
    user: str, password: str, host: str, port: str | int
) -> tuple[BlockingChannel, Callable[[], None]]:
    """Open a channel, declare the order exchanges and return it with a close function."""
    connection = pika.BlockingConnection(pika.URLParameters(amqp_url(user, password, host, port)))
    channel = connection.channel()
    channel.exchange_declare(exchange=EVENT_ORDER_CREATED, exchange_type="direct", durable=True)
    channel.exchange_declare(exchange=EVENT_ORDER_PAID, exchange_type="fanout", durable=True)
    return channel, connection.close