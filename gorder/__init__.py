"""Order, stock and payment service components connected by RabbitMQ events."""

__version__ = "0.1.0"