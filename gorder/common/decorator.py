"""Logging and metrics decorators shared by command and query handlers."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

C = TypeVar("C")
R = TypeVar("R")
C_contra = TypeVar("C_contra", contravariant=True)
R_co = TypeVar("R_co", covariant=True)


class Handler(Protocol[C_contra, R_co]):
    """Anything that handles a command or query and returns a result."""

    def handle(self, cmd: C_contra) -> R_co: ...


class MetricsClient(Protocol):
    """Sink for counters and timings."""

    def inc(self, key: str, value: int) -> None: ...


@dataclass
class TodoMetrics:
    """Metrics client that publishes nothing; it only counts the samples it drops."""

    dropped: int = 0

    def inc(self, key: str, value: int) -> None:
        """Drop the sample, keeping count of how many were dropped."""
        self.dropped += 1


def generate_action_name(cmd: Any) -> str:
    """Return the name of the command's type, used in logs and metric keys."""
    return type(cmd).__name__


@dataclass
class QueryLoggingDecorator(Generic[C, R]):
    """Logs the start and outcome of every call to the wrapped handler."""

    logger: logging.Logger | logging.LoggerAdapter
    base: Handler[C, R]

    def handle(self, cmd: C) -> R:
        fields = {"query": generate_action_name(cmd), "query_body": repr(cmd)}
        self.logger.debug("Executing query", extra=fields)
        try:
            result = self.base.handle(cmd)
        except Exception as err:
            self.logger.error("Failed to execute query: %s", err, extra=fields)
            raise
        self.logger.info("Query execute successfully", extra=fields)
        return result


@dataclass
class QueryMetricsDecorator(Generic[C, R]):
    """Records duration and success or failure of every call."""

    base: Handler[C, R]
    client: MetricsClient

    def handle(self, cmd: C) -> R:
        start = time.monotonic()
        action = generate_action_name(cmd).lower()
        succeeded = False
        try:
            result = self.base.handle(cmd)
            succeeded = True
            return result
        finally:
            elapsed = int(time.monotonic() - start)
            self.client.inc(f"querys.{action}.duration", elapsed)
            outcome = "success" if succeeded else "failure"
            self.client.inc(f"querys.{action}.{outcome}", 1)


def apply_command_decorators(
    handler: Handler[C, R],
    logger: logging.Logger | logging.LoggerAdapter,
    metrics_client: MetricsClient,
) -> QueryLoggingDecorator[C, R]:
    """Wrap a command handler with logging around metrics."""
    return QueryLoggingDecorator(logger, QueryMetricsDecorator(handler, metrics_client))


def apply_query_decorators(
    handler: Handler[C, R],
    logger: logging.Logger | logging.LoggerAdapter,
    metrics_client: MetricsClient,
) -> QueryLoggingDecorator[C, R]:
    """Wrap a query handler with logging around metrics."""
    return QueryLoggingDecorator(logger, QueryMetricsDecorator(handler, metrics_client))