"""Service registration and discovery against a pluggable registry."""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

_HEARTBEAT_INTERVAL = 1.0


class Registry(Protocol):
    """A service registry that tracks live instances of services."""

    def register(self, instance_id: str, service_name: str, host_port: str) -> None: ...

    def deregister(self, instance_id: str, service_name: str) -> None: ...

    def discover(self, service_name: str) -> list[str]: ...

    def health_check(self, instance_id: str, service_name: str) -> None: ...


def generate_instance_id(service_name: str) -> str:
    """Return a random instance identifier for ``service_name``."""
    return f"{service_name}-{random.getrandbits(63)}"


def register_service(
    registry: Registry, service_name: str, grpc_addr: str
) -> Callable[[], None]:
    """Register an instance, keep its heartbeat going and return a deregister function."""
    instance_id = generate_instance_id(service_name)
    logger.info("registering service", extra={"grpcAddr": grpc_addr})
    registry.register(instance_id, service_name, grpc_addr)

    stopped = threading.Event()

    def heartbeat() -> None:
        while not stopped.is_set():
            try:
                registry.health_check(instance_id, service_name)
            except Exception:
                logger.critical(
                    "no heartbeat from %s to registry", service_name, exc_info=True
                )
                return
            stopped.wait(_HEARTBEAT_INTERVAL)

    threading.Thread(target=heartbeat, name=f"{service_name}-heartbeat", daemon=True).start()
    logger.info(
        "registered to registry", extra={"serviceName": service_name, "addr": grpc_addr}
    )

    def deregister() -> None:
        stopped.set()
        registry.deregister(instance_id, service_name)

    return deregister


def get_service_addr(registry: Registry, service_name: str) -> str:
    """Pick one address of ``service_name`` at random."""
    addrs = registry.discover(service_name)
    if not addrs:
        raise LookupError(f"got empty {service_name} addrs from registry")
    logger.info("Discovered %d instance of %s, addrs=%s", len(addrs), service_name, addrs)
    return random.choice(addrs)