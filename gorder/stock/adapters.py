"""In-memory stock repository seeded with stub items."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from gorder.stock.domain import Item, NotFoundError

_STUB_ITEMS = {
    "item_id": Item(id="foo_item", name="stub_item", quantity=10000, price_id="stub_item_price_id"),
    "item1": Item(id="item1", name="stub item 1", quantity=10000, price_id="stub_item1_price_id"),
    "item2": Item(id="item2", name="stub item 2", quantity=10000, price_id="stub_item2_price_id"),
    "item3": Item(id="item3", name="stub item 3", quantity=10000, price_id="stub_item3_price_id"),
}


class MemoryStockRepository:
    """Thread-safe stock store kept in a dictionary."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._store = dict(_STUB_ITEMS)

    def get_items(self, ids: Iterable[str]) -> list[Item]:
        """Return the items for ``ids``; raise NotFoundError if any are unknown."""
        ids = list(ids)
        with self._lock:
            found = [self._store[item_id] for item_id in ids if item_id in self._store]
            missing = [item_id for item_id in ids if item_id not in self._store]
        if len(found) == len(ids):
            return found
        raise NotFoundError(missing, found)