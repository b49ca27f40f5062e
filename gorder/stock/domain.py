"""Stock items and the repository that holds them."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol


def _lowered(data: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).lower(): value for key, value in data.items()}


@dataclass(frozen=True)
class Item:
    """A stock item with its price identifier."""

    id: str = ""
    name: str = ""
    quantity: int = 0
    price_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "ID": self.id,
            "Name": self.name,
            "Quantity": self.quantity,
            "PriceID": self.price_id,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Item:
        fields = _lowered(data)
        return cls(
            id=fields.get("id") or "",
            name=fields.get("name") or "",
            quantity=int(fields.get("quantity") or 0),
            price_id=fields.get("priceid") or "",
        )


@dataclass(frozen=True)
class ItemWithQuantity:
    """An item identifier with the quantity asked for."""

    id: str = ""
    quantity: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"ID": self.id, "Quantity": self.quantity}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ItemWithQuantity:
        fields = _lowered(data)
        return cls(id=fields.get("id") or "", quantity=int(fields.get("quantity") or 0))


class NotFoundError(LookupError):
    """Some requested items are not in stock; ``found`` holds those that were."""

    def __init__(self, missing: Iterable[str], found: Iterable[Item] = ()) -> None:
        self.missing = list(missing)
        self.found = list(found)
        super().__init__(f"these items not found in stock:{','.join(self.missing)}")


class Repository(Protocol):
    """Storage of stock items."""

    def get_items(self, ids: list[str]) -> list[Item]: ...