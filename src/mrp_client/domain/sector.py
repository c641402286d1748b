"""Warehouse sector domain objects."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Warehouse:
    """Warehouse holding one or more sectors; ``sectors`` is only filled by warehouse lookups."""

    id: int
    name: str
    capacity: float = 0
    sectors: Tuple["Sector", ...] = ()


@dataclass(frozen=True)
class Sector:
    """Storage area inside a warehouse.

    Attributes:
        id: Backend identifier
        name: Sector name
        stock: Units currently stored
        max_capacity: Capacity limit, 0 when unset
        type: Sector type label, empty when unset
        description: Free text, empty when unset
        warehouse: Warehouse the sector belongs to, if any
    """

    id: int
    name: str
    stock: float = 0
    max_capacity: float = 0
    type: str = ""
    description: str = ""
    warehouse: Optional[Warehouse] = None

    @property
    def warehouse_id(self) -> Optional[int]:
        return self.warehouse.id if self.warehouse else None
