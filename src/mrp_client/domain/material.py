"""Material domain object for raw materials held in stock."""

from dataclasses import dataclass
from typing import Optional

from .category import Category


@dataclass(frozen=True)
class Material:
    """Raw material tracked by the inventory.

    Attributes:
        id: Backend identifier
        name: Material name
        description: Free text, empty when unset
        unit: Unit of measure (e.g. "UNIDAD", "M2")
        price: Last known unit price, 0.0 when unknown
        stock: Units currently in stock
        min_stock: Threshold under which the material counts as low stock
        reorder_point: Stock level that triggers a purchase, if configured
        category_text: Free-text category label kept by older records
        active: Whether the material is in use
        image: Image URL, empty when unset
        category: Assigned category, if any
    """

    id: int
    name: str
    description: str = ""
    unit: str = "UNIDAD"
    price: float = 0.0
    stock: float = 0
    min_stock: float = 0
    reorder_point: Optional[float] = None
    category_text: str = ""
    active: bool = True
    image: str = ""
    category: Optional[Category] = None

    @property
    def category_id(self) -> Optional[int]:
        return self.category.id if self.category else None

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock
