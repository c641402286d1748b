"""Finished product domain objects."""

from dataclasses import dataclass
from typing import Optional

from .category import Category


@dataclass(frozen=True)
class Product:
    """Product manufactured by the workshop.

    Attributes:
        id: Backend identifier
        name: Product name
        description: Free text, empty when unset
        stock: Units in stock
        min_stock: Threshold under which the product counts as low stock
        unit_price: Sale price per unit
        lead_time: Production time label as entered in the backend (e.g. "3 dias")
        image: Image URL, empty when unset
        category: Assigned category, if any
    """

    id: int
    name: str
    description: str = ""
    stock: float = 0
    min_stock: float = 0
    unit_price: float = 0.0
    lead_time: str = ""
    image: str = ""
    category: Optional[Category] = None

    @property
    def category_id(self) -> Optional[int]:
        return self.category.id if self.category else None

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock


@dataclass(frozen=True)
class StockCheck:
    """Result of checking whether a quantity can be served from stock."""

    product_id: int
    requested: float
    in_stock: float

    @property
    def available(self) -> bool:
        return self.in_stock >= self.requested
