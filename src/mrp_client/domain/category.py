"""Category domain objects."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Subcategory:
    """Subcategory a category belongs to."""

    id: int
    name: str
    description: str = ""


@dataclass(frozen=True)
class Category:
    """Material or product category.

    Attributes:
        id: Backend identifier
        name: Display name, unique per backend
        description: Free text, empty when unset
        active: Whether the category can be assigned to new records
        subcategory: Parent subcategory, if any
    """

    id: int
    name: str
    description: str = ""
    active: bool = True
    subcategory: Optional[Subcategory] = None

    @property
    def subcategory_id(self) -> Optional[int]:
        return self.subcategory.id if self.subcategory else None
