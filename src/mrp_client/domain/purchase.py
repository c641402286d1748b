"""Purchase domain object."""

import datetime
from dataclasses import dataclass
from typing import Optional

from .supplier import Supplier
from .user import User


@dataclass(frozen=True)
class Purchase:
    """Purchase of materials from a supplier.

    Attributes:
        id: Backend identifier
        status: Free-form status label (e.g. "PENDIENTE", "RECIBIDA")
        purchased_on: Purchase date, ``None`` when unset or unparseable
        total: Amount before discount
        discount: Discount amount
        supplier: Supplier, if known
        user: User who registered the purchase, if known
    """

    id: int
    status: str = ""
    purchased_on: Optional[datetime.date] = None
    total: float = 0.0
    discount: float = 0.0
    supplier: Optional[Supplier] = None
    user: Optional[User] = None

    @property
    def supplier_id(self) -> Optional[int]:
        return self.supplier.id if self.supplier else None

    @property
    def user_id(self) -> Optional[int]:
        return self.user.id if self.user else None
