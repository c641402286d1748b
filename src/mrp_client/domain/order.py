"""Sales order domain objects."""

import datetime
from dataclasses import dataclass
from typing import Optional, Tuple

from .user import User


@dataclass(frozen=True)
class PaymentMethod:
    id: int
    name: str = ""
    description: str = ""


@dataclass(frozen=True)
class OrderLine:
    """One product line of an order.

    Attributes:
        id: Backend identifier
        quantity: Units ordered
        delivered: Line status flag kept by the backend
        total: Line amount before discount
        discounted_total: Line amount after discount
        unit_price: Price per unit
        product_id: Ordered product, 0 when the backend omitted it
        product_name: Product name, empty when unknown
    """

    id: int
    quantity: float
    delivered: bool = False
    total: float = 0.0
    discounted_total: float = 0.0
    unit_price: float = 0.0
    product_id: int = 0
    product_name: str = ""


@dataclass(frozen=True)
class Order:
    """Customer order.

    Attributes:
        id: Backend identifier
        placed_on: Order date, ``None`` when unset or unparseable
        description: Free text, empty when unset
        total: Order amount before discount
        discounted_total: Order amount after discount
        completed: Order status; ``True`` once finalized
        user: User who registered the order, if known
        payment_method: Payment method, if known
        lines: Ordered products
    """

    id: int
    placed_on: Optional[datetime.date] = None
    description: str = ""
    total: float = 0.0
    discounted_total: float = 0.0
    completed: bool = False
    user: Optional[User] = None
    payment_method: Optional[PaymentMethod] = None
    lines: Tuple[OrderLine, ...] = ()
