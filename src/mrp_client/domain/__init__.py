"""Domain objects returned by the entity services.

These frozen dataclasses are the client-side shape of backend records,
independent of the GraphQL field names used on the wire.
"""

from .category import Category, Subcategory
from .material import Material
from .order import Order, OrderLine, PaymentMethod
from .product import Product, StockCheck
from .purchase import Purchase
from .role import Role
from .sector import Sector, Warehouse
from .supplier import Supplier
from .user import User

__all__ = [
    "Category",
    "Subcategory",
    "Material",
    "Order",
    "OrderLine",
    "PaymentMethod",
    "Product",
    "StockCheck",
    "Purchase",
    "Role",
    "Sector",
    "Warehouse",
    "Supplier",
    "User",
]
