"""Entity services for the MRP backend's GraphQL schema."""

from .base import EntityService
from .categories import CategoryService
from .materials import MaterialService
from .orders import OrderService
from .products import ProductService
from .purchases import PurchaseService
from .roles import RoleService
from .sectors import SectorService
from .subcategories import SubcategoryService
from .suppliers import SupplierService
from .users import UserService
from .warehouses import WarehouseService

__all__ = [
    "EntityService",
    "CategoryService",
    "MaterialService",
    "OrderService",
    "ProductService",
    "PurchaseService",
    "RoleService",
    "SectorService",
    "SubcategoryService",
    "SupplierService",
    "UserService",
    "WarehouseService",
]
