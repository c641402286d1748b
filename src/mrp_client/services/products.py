"""Finished-product queries and mutations."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from mrp_client.domain import Product, StockCheck
from mrp_client.services.base import EntityService, format_id, number, optional_id, parse_id, text
from mrp_client.services.categories import CategoryService

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = """
    id
    nombre
    descripcion
    stock
    stockMinimo
    imagen
    tiempo
    precioUnitario
    categoria {
      id
      nombre
      descripcion
      activo
    }
"""

LIST_PRODUCTS_QUERY = f"""
query {{
  getAllProducts {{{PRODUCT_FIELDS}  }}
}}
"""

GET_PRODUCT_QUERY = f"""
query GetProduct($id: ID!) {{
  getProductById(id: $id) {{{PRODUCT_FIELDS}  }}
}}
"""

CREATE_PRODUCT_MUTATION = f"""
mutation CreateProduct($input: ProductoInput!) {{
  createProduct(input: $input) {{{PRODUCT_FIELDS}  }}
}}
"""

UPDATE_PRODUCT_MUTATION = f"""
mutation UpdateProduct($id: ID!, $input: ProductoInput!) {{
  updateProduct(id: $id, input: $input) {{{PRODUCT_FIELDS}  }}
}}
"""

DELETE_PRODUCT_MUTATION = """
mutation DeleteProduct($id: ID!) {
  deleteProduct(id: $id)
}
"""


class ProductService(EntityService):
    """CRUD for finished products plus the stock helpers the backend lacks.

    The schema has no search or low-stock queries for products, so those
    filter the full listing on the client.
    """

    entity_name = "product"

    def list(self) -> List[Product]:
        data = self._query(LIST_PRODUCTS_QUERY)
        return [self._transform_product(item) for item in self._field(data, "getAllProducts")]

    def get(self, product_id: Any) -> Product:
        data = self._query(GET_PRODUCT_QUERY, {"id": format_id(product_id)})
        return self._transform_product(self._field(data, "getProductById"))

    def create(self, values: Mapping[str, Any]) -> Product:
        """Create a product.

        Args:
            values: ``name`` (required), ``description``, ``unit_price``,
                ``stock``, ``min_stock``, ``lead_time``, ``image``, ``category_id``
        """
        data = self._mutate(CREATE_PRODUCT_MUTATION, {"input": self._product_input(values)})
        return self._transform_product(self._field(data, "createProduct"))

    def update(self, product_id: Any, values: Mapping[str, Any]) -> Product:
        variables = {"id": format_id(product_id), "input": self._product_input(values)}
        data = self._mutate(UPDATE_PRODUCT_MUTATION, variables)
        return self._transform_product(self._field(data, "updateProduct"))

    def delete(self, product_id: Any) -> None:
        data = self._mutate(DELETE_PRODUCT_MUTATION, {"id": format_id(product_id)})
        self._require_success(data, "deleteProduct", "delete", product_id)

    def search(self, term: str) -> List[Product]:
        """Case-insensitive match on name or description; a blank term returns everything."""
        products = self.list()
        needle = (term or "").strip().lower()
        if not needle:
            return products
        return [p for p in products if needle in p.name.lower() or needle in p.description.lower()]

    def list_low_stock(self) -> List[Product]:
        return [p for p in self.list() if p.is_low_stock]

    def update_stock(self, product_id: Any, quantity: float) -> Product:
        current = self.get(product_id)
        values = self._values_from_product(current)
        values["stock"] = quantity
        return self.update(product_id, values)

    def update_image(self, product_id: Any, image_url: str) -> Product:
        current = self.get(product_id)
        values = self._values_from_product(current)
        values["image"] = image_url
        return self.update(product_id, values)

    def check_availability(self, product_id: Any, quantity: float) -> StockCheck:
        product = self.get(product_id)
        check = StockCheck(product_id=product.id, requested=quantity, in_stock=product.stock)
        if not check.available:
            logger.info("Product %s short of stock: %s requested, %s in stock", product.id, quantity, product.stock)
        return check

    def _product_input(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "nombre": self._require_name(values),
            "descripcion": values.get("description") or None,
            "precioUnitario": values.get("unit_price") or 0,
            "stock": values.get("stock") or 0,
            "stockMinimo": values.get("min_stock") or 0,
            "tiempo": values.get("lead_time") or None,
            "imagen": values.get("image") or None,
            "categoriaId": optional_id(values.get("category_id")),
        }

    @staticmethod
    def _values_from_product(product: Product) -> Dict[str, Any]:
        return {
            "name": product.name,
            "description": product.description,
            "unit_price": product.unit_price,
            "stock": product.stock,
            "min_stock": product.min_stock,
            "lead_time": product.lead_time,
            "image": product.image,
            "category_id": product.category_id,
        }

    @staticmethod
    def _transform_product(raw: Dict[str, Any]) -> Product:
        raw_category = raw.get("categoria")
        return Product(
            id=parse_id(raw.get("id")),
            name=text(raw.get("nombre")),
            description=text(raw.get("descripcion")),
            stock=number(raw.get("stock")),
            min_stock=number(raw.get("stockMinimo")),
            unit_price=number(raw.get("precioUnitario")),
            lead_time=text(raw.get("tiempo")),
            image=text(raw.get("imagen")),
            category=CategoryService._transform_category(raw_category) if raw_category else None,
        )
