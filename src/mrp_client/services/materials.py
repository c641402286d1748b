"""Material queries and mutations."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from mrp_client.domain import Category, Material
from mrp_client.exceptions import MrpClientError
from mrp_client.services.base import EntityService, format_id, number, optional_id, parse_id, text

logger = logging.getLogger(__name__)

MATERIAL_FIELDS = """
    id
    nombre
    descripcion
    unidadMedida
    precio
    stockActual
    stockMinimo
    puntoReorden
    categoriaText
    activo
    imagen
    categoria {
      id
      nombre
      descripcion
      activo
    }
"""

LIST_MATERIALS_QUERY = f"""
query {{
  getAllMateriales {{{MATERIAL_FIELDS}  }}
}}
"""

GET_MATERIAL_QUERY = f"""
query GetMaterial($id: ID!) {{
  getMaterialById(id: $id) {{{MATERIAL_FIELDS}  }}
}}
"""

MATERIAL_BY_NAME_QUERY = f"""
query GetMaterialByNombre($nombre: String!) {{
  getMaterialByNombre(nombre: $nombre) {{{MATERIAL_FIELDS}  }}
}}
"""

MATERIALS_BY_SUPPLIER_QUERY = f"""
query GetMaterialesByProveedor($proveedorId: ID!) {{
  getMaterialesByProveedor(proveedorId: $proveedorId) {{{MATERIAL_FIELDS}  }}
}}
"""

MATERIALS_NEEDING_RESTOCK_QUERY = f"""
query {{
  getMaterialesNecesitanReabastecimiento {{{MATERIAL_FIELDS}  }}
}}
"""

LOW_STOCK_MATERIALS_QUERY = f"""
query {{
  getMaterialesConStockBajo {{{MATERIAL_FIELDS}  }}
}}
"""

SEARCH_MATERIALS_QUERY = f"""
query BuscarMateriales($termino: String!) {{
  buscarMateriales(termino: $termino) {{{MATERIAL_FIELDS}  }}
}}
"""

CREATE_MATERIAL_MUTATION = f"""
mutation CreateMaterial($input: MaterialInput!) {{
  createMaterial(input: $input) {{{MATERIAL_FIELDS}  }}
}}
"""

UPDATE_MATERIAL_MUTATION = f"""
mutation UpdateMaterial($id: ID!, $input: MaterialInput!) {{
  updateMaterial(id: $id, input: $input) {{{MATERIAL_FIELDS}  }}
}}
"""

DELETE_MATERIAL_MUTATION = """
mutation DeleteMaterial($id: ID!) {
  deleteMaterial(id: $id)
}
"""


class MaterialService(EntityService):
    """CRUD and stock lookups for raw materials."""

    entity_name = "material"

    def list(self) -> List[Material]:
        data = self._query(LIST_MATERIALS_QUERY)
        return [self._transform_material(item) for item in self._field(data, "getAllMateriales")]

    def get(self, material_id: Any) -> Material:
        data = self._query(GET_MATERIAL_QUERY, {"id": format_id(material_id)})
        return self._transform_material(self._field(data, "getMaterialById"))

    def create(self, values: Mapping[str, Any]) -> Material:
        """Create a material.

        Args:
            values: ``name`` (required), ``description``, ``unit``, ``stock``,
                ``min_stock``, ``category_id``, ``sector_id``, ``image``
        """
        data = self._mutate(CREATE_MATERIAL_MUTATION, {"input": self._material_input(values)})
        return self._transform_material(self._field(data, "createMaterial"))

    def update(self, material_id: Any, values: Mapping[str, Any]) -> Material:
        variables = {"id": format_id(material_id), "input": self._material_input(values)}
        data = self._mutate(UPDATE_MATERIAL_MUTATION, variables)
        return self._transform_material(self._field(data, "updateMaterial"))

    def delete(self, material_id: Any) -> None:
        data = self._mutate(DELETE_MATERIAL_MUTATION, {"id": format_id(material_id)})
        self._require_success(data, "deleteMaterial", "delete", material_id)

    def find_by_name(self, name: str) -> List[Material]:
        """Exact-name lookup; an unknown name or a failed lookup yields an empty list."""
        try:
            data = self._query(MATERIAL_BY_NAME_QUERY, {"nombre": name})
        except MrpClientError as exc:
            logger.warning("Material lookup by name %r failed: %s", name, exc)
            return []
        record = data.get("getMaterialByNombre")
        return [self._transform_material(record)] if record else []

    def list_by_supplier(self, supplier_id: Any) -> List[Material]:
        data = self._query(MATERIALS_BY_SUPPLIER_QUERY, {"proveedorId": format_id(supplier_id)})
        return [self._transform_material(item) for item in self._field(data, "getMaterialesByProveedor")]

    def list_needing_restock(self) -> List[Material]:
        data = self._query(MATERIALS_NEEDING_RESTOCK_QUERY)
        return [
            self._transform_material(item) for item in self._field(data, "getMaterialesNecesitanReabastecimiento")
        ]

    def list_low_stock(self) -> List[Material]:
        data = self._query(LOW_STOCK_MATERIALS_QUERY)
        return [self._transform_material(item) for item in self._field(data, "getMaterialesConStockBajo")]

    def search(self, term: str) -> List[Material]:
        data = self._query(SEARCH_MATERIALS_QUERY, {"termino": term})
        return [self._transform_material(item) for item in self._field(data, "buscarMateriales")]

    def update_stock(self, material_id: Any, quantity: float) -> Material:
        """Set the stock level; the backend has no dedicated mutation, so this re-saves the record."""
        current = self.get(material_id)
        values = self._values_from_material(current)
        values["stock"] = quantity
        return self.update(material_id, values)

    def update_image(self, material_id: Any, image_url: str) -> Material:
        current = self.get(material_id)
        values = self._values_from_material(current)
        values["image"] = image_url
        return self.update(material_id, values)

    def _material_input(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "nombre": self._require_name(values),
            "descripcion": values.get("description") or None,
            "unidadMedida": values.get("unit") or "UNIDAD",
            "stockActual": values.get("stock") or 0,
            "stockMinimo": values.get("min_stock") or 0,
            "categoriaId": optional_id(values.get("category_id")),
            "sectorId": optional_id(values.get("sector_id")),
            "imagen": values.get("image") or None,
        }

    @staticmethod
    def _values_from_material(material: Material) -> Dict[str, Any]:
        return {
            "name": material.name,
            "description": material.description,
            "unit": material.unit,
            "stock": material.stock,
            "min_stock": material.min_stock,
            "category_id": material.category_id,
            "image": material.image,
        }

    def _transform_material(self, raw: Dict[str, Any]) -> Material:
        category: Optional[Category] = None
        raw_category = raw.get("categoria")
        if raw_category:
            category = Category(
                id=parse_id(raw_category.get("id")),
                name=text(raw_category.get("nombre")),
                description=text(raw_category.get("descripcion")),
                active=bool(raw_category.get("activo", True)),
            )

        reorder_point = raw.get("puntoReorden")
        return Material(
            id=parse_id(raw.get("id")),
            name=text(raw.get("nombre")),
            description=text(raw.get("descripcion")),
            unit=text(raw.get("unidadMedida"), "UNIDAD"),
            price=number(raw.get("precio"), 0.0),
            stock=number(raw.get("stockActual")),
            min_stock=number(raw.get("stockMinimo")),
            reorder_point=number(reorder_point) if reorder_point else None,
            category_text=text(raw.get("categoriaText")),
            active=bool(raw.get("activo", True)),
            image=text(raw.get("imagen")),
            category=category,
        )
