"""Warehouse queries and mutations."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from mrp_client.domain import Sector, Warehouse
from mrp_client.services.base import EntityService, format_id, number, parse_id, text

WAREHOUSE_FIELDS = """
    id
    nombre
    capacidad
    sectores {
      id
      nombre
      stock
      capacidad_maxima
      tipo
      descripcion
    }
"""

LIST_WAREHOUSES_QUERY = f"""
query {{
  getAllAlmacenes {{{WAREHOUSE_FIELDS}  }}
}}
"""

GET_WAREHOUSE_QUERY = f"""
query GetAlmacen($id: ID!) {{
  getAlmacenById(id: $id) {{{WAREHOUSE_FIELDS}  }}
}}
"""

CREATE_WAREHOUSE_MUTATION = f"""
mutation CreateAlmacen($input: AlmacenInput!) {{
  createAlmacen(input: $input) {{{WAREHOUSE_FIELDS}  }}
}}
"""

UPDATE_WAREHOUSE_MUTATION = f"""
mutation UpdateAlmacen($id: ID!, $input: AlmacenInput!) {{
  updateAlmacen(id: $id, input: $input) {{{WAREHOUSE_FIELDS}  }}
}}
"""

DELETE_WAREHOUSE_MUTATION = """
mutation DeleteAlmacen($id: ID!) {
  deleteAlmacen(id: $id)
}
"""


class WarehouseService(EntityService):
    entity_name = "warehouse"

    def list(self) -> List[Warehouse]:
        data = self._query(LIST_WAREHOUSES_QUERY)
        return [self._transform_warehouse(item) for item in self._field(data, "getAllAlmacenes")]

    def get(self, warehouse_id: Any) -> Warehouse:
        data = self._query(GET_WAREHOUSE_QUERY, {"id": format_id(warehouse_id)})
        return self._transform_warehouse(self._field(data, "getAlmacenById"))

    def create(self, values: Mapping[str, Any]) -> Warehouse:
        """Create a warehouse from ``name`` (required) and ``capacity``."""
        data = self._mutate(CREATE_WAREHOUSE_MUTATION, {"input": self._warehouse_input(values)})
        return self._transform_warehouse(self._field(data, "createAlmacen"))

    def update(self, warehouse_id: Any, values: Mapping[str, Any]) -> Warehouse:
        variables = {"id": format_id(warehouse_id), "input": self._warehouse_input(values)}
        data = self._mutate(UPDATE_WAREHOUSE_MUTATION, variables)
        return self._transform_warehouse(self._field(data, "updateAlmacen"))

    def delete(self, warehouse_id: Any) -> None:
        data = self._mutate(DELETE_WAREHOUSE_MUTATION, {"id": format_id(warehouse_id)})
        self._require_success(data, "deleteAlmacen", "delete", warehouse_id)

    def _warehouse_input(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "nombre": self._require_name(values),
            "capacidad": values.get("capacity") or None,
        }

    @staticmethod
    def _transform_warehouse(raw: Dict[str, Any]) -> Warehouse:
        sectors = tuple(
            Sector(
                id=parse_id(item.get("id")),
                name=text(item.get("nombre")),
                stock=number(item.get("stock")),
                max_capacity=number(item.get("capacidad_maxima")),
                type=text(item.get("tipo")),
                description=text(item.get("descripcion")),
            )
            for item in raw.get("sectores") or ()
        )
        return Warehouse(
            id=parse_id(raw.get("id")),
            name=text(raw.get("nombre")),
            capacity=number(raw.get("capacidad")),
            sectors=sectors,
        )
