"""Warehouse sector queries and mutations."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from mrp_client.domain import Sector, Warehouse
from mrp_client.services.base import EntityService, format_id, number, optional_id, parse_id, text

# capacidad_maxima is snake_case in the backend schema
SECTOR_FIELDS = """
    id
    nombre
    stock
    capacidad_maxima
    tipo
    descripcion
    almacen {
      id
      nombre
      capacidad
    }
"""

LIST_SECTORS_QUERY = f"""
query {{
  getAllSectores {{{SECTOR_FIELDS}  }}
}}
"""

GET_SECTOR_QUERY = f"""
query GetSector($id: ID!) {{
  getSectorById(id: $id) {{{SECTOR_FIELDS}  }}
}}
"""

CREATE_SECTOR_MUTATION = f"""
mutation CreateSector($input: SectorInput!) {{
  createSector(input: $input) {{{SECTOR_FIELDS}  }}
}}
"""

UPDATE_SECTOR_MUTATION = f"""
mutation UpdateSector($id: ID!, $input: SectorInput!) {{
  updateSector(id: $id, input: $input) {{{SECTOR_FIELDS}  }}
}}
"""

DELETE_SECTOR_MUTATION = """
mutation DeleteSector($id: ID!) {
  deleteSector(id: $id)
}
"""


class SectorService(EntityService):
    entity_name = "sector"

    def list(self) -> List[Sector]:
        data = self._query(LIST_SECTORS_QUERY)
        return [self._transform_sector(item) for item in self._field(data, "getAllSectores")]

    def get(self, sector_id: Any) -> Sector:
        data = self._query(GET_SECTOR_QUERY, {"id": format_id(sector_id)})
        return self._transform_sector(self._field(data, "getSectorById"))

    def create(self, values: Mapping[str, Any]) -> Sector:
        data = self._mutate(CREATE_SECTOR_MUTATION, {"input": self._sector_input(values)})
        return self._transform_sector(self._field(data, "createSector"))

    def update(self, sector_id: Any, values: Mapping[str, Any]) -> Sector:
        variables = {"id": format_id(sector_id), "input": self._sector_input(values)}
        data = self._mutate(UPDATE_SECTOR_MUTATION, variables)
        return self._transform_sector(self._field(data, "updateSector"))

    def delete(self, sector_id: Any) -> None:
        data = self._mutate(DELETE_SECTOR_MUTATION, {"id": format_id(sector_id)})
        self._require_success(data, "deleteSector", "delete", sector_id)

    def _sector_input(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "nombre": self._require_name(values),
            "stock": values.get("stock") or None,
            "capacidad_maxima": values.get("max_capacity") or None,
            "tipo": values.get("type") or None,
            "descripcion": values.get("description") or None,
            "almacenId": optional_id(values.get("warehouse_id")),
        }

    @staticmethod
    def _transform_sector(raw: Dict[str, Any]) -> Sector:
        warehouse = None
        raw_warehouse = raw.get("almacen")
        if raw_warehouse:
            warehouse = Warehouse(
                id=parse_id(raw_warehouse.get("id")),
                name=text(raw_warehouse.get("nombre")),
                capacity=number(raw_warehouse.get("capacidad")),
            )
        return Sector(
            id=parse_id(raw.get("id")),
            name=text(raw.get("nombre")),
            stock=number(raw.get("stock")),
            max_capacity=number(raw.get("capacidad_maxima")),
            type=text(raw.get("tipo")),
            description=text(raw.get("descripcion")),
            warehouse=warehouse,
        )
