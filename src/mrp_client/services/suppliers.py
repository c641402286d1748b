"""Supplier queries and mutations."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from mrp_client.domain import Supplier
from mrp_client.services.base import EntityService, format_id, parse_id, text

SUPPLIER_FIELDS = """
    id
    nombre
    ruc
    direccion
    telefono
    email
    personaContacto
    activo
"""

LIST_SUPPLIERS_QUERY = f"""
query {{
  getAllProveedores {{{SUPPLIER_FIELDS}  }}
}}
"""

GET_SUPPLIER_QUERY = f"""
query GetProveedor($id: ID!) {{
  getProveedorById(id: $id) {{{SUPPLIER_FIELDS}  }}
}}
"""

SUPPLIER_BY_NAME_QUERY = f"""
query GetProveedorByNombre($nombre: String!) {{
  getProveedorByNombre(nombre: $nombre) {{{SUPPLIER_FIELDS}  }}
}}
"""

SUPPLIERS_BY_STATUS_QUERY = f"""
query GetProveedoresByEstado($activo: Boolean!) {{
  getProveedoresByEstado(activo: $activo) {{{SUPPLIER_FIELDS}  }}
}}
"""

SEARCH_SUPPLIERS_QUERY = f"""
query BuscarProveedores($texto: String!) {{
  buscarProveedores(texto: $texto) {{{SUPPLIER_FIELDS}  }}
}}
"""

CREATE_SUPPLIER_MUTATION = f"""
mutation CreateProveedor($input: ProveedorInput!) {{
  createProveedor(input: $input) {{{SUPPLIER_FIELDS}  }}
}}
"""

UPDATE_SUPPLIER_MUTATION = f"""
mutation UpdateProveedor($id: ID!, $input: ProveedorInput!) {{
  updateProveedor(id: $id, input: $input) {{{SUPPLIER_FIELDS}  }}
}}
"""

SET_SUPPLIER_STATUS_MUTATION = f"""
mutation CambiarEstadoProveedor($id: ID!, $activo: Boolean!) {{
  cambiarEstadoProveedor(id: $id, activo: $activo) {{{SUPPLIER_FIELDS}  }}
}}
"""

DELETE_SUPPLIER_MUTATION = """
mutation DeleteProveedor($id: ID!) {
  deleteProveedor(id: $id)
}
"""


class SupplierService(EntityService):
    """CRUD, status changes and lookups for suppliers."""

    entity_name = "supplier"

    def list(self) -> List[Supplier]:
        data = self._query(LIST_SUPPLIERS_QUERY)
        return [self._transform_supplier(item) for item in self._field(data, "getAllProveedores")]

    def get(self, supplier_id: Any) -> Supplier:
        data = self._query(GET_SUPPLIER_QUERY, {"id": format_id(supplier_id)})
        return self._transform_supplier(self._field(data, "getProveedorById"))

    def create(self, values: Mapping[str, Any]) -> Supplier:
        data = self._mutate(CREATE_SUPPLIER_MUTATION, {"input": self._supplier_input(values)})
        return self._transform_supplier(self._field(data, "createProveedor"))

    def update(self, supplier_id: Any, values: Mapping[str, Any]) -> Supplier:
        variables = {"id": format_id(supplier_id), "input": self._supplier_input(values)}
        data = self._mutate(UPDATE_SUPPLIER_MUTATION, variables)
        return self._transform_supplier(self._field(data, "updateProveedor"))

    def delete(self, supplier_id: Any) -> None:
        data = self._mutate(DELETE_SUPPLIER_MUTATION, {"id": format_id(supplier_id)})
        self._require_success(data, "deleteProveedor", "delete", supplier_id)

    def set_active(self, supplier_id: Any, active: bool) -> Supplier:
        variables = {"id": format_id(supplier_id), "activo": bool(active)}
        data = self._mutate(SET_SUPPLIER_STATUS_MUTATION, variables)
        return self._transform_supplier(self._field(data, "cambiarEstadoProveedor"))

    def find_by_name(self, name: str) -> Optional[Supplier]:
        data = self._query(SUPPLIER_BY_NAME_QUERY, {"nombre": name})
        record = data.get("getProveedorByNombre")
        return self._transform_supplier(record) if record else None

    def list_by_status(self, active: bool) -> List[Supplier]:
        data = self._query(SUPPLIERS_BY_STATUS_QUERY, {"activo": bool(active)})
        return [self._transform_supplier(item) for item in self._field(data, "getProveedoresByEstado")]

    def search(self, term: str) -> List[Supplier]:
        data = self._query(SEARCH_SUPPLIERS_QUERY, {"texto": term})
        return [self._transform_supplier(item) for item in self._field(data, "buscarProveedores")]

    def _supplier_input(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        active = values.get("active")
        return {
            "nombre": self._require_name(values),
            "ruc": values.get("tax_id") or None,
            "direccion": values.get("address") or None,
            "telefono": values.get("phone") or None,
            "email": values.get("email") or None,
            "personaContacto": values.get("contact_person") or None,
            "activo": True if active is None else bool(active),
        }

    @staticmethod
    def _transform_supplier(raw: Dict[str, Any]) -> Supplier:
        return Supplier(
            id=parse_id(raw.get("id")),
            name=text(raw.get("nombre")),
            tax_id=text(raw.get("ruc")),
            address=text(raw.get("direccion")),
            phone=text(raw.get("telefono")),
            email=text(raw.get("email")),
            contact_person=text(raw.get("personaContacto")),
            active=bool(raw.get("activo", True)),
        )
