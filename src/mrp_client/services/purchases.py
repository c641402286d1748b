"""Material purchase queries and mutations."""

from __future__ import annotations

import datetime
from typing import Any, Dict, Iterable, List, Mapping, Union

from mrp_client.domain import Purchase
from mrp_client.exceptions import ValidationError
from mrp_client.services.base import (
    EntityService,
    format_date,
    format_id,
    number,
    parse_date,
    parse_id,
    text,
)
from mrp_client.services.suppliers import SupplierService
from mrp_client.services.users import UserService

DateLike = Union[datetime.date, str]

PURCHASE_FIELDS = """
    id
    estado
    fecha
    importe_total
    importe_descuento
    proveedor {
      id
      nombre
    }
    usuario {
      id
      nombre
      apellido
      email
    }
"""

LIST_PURCHASES_QUERY = f"""
query {{
  getAllCompras {{{PURCHASE_FIELDS}  }}
}}
"""

GET_PURCHASE_QUERY = f"""
query GetCompra($id: ID!) {{
  getCompraById(id: $id) {{{PURCHASE_FIELDS}  }}
}}
"""

PURCHASES_BY_STATUS_QUERY = f"""
query GetComprasByEstado($estado: String!) {{
  getComprasByEstado(estado: $estado) {{{PURCHASE_FIELDS}  }}
}}
"""

PURCHASES_BY_SUPPLIER_QUERY = f"""
query GetComprasByProveedor($proveedorId: ID!) {{
  getComprasByProveedor(proveedorId: $proveedorId) {{{PURCHASE_FIELDS}  }}
}}
"""

CREATE_PURCHASE_MUTATION = f"""
mutation CreateCompra($input: CompraInput!) {{
  createCompra(input: $input) {{{PURCHASE_FIELDS}  }}
}}
"""

UPDATE_PURCHASE_MUTATION = f"""
mutation UpdateCompra($id: ID!, $input: CompraInput!) {{
  updateCompra(id: $id, input: $input) {{{PURCHASE_FIELDS}  }}
}}
"""

DELETE_PURCHASE_MUTATION = """
mutation DeleteCompra($id: ID!) {
  deleteCompra(id: $id)
}
"""


def _to_date(value: DateLike, field: str) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    parsed = parse_date(value)
    if parsed is None:
        raise ValidationError(f"'{field}' must be a date (YYYY-MM-DD)", {"field": field})
    return parsed


class PurchaseService(EntityService):
    """Purchases of materials from suppliers.

    The backend filters by status and by supplier; the date-range variants
    narrow those results on the client, with both bounds inclusive.
    Purchases without a readable date never match a range.
    """

    entity_name = "purchase"

    def list(self) -> List[Purchase]:
        data = self._query(LIST_PURCHASES_QUERY)
        return self._transform_all(self._field(data, "getAllCompras"))

    def get(self, purchase_id: Any) -> Purchase:
        data = self._query(GET_PURCHASE_QUERY, {"id": format_id(purchase_id)})
        return self._transform_purchase(self._field(data, "getCompraById"))

    def list_by_status(self, status: str) -> List[Purchase]:
        data = self._query(PURCHASES_BY_STATUS_QUERY, {"estado": status})
        return self._transform_all(self._field(data, "getComprasByEstado"))

    def list_by_supplier(self, supplier_id: Any) -> List[Purchase]:
        data = self._query(PURCHASES_BY_SUPPLIER_QUERY, {"proveedorId": format_id(supplier_id)})
        return self._transform_all(self._field(data, "getComprasByProveedor"))

    def list_between(self, start: DateLike, end: DateLike) -> List[Purchase]:
        return self._within(self.list(), start, end)

    def list_by_supplier_between(self, supplier_id: Any, start: DateLike, end: DateLike) -> List[Purchase]:
        return self._within(self.list_by_supplier(supplier_id), start, end)

    def list_by_status_between(self, status: str, start: DateLike, end: DateLike) -> List[Purchase]:
        return self._within(self.list_by_status(status), start, end)

    def create(self, values: Mapping[str, Any]) -> Purchase:
        """Create a purchase.

        Args:
            values: ``supplier_id`` and ``user_id`` (required), ``status``,
                ``purchased_on``, ``total``, ``discount``
        """
        data = self._mutate(CREATE_PURCHASE_MUTATION, {"input": self._purchase_input(values)})
        return self._transform_purchase(self._field(data, "createCompra"))

    def update(self, purchase_id: Any, values: Mapping[str, Any]) -> Purchase:
        variables = {"id": format_id(purchase_id), "input": self._purchase_input(values)}
        data = self._mutate(UPDATE_PURCHASE_MUTATION, variables)
        return self._transform_purchase(self._field(data, "updateCompra"))

    def delete(self, purchase_id: Any) -> None:
        data = self._mutate(DELETE_PURCHASE_MUTATION, {"id": format_id(purchase_id)})
        self._require_success(data, "deleteCompra", "delete", purchase_id)

    @staticmethod
    def _within(purchases: Iterable[Purchase], start: DateLike, end: DateLike) -> List[Purchase]:
        first = _to_date(start, "start")
        last = _to_date(end, "end")
        if first > last:
            raise ValidationError("'start' must not be after 'end'", {"start": str(first), "end": str(last)})
        return [p for p in purchases if p.purchased_on is not None and first <= p.purchased_on <= last]

    def _purchase_input(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        for key in ("supplier_id", "user_id"):
            if not values.get(key):
                raise ValidationError(f"'{key}' is required", {"field": key})
        return {
            "estado": values.get("status") or None,
            "fecha": format_date(values.get("purchased_on")),
            "importe_total": values.get("total"),
            "importe_descuento": values.get("discount"),
            "proveedor_id": str(values["supplier_id"]),
            "usuario_id": str(values["user_id"]),
        }

    def _transform_all(self, records: Iterable[Dict[str, Any]]) -> List[Purchase]:
        return [self._transform_purchase(item) for item in records]

    @staticmethod
    def _transform_purchase(raw: Dict[str, Any]) -> Purchase:
        raw_supplier = raw.get("proveedor")
        raw_user = raw.get("usuario")
        return Purchase(
            id=parse_id(raw.get("id")),
            status=text(raw.get("estado")),
            purchased_on=parse_date(raw.get("fecha")),
            total=number(raw.get("importe_total")),
            discount=number(raw.get("importe_descuento")),
            supplier=SupplierService._transform_supplier(raw_supplier) if raw_supplier else None,
            user=UserService._transform_user(raw_user) if raw_user else None,
        )
