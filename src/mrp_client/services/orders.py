"""Sales order queries and mutations."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from mrp_client.domain import Order, OrderLine, PaymentMethod
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
from mrp_client.services.users import UserService

ORDER_FIELDS = """
    id
    fecha
    descripcion
    importe_total
    importe_total_desc
    estado
    usuario {
      id
      nombre
      apellido
      email
    }
    metodo_pago {
      id
      nombre
      descripcion
    }
    detalle_pedidos {
      id
      cantidad
      Estado
      importe_Total
      importe_Total_Desc
      precioUnitario
      producto {
        id
        nombre
      }
    }
"""

LIST_ORDERS_QUERY = f"""
query {{
  getAllPedidos {{{ORDER_FIELDS}  }}
}}
"""

GET_ORDER_QUERY = f"""
query GetPedido($id: ID!) {{
  getPedidoById(id: $id) {{{ORDER_FIELDS}  }}
}}
"""

ORDERS_BY_STATUS_QUERY = f"""
query GetPedidosByEstado($estado: Boolean!) {{
  getPedidosByEstado(estado: $estado) {{{ORDER_FIELDS}  }}
}}
"""

CREATE_ORDER_MUTATION = f"""
mutation CreatePedido($input: PedidoInput!) {{
  createPedido(input: $input) {{{ORDER_FIELDS}  }}
}}
"""

UPDATE_ORDER_MUTATION = f"""
mutation UpdatePedido($id: ID!, $input: PedidoInput!) {{
  updatePedido(id: $id, input: $input) {{{ORDER_FIELDS}  }}
}}
"""

DELETE_ORDER_MUTATION = """
mutation DeletePedido($id: ID!) {
  deletePedido(id: $id)
}
"""

SET_ORDER_STATUS_MUTATION = f"""
mutation CambiarEstadoPedido($id: ID!, $estado: Boolean!) {{
  cambiarEstadoPedido(id: $id, estado: $estado) {{{ORDER_FIELDS}  }}
}}
"""


class OrderService(EntityService):
    """Customer orders and their product lines.

    ``completed`` mirrors the backend's boolean ``estado``: ``False`` while
    the order is pending, ``True`` once it has been finalized.
    """

    entity_name = "order"

    def list(self) -> List[Order]:
        data = self._query(LIST_ORDERS_QUERY)
        return [self._transform_order(item) for item in self._field(data, "getAllPedidos")]

    def get(self, order_id: Any) -> Order:
        data = self._query(GET_ORDER_QUERY, {"id": format_id(order_id)})
        return self._transform_order(self._field(data, "getPedidoById"))

    def list_by_status(self, completed: bool) -> List[Order]:
        data = self._query(ORDERS_BY_STATUS_QUERY, {"estado": bool(completed)})
        return [self._transform_order(item) for item in self._field(data, "getPedidosByEstado")]

    def create(self, values: Mapping[str, Any]) -> Order:
        """Create an order.

        Args:
            values: ``payment_method_id`` (required), ``placed_on``, ``description``,
                ``total``, ``discounted_total``, ``completed``, ``user_id``
        """
        data = self._mutate(CREATE_ORDER_MUTATION, {"input": self._order_input(values)})
        return self._transform_order(self._field(data, "createPedido"))

    def update(self, order_id: Any, values: Mapping[str, Any]) -> Order:
        variables = {"id": format_id(order_id), "input": self._order_input(values)}
        data = self._mutate(UPDATE_ORDER_MUTATION, variables)
        return self._transform_order(self._field(data, "updatePedido"))

    def delete(self, order_id: Any) -> None:
        data = self._mutate(DELETE_ORDER_MUTATION, {"id": format_id(order_id)})
        self._require_success(data, "deletePedido", "delete", order_id)

    def set_status(self, order_id: Any, completed: bool) -> Order:
        variables = {"id": format_id(order_id), "estado": bool(completed)}
        data = self._mutate(SET_ORDER_STATUS_MUTATION, variables)
        return self._transform_order(self._field(data, "cambiarEstadoPedido"))

    def complete(self, order_id: Any) -> Order:
        return self.set_status(order_id, True)

    def list_lines(self, order_id: Any) -> List[OrderLine]:
        return list(self.get(order_id).lines)

    def _order_input(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        payment_method_id = values.get("payment_method_id")
        if not payment_method_id:
            raise ValidationError("'payment_method_id' is required", {"field": "payment_method_id"})
        completed = values.get("completed")
        return {
            "fecha": format_date(values.get("placed_on")),
            "descripcion": values.get("description") or None,
            "importe_total": values.get("total"),
            "importe_total_desc": values.get("discounted_total"),
            "estado": None if completed is None else bool(completed),
            "usuario_id": str(values.get("user_id") or 0),
            "metodo_pago_id": str(payment_method_id),
        }

    @staticmethod
    def _transform_order(raw: Dict[str, Any]) -> Order:
        raw_user = raw.get("usuario")
        raw_method = raw.get("metodo_pago")
        payment_method = None
        if raw_method:
            payment_method = PaymentMethod(
                id=parse_id(raw_method.get("id")),
                name=text(raw_method.get("nombre")),
                description=text(raw_method.get("descripcion")),
            )
        lines = tuple(OrderService._transform_line(item) for item in raw.get("detalle_pedidos") or ())
        return Order(
            id=parse_id(raw.get("id")),
            placed_on=parse_date(raw.get("fecha")),
            description=text(raw.get("descripcion")),
            total=number(raw.get("importe_total")),
            discounted_total=number(raw.get("importe_total_desc")),
            completed=bool(raw.get("estado")),
            user=UserService._transform_user(raw_user) if raw_user else None,
            payment_method=payment_method,
            lines=lines,
        )

    @staticmethod
    def _transform_line(raw: Dict[str, Any]) -> OrderLine:
        product = raw.get("producto") or {}
        return OrderLine(
            id=parse_id(raw.get("id")),
            quantity=number(raw.get("cantidad")),
            delivered=bool(raw.get("Estado")),
            total=number(raw.get("importe_Total")),
            discounted_total=number(raw.get("importe_Total_Desc")),
            unit_price=number(raw.get("precioUnitario")),
            product_id=int(number(product.get("id"))),
            product_name=text(product.get("nombre")),
        )
