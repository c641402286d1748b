"""User account queries and mutations.

``deleteUsuario`` deactivates the account on the backend (status and
availability go false) rather than removing the row; ``activarUsuario``
reverses it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from mrp_client.domain import Role, User
from mrp_client.exceptions import ValidationError
from mrp_client.services.base import EntityService, format_id, parse_id, text

USER_FIELDS = """
    id
    nombre
    apellido
    email
    telefono
    estado
    disponibilidad
    rol {
      id
      nombre
    }
"""

LIST_USERS_QUERY = f"""
query {{
  getAllUsuarios {{{USER_FIELDS}  }}
}}
"""

GET_USER_QUERY = f"""
query GetUsuario($id: ID!) {{
  getUsuarioById(id: $id) {{{USER_FIELDS}  }}
}}
"""

CREATE_USER_MUTATION = f"""
mutation CreateUsuario($input: UsuarioInput!) {{
  createUsuario(input: $input) {{{USER_FIELDS}  }}
}}
"""

UPDATE_USER_MUTATION = f"""
mutation UpdateUsuario($id: ID!, $input: UsuarioInput!) {{
  updateUsuario(id: $id, input: $input) {{{USER_FIELDS}  }}
}}
"""

DELETE_USER_MUTATION = """
mutation DeleteUsuario($id: ID!) {
  deleteUsuario(id: $id)
}
"""

ACTIVATE_USER_MUTATION = """
mutation ActivarUsuario($id: ID!) {
  activarUsuario(id: $id)
}
"""


class UserService(EntityService):
    entity_name = "user"

    def list(self) -> List[User]:
        data = self._query(LIST_USERS_QUERY)
        return [self._transform_user(item) for item in self._field(data, "getAllUsuarios")]

    def get(self, user_id: Any) -> User:
        data = self._query(GET_USER_QUERY, {"id": format_id(user_id)})
        return self._transform_user(self._field(data, "getUsuarioById"))

    def create(self, values: Mapping[str, Any]) -> User:
        """Create an account; ``password`` is required here."""
        if not values.get("password"):
            raise ValidationError("'password' is required", {"field": "password"})
        data = self._mutate(CREATE_USER_MUTATION, {"input": self._user_input(values)})
        return self._transform_user(self._field(data, "createUsuario"))

    def update(self, user_id: Any, values: Mapping[str, Any]) -> User:
        """Update an account; omit ``password`` to keep the current one."""
        variables = {"id": format_id(user_id), "input": self._user_input(values)}
        data = self._mutate(UPDATE_USER_MUTATION, variables)
        return self._transform_user(self._field(data, "updateUsuario"))

    def delete(self, user_id: Any) -> None:
        data = self._mutate(DELETE_USER_MUTATION, {"id": format_id(user_id)})
        self._require_success(data, "deleteUsuario", "deactivate", user_id)

    def activate(self, user_id: Any) -> None:
        data = self._mutate(ACTIVATE_USER_MUTATION, {"id": format_id(user_id)})
        self._require_success(data, "activarUsuario", "activate", user_id)

    def _user_input(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        role_id = values.get("role_id")
        if not role_id:
            raise ValidationError("'role_id' is required", {"field": "role_id"})
        email = values.get("email")
        if not email:
            raise ValidationError("'email' is required", {"field": "email"})
        return {
            "nombre": self._require_name(values, "first_name"),
            "apellido": values.get("last_name") or "",
            "email": email,
            "password": values.get("password") or None,
            "telefono": values.get("phone") or None,
            "rolid": str(role_id),
        }

    @staticmethod
    def _transform_user(raw: Dict[str, Any]) -> User:
        role = None
        raw_role = raw.get("rol")
        if raw_role:
            role = Role(id=parse_id(raw_role.get("id")), name=text(raw_role.get("nombre")))
        return User(
            id=parse_id(raw.get("id")),
            first_name=text(raw.get("nombre")),
            last_name=text(raw.get("apellido")),
            email=text(raw.get("email")),
            phone=text(raw.get("telefono")),
            active=bool(raw.get("estado", True)),
            available=bool(raw.get("disponibilidad", True)),
            role=role,
        )
