"""Role queries and mutations."""

from __future__ import annotations

from typing import Any, Dict, List

from mrp_client.domain import Role
from mrp_client.exceptions import ValidationError
from mrp_client.services.base import EntityService, format_id, parse_id, text

LIST_ROLES_QUERY = """
query {
  getAllRoles {
    id
    nombre
  }
}
"""

GET_ROLE_QUERY = """
query GetRole($id: ID!) {
  getRoleById(id: $id) {
    id
    nombre
  }
}
"""

CREATE_ROLE_MUTATION = """
mutation CreateRole($input: RolInput!) {
  createRole(input: $input) {
    id
    nombre
  }
}
"""

UPDATE_ROLE_MUTATION = """
mutation UpdateRole($id: ID!, $input: RolInput!) {
  updateRole(id: $id, input: $input) {
    id
    nombre
  }
}
"""

DELETE_ROLE_MUTATION = """
mutation DeleteRole($id: ID!) {
  deleteRole(id: $id)
}
"""


class RoleService(EntityService):
    entity_name = "role"

    def list(self) -> List[Role]:
        data = self._query(LIST_ROLES_QUERY)
        return [self._transform_role(item) for item in self._field(data, "getAllRoles")]

    def get(self, role_id: Any) -> Role:
        data = self._query(GET_ROLE_QUERY, {"id": format_id(role_id)})
        return self._transform_role(self._field(data, "getRoleById"))

    def create(self, name: str) -> Role:
        data = self._mutate(CREATE_ROLE_MUTATION, {"input": self._role_input(name)})
        return self._transform_role(self._field(data, "createRole"))

    def update(self, role_id: Any, name: str) -> Role:
        variables = {"id": format_id(role_id), "input": self._role_input(name)}
        data = self._mutate(UPDATE_ROLE_MUTATION, variables)
        return self._transform_role(self._field(data, "updateRole"))

    def delete(self, role_id: Any) -> None:
        data = self._mutate(DELETE_ROLE_MUTATION, {"id": format_id(role_id)})
        self._require_success(data, "deleteRole", "delete", role_id)

    @staticmethod
    def _role_input(name: str) -> Dict[str, Any]:
        if not name or not name.strip():
            raise ValidationError("Role name is required", {"field": "name"})
        # RolInput.permisos is required by the schema; permissions are assigned server-side
        return {"nombre": name.strip(), "permisos": []}

    @staticmethod
    def _transform_role(raw: Dict[str, Any]) -> Role:
        return Role(id=parse_id(raw.get("id")), name=text(raw.get("nombre")))
