"""Category queries and mutations."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from mrp_client.domain import Category, Subcategory
from mrp_client.services.base import EntityService, format_id, optional_id, parse_id, text

CATEGORY_FIELDS = """
    id
    nombre
    descripcion
    activo
    subCategoria {
      id
      nombre
      descripcion
    }
"""

LIST_CATEGORIES_QUERY = f"""
query {{
  getAllCategorias {{{CATEGORY_FIELDS}  }}
}}
"""

GET_CATEGORY_QUERY = f"""
query GetCategoria($id: ID!) {{
  getCategoriaById(id: $id) {{{CATEGORY_FIELDS}  }}
}}
"""

CATEGORY_BY_NAME_QUERY = f"""
query GetCategoriaByNombre($nombre: String!) {{
  getCategoriaByNombre(nombre: $nombre) {{{CATEGORY_FIELDS}  }}
}}
"""

CREATE_CATEGORY_MUTATION = f"""
mutation CreateCategoria($input: CategoriaInput!) {{
  createCategoria(input: $input) {{{CATEGORY_FIELDS}  }}
}}
"""

UPDATE_CATEGORY_MUTATION = f"""
mutation UpdateCategoria($id: ID!, $input: CategoriaInput!) {{
  updateCategoria(id: $id, input: $input) {{{CATEGORY_FIELDS}  }}
}}
"""

DELETE_CATEGORY_MUTATION = """
mutation DeleteCategoria($id: ID!) {
  deleteCategoria(id: $id)
}
"""


class CategoryService(EntityService):
    entity_name = "category"

    def list(self) -> List[Category]:
        data = self._query(LIST_CATEGORIES_QUERY)
        return [self._transform_category(item) for item in self._field(data, "getAllCategorias")]

    def get(self, category_id: Any) -> Category:
        data = self._query(GET_CATEGORY_QUERY, {"id": format_id(category_id)})
        return self._transform_category(self._field(data, "getCategoriaById"))

    def create(self, values: Mapping[str, Any]) -> Category:
        data = self._mutate(CREATE_CATEGORY_MUTATION, {"input": self._category_input(values)})
        return self._transform_category(self._field(data, "createCategoria"))

    def update(self, category_id: Any, values: Mapping[str, Any]) -> Category:
        variables = {"id": format_id(category_id), "input": self._category_input(values)}
        data = self._mutate(UPDATE_CATEGORY_MUTATION, variables)
        return self._transform_category(self._field(data, "updateCategoria"))

    def delete(self, category_id: Any) -> None:
        data = self._mutate(DELETE_CATEGORY_MUTATION, {"id": format_id(category_id)})
        self._require_success(data, "deleteCategoria", "delete", category_id)

    def find_by_name(self, name: str) -> Optional[Category]:
        """Exact-name lookup; ``None`` when no category has that name."""
        data = self._query(CATEGORY_BY_NAME_QUERY, {"nombre": name})
        record = data.get("getCategoriaByNombre")
        return self._transform_category(record) if record else None

    def _category_input(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "nombre": self._require_name(values),
            "descripcion": values.get("description") or None,
            "subCategoriaId": optional_id(values.get("subcategory_id")),
        }

    @staticmethod
    def _transform_category(raw: Dict[str, Any]) -> Category:
        subcategory = None
        raw_subcategory = raw.get("subCategoria")
        if raw_subcategory:
            subcategory = Subcategory(
                id=parse_id(raw_subcategory.get("id")),
                name=text(raw_subcategory.get("nombre")),
                description=text(raw_subcategory.get("descripcion")),
            )
        return Category(
            id=parse_id(raw.get("id")),
            name=text(raw.get("nombre")),
            description=text(raw.get("descripcion")),
            active=bool(raw.get("activo", True)),
            subcategory=subcategory,
        )
