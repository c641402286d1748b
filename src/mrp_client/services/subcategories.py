"""Subcategory queries and mutations."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from mrp_client.domain import Category, Subcategory
from mrp_client.services.base import EntityService, format_id, parse_id, text
from mrp_client.services.categories import CATEGORY_FIELDS, CategoryService

SUBCATEGORY_FIELDS = """
    id
    nombre
    descripcion
"""

LIST_SUBCATEGORIES_QUERY = f"""
query {{
  getAllSubCategorias {{{SUBCATEGORY_FIELDS}  }}
}}
"""

GET_SUBCATEGORY_QUERY = f"""
query GetSubCategoria($id: ID!) {{
  getSubCategoriaById(id: $id) {{{SUBCATEGORY_FIELDS}  }}
}}
"""

CREATE_SUBCATEGORY_MUTATION = f"""
mutation CreateSubCategoria($input: SubCategoriaInput!) {{
  createSubCategoria(input: $input) {{{SUBCATEGORY_FIELDS}  }}
}}
"""

UPDATE_SUBCATEGORY_MUTATION = f"""
mutation UpdateSubCategoria($id: ID!, $input: SubCategoriaInput!) {{
  updateSubCategoria(id: $id, input: $input) {{{SUBCATEGORY_FIELDS}  }}
}}
"""

DELETE_SUBCATEGORY_MUTATION = """
mutation DeleteSubCategoria($id: ID!) {
  deleteSubCategoria(id: $id)
}
"""

CATEGORIES_BY_SUBCATEGORY_QUERY = f"""
query GetCategoriasBySubCategoria($subCategoriaId: ID!) {{
  getCategoriasBySubCategoria(subCategoriaId: $subCategoriaId) {{{CATEGORY_FIELDS}  }}
}}
"""


class SubcategoryService(EntityService):
    entity_name = "subcategory"

    def list(self) -> List[Subcategory]:
        data = self._query(LIST_SUBCATEGORIES_QUERY)
        return [self._transform_subcategory(item) for item in self._field(data, "getAllSubCategorias")]

    def get(self, subcategory_id: Any) -> Subcategory:
        data = self._query(GET_SUBCATEGORY_QUERY, {"id": format_id(subcategory_id)})
        return self._transform_subcategory(self._field(data, "getSubCategoriaById"))

    def create(self, values: Mapping[str, Any]) -> Subcategory:
        data = self._mutate(CREATE_SUBCATEGORY_MUTATION, {"input": self._subcategory_input(values)})
        return self._transform_subcategory(self._field(data, "createSubCategoria"))

    def update(self, subcategory_id: Any, values: Mapping[str, Any]) -> Subcategory:
        variables = {"id": format_id(subcategory_id), "input": self._subcategory_input(values)}
        data = self._mutate(UPDATE_SUBCATEGORY_MUTATION, variables)
        return self._transform_subcategory(self._field(data, "updateSubCategoria"))

    def delete(self, subcategory_id: Any) -> None:
        data = self._mutate(DELETE_SUBCATEGORY_MUTATION, {"id": format_id(subcategory_id)})
        self._require_success(data, "deleteSubCategoria", "delete", subcategory_id)

    def list_categories(self, subcategory_id: Any) -> List[Category]:
        """Categories filed under the given subcategory."""
        data = self._query(CATEGORIES_BY_SUBCATEGORY_QUERY, {"subCategoriaId": format_id(subcategory_id)})
        return [
            CategoryService._transform_category(item) for item in self._field(data, "getCategoriasBySubCategoria")
        ]

    def _subcategory_input(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "nombre": self._require_name(values),
            "descripcion": values.get("description") or None,
        }

    @staticmethod
    def _transform_subcategory(raw: Dict[str, Any]) -> Subcategory:
        return Subcategory(
            id=parse_id(raw.get("id")),
            name=text(raw.get("nombre")),
            description=text(raw.get("descripcion")),
        )
