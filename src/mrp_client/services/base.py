"""Shared plumbing for the entity services.

Each service sends hand-written GraphQL documents through a
:class:`~mrp_client.client.GraphQLClient` and turns the wire records into
domain dataclasses. GraphQL ``ID`` values travel as strings and come back
as ``int`` on the domain side.
"""

from __future__ import annotations

import datetime
import logging
from typing import Any, Dict, Mapping, Optional, Union

from mrp_client.client import GraphQLClient
from mrp_client.exceptions import GraphQLProtocolError, OperationFailedError, ValidationError

logger = logging.getLogger(__name__)


def parse_id(raw: Any) -> int:
    """Convert a GraphQL ``ID`` to ``int``."""
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise GraphQLProtocolError(f"Invalid record id: {raw!r}") from exc


def format_id(value: Any) -> str:
    """Convert a caller-supplied id to the GraphQL ``ID`` string."""
    if value is None or value == "":
        raise ValidationError("An id is required")
    return str(value)


def optional_id(value: Any) -> Optional[str]:
    return str(value) if value else None


def text(value: Any, default: str = "") -> str:
    return str(value) if value else default


def number(value: Any, default: float = 0) -> float:
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_date(raw: Any) -> Optional[datetime.date]:
    """Read the date part of a backend ``fecha`` (``YYYY-MM-DD`` or an ISO timestamp)."""
    if not raw:
        return None
    try:
        return datetime.date.fromisoformat(str(raw)[:10])
    except ValueError:
        logger.debug("Ignoring unparseable date %r", raw)
        return None


def format_date(value: Union[datetime.date, str, None]) -> Optional[str]:
    """Render a date for the wire as ``YYYY-MM-DD``; strings pass through unchanged."""
    if not value:
        return None
    if isinstance(value, datetime.datetime):
        value = value.date()
    if isinstance(value, datetime.date):
        return value.isoformat()
    return str(value)


class EntityService:
    """Base class holding the GraphQL client."""

    entity_name = "record"

    def __init__(self, client: GraphQLClient) -> None:
        self._client = client

    def _query(self, document: str, variables: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self._client.query(document, variables)

    def _mutate(self, document: str, variables: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self._client.mutate(document, variables)

    def _field(self, data: Mapping[str, Any], name: str) -> Any:
        """Return ``data[name]``, failing when the backend omitted a non-null result."""
        value = data.get(name)
        if value is None:
            raise GraphQLProtocolError(f"GraphQL response missing '{name}'")
        return value

    def _require_success(self, data: Mapping[str, Any], name: str, action: str, record_id: Any) -> None:
        """Raise when a boolean mutation such as ``deleteMaterial`` reported false."""
        if not data.get(name):
            raise OperationFailedError(
                f"Could not {action} {self.entity_name} {record_id}",
                {"mutation": name, "id": str(record_id)},
            )
        logger.info("%s %s: %s", action.capitalize(), self.entity_name, record_id)

    @staticmethod
    def _require_name(values: Mapping[str, Any], key: str = "name") -> str:
        name = values.get(key)
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(f"'{key}' is required", {"field": key})
        return name.strip()
