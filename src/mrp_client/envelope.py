"""GraphQL request and response envelopes.

An :class:`OperationEnvelope` is the JSON body posted to the GraphQL
endpoint; a :class:`ResponseEnvelope` is the decoded ``{data, errors}``
reply. Both are immutable and built fresh for every call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from mrp_client.exceptions import GraphQLProtocolError, ValidationError


@dataclass(frozen=True)
class OperationEnvelope:
    """Request body for one GraphQL operation."""

    query: str
    variables: Optional[Dict[str, Any]] = None
    operation_name: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON body, omitting absent optional members."""
        payload: Dict[str, Any] = {"query": self.query}
        if self.variables:
            payload["variables"] = dict(self.variables)
        if self.operation_name:
            payload["operationName"] = self.operation_name
        return payload


def build_operation(
    document: str,
    variables: Optional[Mapping[str, Any]] = None,
    operation_name: Optional[str] = None,
) -> OperationEnvelope:
    """Validate caller input and build a new envelope.

    Raises:
        ValidationError: if ``document`` is empty or ``variables`` is not a mapping
    """
    if not isinstance(document, str) or not document.strip():
        raise ValidationError("GraphQL document must be a non-empty string")
    if variables is not None and not isinstance(variables, Mapping):
        raise ValidationError(
            "GraphQL variables must be a mapping",
            {"type": type(variables).__name__},
        )
    if operation_name is not None and not isinstance(operation_name, str):
        raise ValidationError("operationName must be a string")

    return OperationEnvelope(
        query=document,
        variables=dict(variables) if variables else None,
        operation_name=operation_name or None,
    )


@dataclass(frozen=True)
class OperationError:
    """One entry of a GraphQL ``errors`` array."""

    message: str
    path: Tuple[Union[str, int], ...] = ()
    locations: Tuple[Dict[str, int], ...] = ()
    extensions: Dict[str, Any] = field(default_factory=dict)

    @property
    def code(self) -> Optional[str]:
        code = self.extensions.get("code")
        return str(code) if code else None

    @classmethod
    def from_dict(cls, raw: Any) -> "OperationError":
        if not isinstance(raw, Mapping):
            return cls(message=str(raw))

        message = raw.get("message")
        if not isinstance(message, str) or not message:
            message = "Unknown GraphQL error"

        path = raw.get("path") or ()
        locations = raw.get("locations") or ()
        extensions = raw.get("extensions") or {}
        return cls(
            message=message,
            path=tuple(path) if isinstance(path, (list, tuple)) else (),
            locations=tuple(loc for loc in locations if isinstance(loc, Mapping)),
            extensions=dict(extensions) if isinstance(extensions, Mapping) else {},
        )


def parse_errors(raw_errors: Any) -> Tuple[OperationError, ...]:
    """Parse an ``errors`` member; anything that is not a list yields no errors."""
    if not isinstance(raw_errors, list):
        return ()
    return tuple(OperationError.from_dict(item) for item in raw_errors)


@dataclass(frozen=True)
class ResponseEnvelope:
    """Decoded GraphQL response body."""

    data: Optional[Dict[str, Any]] = None
    errors: Tuple[OperationError, ...] = ()

    @classmethod
    def from_json(cls, body: Any) -> "ResponseEnvelope":
        if not isinstance(body, Mapping):
            raise GraphQLProtocolError(
                "GraphQL response was not a JSON object",
                {"type": type(body).__name__},
            )
        data = body.get("data")
        if data is not None and not isinstance(data, Mapping):
            raise GraphQLProtocolError("GraphQL 'data' member was not an object")
        return cls(
            data=dict(data) if data is not None else None,
            errors=parse_errors(body.get("errors")),
        )
