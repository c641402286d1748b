"""Exception types for the MRP GraphQL client.

Every failure surfaced by the transport, the normalizer, and the entity
services derives from :class:`MrpClientError`. Each class carries a stable
``error_code`` so callers can branch on the failure class without parsing
the human-readable message, and a ``context`` dictionary with debugging
details (status code, endpoint, raw GraphQL errors).
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence


class MrpClientError(RuntimeError):
    """Base exception for MRP client errors."""

    def __init__(
        self,
        message: str,
        *,
        error_code: str = "mrp_client_error",
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}


class ConfigurationError(MrpClientError):
    """Raised when the client is constructed with unusable settings."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, error_code="CONFIGURATION_ERROR", context=context)


class ValidationError(MrpClientError):
    """Raised when caller input is rejected before anything is sent."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, error_code="VALIDATION_ERROR", context=context)


# ============================================================================
# Transport-level failures
# ============================================================================


class TransportError(MrpClientError):
    """HTTP-layer failure: non-2xx status or unreachable server.

    Attributes:
        status_code: HTTP status, ``0`` when no response was received.
        errors: GraphQL errors parsed from the response body, if any.
    """

    error_code_for_class = "HTTP_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        errors: Sequence[Any] = (),
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        merged = {"status_code": status_code}
        merged.update(context or {})
        super().__init__(message, error_code=self.error_code_for_class, context=merged)
        self.status_code = status_code
        self.errors = tuple(errors)


class ConnectivityError(TransportError):
    """No response was received (status 0)."""

    error_code_for_class = "CONNECTIVITY_ERROR"


class UnauthorizedError(TransportError):
    """The server answered 401."""

    error_code_for_class = "UNAUTHORIZED"


class ForbiddenError(TransportError):
    """The server answered 403."""

    error_code_for_class = "FORBIDDEN"


class ServerError(TransportError):
    """The server answered with a 5xx status."""

    error_code_for_class = "SERVER_ERROR"


class HTTPStatusError(TransportError):
    """Any other non-2xx status."""

    error_code_for_class = "HTTP_ERROR"


# ============================================================================
# Application-level (GraphQL) failures
# ============================================================================


class GraphQLResponseError(MrpClientError):
    """A 2xx response whose ``errors`` array is present and non-empty.

    Attributes:
        errors: Parsed :class:`~mrp_client.envelope.OperationError` entries.
        partial_data: The ``data`` member delivered alongside the errors, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        errors: Sequence[Any] = (),
        partial_data: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, error_code="GRAPHQL_ERROR", context={"error_count": len(errors)})
        self.errors = tuple(errors)
        self.partial_data = partial_data


class EmptyResponseError(MrpClientError):
    """A 2xx response with neither errors nor data."""

    def __init__(self, message: str = "GraphQL response contained no data") -> None:
        super().__init__(message, error_code="EMPTY_RESPONSE")


class GraphQLProtocolError(MrpClientError):
    """The response body is not a GraphQL response envelope."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, error_code="PROTOCOL_ERROR", context=context)


class OperationFailedError(MrpClientError):
    """A mutation reported failure in its payload (e.g. ``delete`` returned false)."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, error_code="OPERATION_FAILED", context=context)
