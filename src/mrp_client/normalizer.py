"""Response normalization for GraphQL calls.

Turns either a transport failure or a decoded response envelope into one
outcome: the unwrapped ``data`` mapping, or a single classified exception.

Precedence:
    1. transport failure (non-2xx status or no response) -> TransportError subclass
    2. non-empty ``errors`` array, even next to ``data``  -> GraphQLResponseError
    3. ``data`` absent or null                            -> EmptyResponseError
    4. otherwise ``data`` is returned unchanged
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from mrp_client.envelope import OperationError, ResponseEnvelope, parse_errors
from mrp_client.exceptions import (
    ConnectivityError,
    EmptyResponseError,
    ForbiddenError,
    GraphQLProtocolError,
    GraphQLResponseError,
    HTTPStatusError,
    ServerError,
    TransportError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

CONNECTIVITY_MESSAGE = "Connection error. Check that the server is available."
UNAUTHORIZED_MESSAGE = "Unauthorized. Please log in again."
FORBIDDEN_MESSAGE = "Access denied. You do not have permission for this operation."
SERVER_ERROR_MESSAGE = "Server error. Please try again later."


def format_operation_errors(errors: Iterable[OperationError]) -> str:
    """Combine GraphQL errors into one message.

    Each entry becomes ``[CODE] message (path: a.b.0)`` with the code and
    path parts present only when the server supplied them.
    """
    messages = []
    for error in errors:
        message = error.message
        if error.code:
            message = f"[{error.code}] {message}"
        if error.path:
            message = f"{message} (path: {'.'.join(str(part) for part in error.path)})"
        messages.append(message)
    return "; ".join(messages)


def classify_transport_failure(
    status_code: int,
    message: str = "",
    body: Any = None,
    *,
    url: Optional[str] = None,
) -> TransportError:
    """Build the error for a failed HTTP exchange.

    The 0/401/403/5xx classes use fixed messages so they stay recognisable.
    Any other status reports the body's GraphQL errors when the server sent
    some, and the HTTP reason otherwise.
    """
    errors = parse_errors(body.get("errors")) if isinstance(body, dict) else ()
    context = {"url": url} if url else {}

    if status_code == 0:
        return ConnectivityError(CONNECTIVITY_MESSAGE, status_code=0, context=context)
    if status_code == 401:
        return UnauthorizedError(UNAUTHORIZED_MESSAGE, status_code=401, errors=errors, context=context)
    if status_code == 403:
        return ForbiddenError(FORBIDDEN_MESSAGE, status_code=403, errors=errors, context=context)
    if status_code >= 500:
        return ServerError(SERVER_ERROR_MESSAGE, status_code=status_code, errors=errors, context=context)

    detail = format_operation_errors(errors) if errors else (message or "Request failed")
    return HTTPStatusError(f"HTTP {status_code}: {detail}", status_code=status_code, errors=errors, context=context)


def normalize_response(envelope: ResponseEnvelope) -> Dict[str, Any]:
    """Unwrap a 2xx response envelope or raise the application-level error."""
    if envelope.errors:
        logger.warning("GraphQL errors in response: %s", [error.message for error in envelope.errors])
        raise GraphQLResponseError(
            format_operation_errors(envelope.errors),
            errors=envelope.errors,
            partial_data=envelope.data,
        )

    if envelope.data is None:
        logger.warning("GraphQL response contained no data")
        raise EmptyResponseError()

    return envelope.data


def normalize_http_response(
    status_code: int,
    body: Any,
    reason: str = "",
    *,
    url: Optional[str] = None,
) -> Dict[str, Any]:
    """Normalize a completed HTTP exchange.

    Args:
        status_code: HTTP status of the response
        body: Decoded JSON body, ``None`` when the body was not JSON
        reason: HTTP reason phrase, used for generic status errors
        url: Endpoint, recorded in the error context
    """
    if not 200 <= status_code < 300:
        error = classify_transport_failure(status_code, reason, body, url=url)
        if status_code >= 500:
            logger.error("GraphQL HTTP %d from %s", status_code, url)
        else:
            logger.warning("GraphQL HTTP %d from %s", status_code, url)
        raise error

    if body is None:
        raise GraphQLProtocolError("GraphQL response body was not valid JSON", {"url": url})

    return normalize_response(ResponseEnvelope.from_json(body))


def safe_json(response: Any) -> Any:
    """Decode a ``requests`` or ``httpx`` response body, ``None`` if it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return None


def decode_body(response: Any) -> Any:
    """Like :func:`safe_json`, but an empty body decodes to ``{}`` (a response without data)."""
    if not (response.content or b"").strip():
        return {}
    return safe_json(response)
