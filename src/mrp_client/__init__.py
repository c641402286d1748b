"""MRP client: GraphQL transport, auth gate and entity services for the carpentry MRP backend."""

from mrp_client.auth import AuthClient
from mrp_client.auth_gate import AuthGate, GateDecision, HttpxAuthGate, RequestsAuthGate
from mrp_client.client import AsyncGraphQLClient, GraphQLClient
from mrp_client.config import ClientConfig, get_client_config, reset_client_config
from mrp_client.envelope import OperationEnvelope, OperationError, ResponseEnvelope, build_operation
from mrp_client.exceptions import (
    ConfigurationError,
    ConnectivityError,
    EmptyResponseError,
    ForbiddenError,
    GraphQLProtocolError,
    GraphQLResponseError,
    HTTPStatusError,
    MrpClientError,
    OperationFailedError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from mrp_client.normalizer import classify_transport_failure, format_operation_errors, normalize_response
from mrp_client.session import EnvTokenSource, SessionState, SessionStore, StaticTokenSource, TokenSource

__version__ = "0.1.0"

__all__ = [
    "AsyncGraphQLClient",
    "AuthClient",
    "AuthGate",
    "ClientConfig",
    "ConfigurationError",
    "ConnectivityError",
    "EmptyResponseError",
    "EnvTokenSource",
    "ForbiddenError",
    "GateDecision",
    "GraphQLClient",
    "GraphQLProtocolError",
    "GraphQLResponseError",
    "HTTPStatusError",
    "HttpxAuthGate",
    "MrpClientError",
    "OperationEnvelope",
    "OperationError",
    "OperationFailedError",
    "RequestsAuthGate",
    "ResponseEnvelope",
    "ServerError",
    "SessionState",
    "SessionStore",
    "StaticTokenSource",
    "TokenSource",
    "TransportError",
    "UnauthorizedError",
    "ValidationError",
    "build_operation",
    "classify_transport_failure",
    "format_operation_errors",
    "get_client_config",
    "normalize_response",
    "reset_client_config",
]
