"""GraphQL transport for the MRP backend.

:class:`GraphQLClient` posts operations with a ``requests`` session;
:class:`AsyncGraphQLClient` does the same on an ``httpx.AsyncClient`` for
callers running an event loop. ``query`` and ``mutate`` are identical on
the wire and exist for readability at call sites.

Example usage::

    client = GraphQLClient("http://localhost:8081/mrp/", token_source=store)
    roles = client.query("query { getAllRoles { id nombre } }")["getAllRoles"]

Every call is independent: no retry, caching or request deduplication.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx
import requests

from mrp_client.auth_gate import AuthGate, HttpxAuthGate, RequestsAuthGate
from mrp_client.config import ClientConfig, get_client_config
from mrp_client.constants import USER_AGENT
from mrp_client.envelope import OperationEnvelope, build_operation
from mrp_client.exceptions import ConfigurationError
from mrp_client.normalizer import classify_transport_failure, decode_body, normalize_http_response
from mrp_client.session import EnvTokenSource, TokenSource
from mrp_client.utils import graphql_endpoint

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
    "User-Agent": USER_AGENT,
}

# Raised by requests before any connection is attempted
INVALID_URL_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
)


class _GraphQLTransport:
    """Endpoint resolution and gate wiring shared by both clients."""

    def __init__(
        self,
        base_url: Optional[str],
        token_source: Optional[TokenSource],
        timeout: Optional[float],
        config: Optional[ClientConfig],
    ) -> None:
        config = config or get_client_config()
        self._endpoint = graphql_endpoint(base_url or config.api_url)
        self._timeout = timeout if timeout is not None else config.timeout
        self.token_source = token_source or EnvTokenSource()
        self.gate = AuthGate.from_config(self.token_source, config)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _log_dispatch(self, envelope: OperationEnvelope) -> None:
        logger.debug(
            "GraphQL request to %s (operation=%s, has_variables=%s)",
            self._endpoint,
            envelope.operation_name or envelope.query.strip()[:60],
            bool(envelope.variables),
        )


class GraphQLClient(_GraphQLTransport):
    """Blocking GraphQL client built on ``requests``.

    Args:
        base_url: API base URL, ``/graphql`` is appended; defaults to ``MRP_API_URL``
        token_source: Supplies the bearer token; defaults to ``MRP_ACCESS_TOKEN``
        session: Existing ``requests.Session`` to reuse
        timeout: Per-request timeout in seconds, ``None`` for the library default
        config: Explicit configuration instead of the environment
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        token_source: Optional[TokenSource] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        config: Optional[ClientConfig] = None,
    ) -> None:
        super().__init__(base_url, token_source, timeout, config)
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._auth = RequestsAuthGate(self.gate)

    def query(
        self,
        document: str,
        variables: Optional[Mapping[str, Any]] = None,
        operation_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Execute a GraphQL query and return its ``data`` mapping."""
        return self.execute(document, variables, operation_name)

    def mutate(
        self,
        document: str,
        variables: Optional[Mapping[str, Any]] = None,
        operation_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Execute a GraphQL mutation and return its ``data`` mapping."""
        return self.execute(document, variables, operation_name)

    def execute(
        self,
        document: str,
        variables: Optional[Mapping[str, Any]] = None,
        operation_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        envelope = build_operation(document, variables, operation_name)
        self._log_dispatch(envelope)

        try:
            response = self._session.post(
                self._endpoint,
                json=envelope.to_payload(),
                headers=JSON_HEADERS,
                auth=self._auth,
                timeout=self._timeout,
            )
        except INVALID_URL_ERRORS as exc:
            raise ConfigurationError(f"Invalid GraphQL endpoint {self._endpoint!r}: {exc}") from exc
        except (requests.ConnectionError, requests.Timeout) as exc:
            logger.warning("GraphQL request to %s failed before a response: %s", self._endpoint, exc)
            raise classify_transport_failure(0, str(exc), url=self._endpoint) from exc

        return normalize_http_response(
            response.status_code,
            decode_body(response),
            response.reason or "",
            url=self._endpoint,
        )

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "GraphQLClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class AsyncGraphQLClient(_GraphQLTransport):
    """Non-blocking GraphQL client built on ``httpx.AsyncClient``.

    Cancelling the awaiting task abandons the request; the client performs
    no cleanup of its own beyond what ``httpx`` does.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        token_source: Optional[TokenSource] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        config: Optional[ClientConfig] = None,
    ) -> None:
        super().__init__(base_url, token_source, timeout, config)
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout) if self._timeout is not None else httpx.AsyncClient()
        self._client = client
        self._auth = HttpxAuthGate(self.gate)

    async def query(
        self,
        document: str,
        variables: Optional[Mapping[str, Any]] = None,
        operation_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self.execute(document, variables, operation_name)

    async def mutate(
        self,
        document: str,
        variables: Optional[Mapping[str, Any]] = None,
        operation_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self.execute(document, variables, operation_name)

    async def execute(
        self,
        document: str,
        variables: Optional[Mapping[str, Any]] = None,
        operation_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        envelope = build_operation(document, variables, operation_name)
        self._log_dispatch(envelope)

        try:
            response = await self._client.post(
                self._endpoint,
                json=envelope.to_payload(),
                headers=JSON_HEADERS,
                auth=self._auth,
            )
        except httpx.UnsupportedProtocol as exc:
            raise ConfigurationError(f"Invalid GraphQL endpoint {self._endpoint!r}: {exc}") from exc
        except (httpx.NetworkError, httpx.TimeoutException) as exc:
            logger.warning("GraphQL request to %s failed before a response: %s", self._endpoint, exc)
            raise classify_transport_failure(0, str(exc), url=self._endpoint) from exc

        return normalize_http_response(
            response.status_code,
            decode_body(response),
            response.reason_phrase or "",
            url=self._endpoint,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncGraphQLClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
