"""Bearer-token gate applied to every outgoing request.

The gate decides per request whether a token is attached and reacts to
authentication failures on the way back. Rules, first match wins:

1. third-party upload hosts pass through untouched (no token, no inspection)
2. public auth endpoints go out without a token
3. with no token available the request goes out without one
4. otherwise ``Authorization: Bearer <token>`` is added

On a 401 from a non-public endpoint the session is torn down exactly once.
GraphQL 401s only do so when the body confirms an authentication failure.
The gate never retries and never swallows the response; the transport
still raises the classified error afterwards.

Two adapters plug the same decision logic into the HTTP libraries:
:class:`RequestsAuthGate` for ``requests`` sessions and
:class:`HttpxAuthGate` for ``httpx`` clients (sync and async).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Generator, MutableMapping, Optional, Sequence

import httpx
import requests
from requests.auth import AuthBase

from mrp_client.config import ClientConfig
from mrp_client.constants import (
    AUTH_ERROR_KEYWORDS,
    DEFAULT_PUBLIC_ENDPOINTS,
    DEFAULT_UPLOAD_MARKERS,
    GRAPHQL_PATH,
    UNAUTHENTICATED_CODE,
)
from mrp_client.normalizer import safe_json
from mrp_client.session import TokenSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateDecision:
    """Outcome of the per-request rules."""

    url: str
    bypass: bool = False
    public: bool = False
    is_graphql: bool = False
    token: Optional[str] = None


class AuthGate:
    """Library-independent token attachment and 401 handling."""

    def __init__(
        self,
        token_source: TokenSource,
        *,
        public_endpoints: Sequence[str] = DEFAULT_PUBLIC_ENDPOINTS,
        upload_markers: Sequence[str] = DEFAULT_UPLOAD_MARKERS,
        graphql_marker: str = GRAPHQL_PATH,
        unauthenticated_code: str = UNAUTHENTICATED_CODE,
    ) -> None:
        self.token_source = token_source
        self.public_endpoints = tuple(public_endpoints)
        self.upload_markers = tuple(upload_markers)
        self.graphql_marker = graphql_marker
        self.unauthenticated_code = unauthenticated_code

    @classmethod
    def from_config(cls, token_source: TokenSource, config: ClientConfig) -> "AuthGate":
        return cls(
            token_source,
            public_endpoints=config.public_endpoints,
            upload_markers=config.upload_markers,
        )

    def decide(self, url: str) -> GateDecision:
        if any(marker in url for marker in self.upload_markers):
            return GateDecision(url=url, bypass=True)

        is_graphql = self.graphql_marker in url
        if any(endpoint in url for endpoint in self.public_endpoints):
            return GateDecision(url=url, public=True, is_graphql=is_graphql)

        token = self.token_source.get()
        if is_graphql:
            logger.debug("GraphQL request to %s (has_token=%s)", url, bool(token))
        return GateDecision(url=url, is_graphql=is_graphql, token=token or None)

    def apply(self, headers: MutableMapping[str, str], decision: GateDecision) -> None:
        if decision.token:
            headers["Authorization"] = f"Bearer {decision.token}"

    def handle_response(self, decision: GateDecision, status_code: int, body: Any) -> bool:
        """Run the side effects for a response.

        Returns:
            True when the session was torn down.
        """
        if decision.bypass:
            return False

        errors = _body_errors(body)
        if status_code == 401 and not decision.public:
            logger.warning("401 Unauthorized from %s", decision.url)
            # GraphQL bodies must confirm the failure; a bare 401 always counts
            if decision.is_graphql and errors and not self._is_auth_failure(errors):
                return False
            self.token_source.on_unauthorized()
            return True

        if status_code >= 500:
            logger.error("Server error %d from %s", status_code, decision.url)
        elif status_code == 200 and decision.is_graphql and errors:
            logger.warning("GraphQL errors in 200 response from %s: %s", decision.url, errors)
        return False

    def _is_auth_failure(self, errors: Sequence[Any]) -> bool:
        for error in errors:
            if not isinstance(error, dict):
                continue
            message = str(error.get("message") or "").lower()
            if any(keyword in message for keyword in AUTH_ERROR_KEYWORDS):
                return True
            extensions = error.get("extensions")
            if isinstance(extensions, dict) and extensions.get("code") == self.unauthenticated_code:
                return True
        return False


def _body_errors(body: Any) -> Sequence[Any]:
    if isinstance(body, dict) and isinstance(body.get("errors"), list):
        return body["errors"]
    return ()


class RequestsAuthGate(AuthBase):
    """``requests`` auth hook driving an :class:`AuthGate`."""

    def __init__(self, gate: AuthGate) -> None:
        self.gate = gate

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        decision = self.gate.decide(request.url or "")
        if decision.bypass:
            return request
        self.gate.apply(request.headers, decision)
        request.register_hook("response", partial(self._on_response, decision))
        return request

    def _on_response(self, decision: GateDecision, response: requests.Response, *args, **kwargs) -> None:
        body = safe_json(response) if response.status_code >= 400 or decision.is_graphql else None
        self.gate.handle_response(decision, response.status_code, body)


class HttpxAuthGate(httpx.Auth):
    """``httpx`` auth flow driving an :class:`AuthGate`; usable by sync and async clients."""

    requires_response_body = True

    def __init__(self, gate: AuthGate) -> None:
        self.gate = gate

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        decision = self.gate.decide(str(request.url))
        if decision.bypass:
            yield request
            return
        self.gate.apply(request.headers, decision)
        response = yield request
        body = safe_json(response) if response.status_code >= 400 or decision.is_graphql else None
        self.gate.handle_response(decision, response.status_code, body)
