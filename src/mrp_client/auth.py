"""REST authentication endpoints (login, register, logout).

Login and register are public endpoints: the Auth Gate sends them without a
token and a 401 from them never tears the session down. A successful login
stores the returned token in the :class:`~mrp_client.session.SessionStore`,
from where the GraphQL clients pick it up on their next request.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from mrp_client.auth_gate import AuthGate, RequestsAuthGate
from mrp_client.config import ClientConfig, get_client_config
from mrp_client.client import INVALID_URL_ERRORS, JSON_HEADERS
from mrp_client.exceptions import ConfigurationError, GraphQLProtocolError, ValidationError
from mrp_client.normalizer import classify_transport_failure, safe_json
from mrp_client.session import SessionState, SessionStore
from mrp_client.utils import api_url

logger = logging.getLogger(__name__)

LOGIN_PATH = "auth/login"
REGISTER_PATH = "auth/register"


class AuthClient:
    """Session lifecycle against the backend's REST auth endpoints."""

    def __init__(
        self,
        store: SessionStore,
        base_url: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        config: Optional[ClientConfig] = None,
    ) -> None:
        config = config or get_client_config()
        self.store = store
        self._base_url = base_url or config.api_url
        self._timeout = timeout if timeout is not None else config.timeout
        self._session = session or requests.Session()
        self._auth = RequestsAuthGate(AuthGate.from_config(store, config))

    def login(self, email: str, password: str) -> SessionState:
        """Authenticate and store the returned token.

        Returns:
            The new session state.

        Raises:
            ValidationError: if email or password is empty
            TransportError: classified HTTP failure (bad credentials surface as 401)
            GraphQLProtocolError: if the reply carries no token
        """
        if not email or not password:
            raise ValidationError("Email and password are required to log in")

        body = self._post(LOGIN_PATH, {"email": email, "password": password})
        token = body.get("token") if isinstance(body, dict) else None
        if not isinstance(token, str) or not token.strip():
            raise GraphQLProtocolError("Login response did not include a token")

        user = {key: value for key, value in body.items() if key != "token"}
        state = self.store.set_session(token, user)
        logger.info("Logged in as %s", email)
        return state

    def register(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Create an account; returns the backend's reply unchanged."""
        if not payload:
            raise ValidationError("Registration payload cannot be empty")
        body = self._post(REGISTER_PATH, dict(payload))
        return body if isinstance(body, dict) else {}

    def logout(self) -> None:
        """Forget the local session; the backend keeps no server-side session."""
        self.store.clear()
        logger.info("Logged out")

    def _post(self, path: str, payload: Dict[str, Any]) -> Any:
        url = api_url(self._base_url, path)
        try:
            response = self._session.post(
                url,
                json=payload,
                headers=JSON_HEADERS,
                auth=self._auth,
                timeout=self._timeout,
            )
        except INVALID_URL_ERRORS as exc:
            raise ConfigurationError(f"Invalid auth endpoint {url!r}: {exc}") from exc
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise classify_transport_failure(0, str(exc), url=url) from exc

        body = safe_json(response)
        if not response.ok:
            logger.warning("Auth request to %s failed with HTTP %d", url, response.status_code)
            raise classify_transport_failure(response.status_code, response.reason or "", body, url=url)
        return body
