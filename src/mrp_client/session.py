"""Session state and token sources.

The transports never own the bearer token. They read it through the narrow
:class:`TokenSource` capability on every request and report authentication
failures back through ``on_unauthorized``. :class:`SessionStore` is the
application-facing implementation: login stores the token, teardown clears
it and hands control to a navigator (e.g. a UI router redirecting to the
login screen).
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Protocol

from mrp_client.constants import ACCESS_TOKEN_ENV_VAR, LOGIN_ROUTE
from mrp_client.exceptions import ValidationError

logger = logging.getLogger(__name__)

Navigator = Callable[[str], None]
LogoutListener = Callable[["SessionState"], None]


class TokenSource(Protocol):
    """Runtime contract consumed by the Auth Gate and the transports."""

    def get(self) -> Optional[str]: ...

    def on_unauthorized(self) -> None: ...


@dataclass(frozen=True)
class SessionState:
    """Authentication details for the signed-in user."""

    token: Optional[str] = None
    user: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


class SessionStore:
    """Thread-safe holder of the current session.

    Args:
        navigator: Called with ``login_route`` after an unauthorized teardown
        login_route: Route handed to the navigator
    """

    def __init__(self, navigator: Optional[Navigator] = None, *, login_route: str = LOGIN_ROUTE) -> None:
        self._lock = threading.Lock()
        self._state = SessionState()
        self._navigator = navigator
        self._login_route = login_route
        self._listeners: List[LogoutListener] = []

    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._state

    @property
    def current_user(self) -> Dict[str, Any]:
        return dict(self.state.user)

    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated

    def get(self) -> Optional[str]:
        """Return the current bearer token, ``None`` when signed out."""
        token = self.state.token
        return token if token else None

    def set_session(self, token: str, user: Optional[Dict[str, Any]] = None) -> SessionState:
        token = (token or "").strip()
        if not token:
            raise ValidationError("A non-empty token is required to open a session")
        with self._lock:
            self._state = SessionState(token=token, user=dict(user or {}))
            return self._state

    def update_user(self, **updates: Any) -> SessionState:
        with self._lock:
            user = dict(self._state.user)
            user.update(updates)
            self._state = replace(self._state, user=user)
            return self._state

    def subscribe(self, listener: LogoutListener) -> Callable[[], None]:
        """Register a callback run with the previous state whenever the session is cleared.

        Returns:
            A function that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def clear(self) -> SessionState:
        """Drop token and user; returns the state that was cleared."""
        with self._lock:
            previous = self._state
            self._state = SessionState()
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(previous)
            except Exception:
                logger.exception("Logout listener %r failed", listener)
        return previous

    def on_unauthorized(self) -> None:
        """Tear the session down and redirect to the login route.

        Navigator and listener failures are logged, never raised.
        """
        previous = self.clear()
        logger.warning(
            "Session cleared after authentication failure (had_token=%s)",
            previous.is_authenticated,
        )
        if self._navigator is not None:
            try:
                self._navigator(self._login_route)
            except Exception:
                logger.exception("Navigation to %s failed after session teardown", self._login_route)


class StaticTokenSource:
    """Fixed token for scripts and tests."""

    def __init__(self, token: Optional[str]) -> None:
        self._token = token.strip() if token else None

    def get(self) -> Optional[str]:
        return self._token or None

    def on_unauthorized(self) -> None:
        logger.warning("Static token rejected by the server")


class EnvTokenSource:
    """Token read from an environment variable on every request."""

    def __init__(self, var_name: str = ACCESS_TOKEN_ENV_VAR) -> None:
        self.var_name = var_name

    def get(self) -> Optional[str]:
        token = os.getenv(self.var_name, "").strip()
        return token or None

    def on_unauthorized(self) -> None:
        logger.warning("Token from %s rejected by the server", self.var_name)
