"""REST login/register/logout tests."""

from __future__ import annotations

import pytest
import requests

from mrp_client.auth import AuthClient
from mrp_client.client import GraphQLClient
from mrp_client.exceptions import (
    ConnectivityError,
    GraphQLProtocolError,
    UnauthorizedError,
    ValidationError,
)
from tests.helpers import GRAPHQL_URL, fake_session

LOGIN_URL = "http://mrp.test/mrp/auth/login"


def _auth_client(responder, store, config):
    session, adapter = fake_session(responder)
    return AuthClient(store, session=session, config=config), adapter


def test_login_stores_token_and_user(session_store, config):
    reply = {"token": "jwt-abc", "email": "ana@example.com", "rol": "ADMIN"}
    auth, adapter = _auth_client(lambda request: (200, reply), session_store, config)

    state = auth.login("ana@example.com", "secret")

    assert state.token == "jwt-abc"
    assert session_store.get() == "jwt-abc"
    assert session_store.current_user == {"email": "ana@example.com", "rol": "ADMIN"}
    assert adapter.last_request.url == LOGIN_URL
    assert adapter.last_payload() == {"email": "ana@example.com", "password": "secret"}


def test_login_never_sends_existing_token(session_store, config):
    session_store.set_session("stale-token")
    auth, adapter = _auth_client(lambda request: (200, {"token": "fresh"}), session_store, config)

    auth.login("ana@example.com", "secret")

    assert "Authorization" not in adapter.last_request.headers


def test_bad_credentials_do_not_tear_down(session_store, navigations, config):
    session_store.set_session("existing")
    auth, _ = _auth_client(lambda request: (401, {"message": "Bad credentials"}), session_store, config)

    with pytest.raises(UnauthorizedError):
        auth.login("ana@example.com", "wrong")

    assert session_store.get() == "existing"
    assert navigations == []


@pytest.mark.parametrize("email, password", [("", "secret"), ("ana@example.com", "")])
def test_login_requires_credentials(session_store, config, email, password):
    auth, adapter = _auth_client(lambda request: (200, {"token": "x"}), session_store, config)

    with pytest.raises(ValidationError):
        auth.login(email, password)

    assert adapter.requests == []


@pytest.mark.parametrize("reply", [{"email": "ana@example.com"}, {"token": ""}, "plain text"])
def test_login_without_token_is_protocol_error(session_store, config, reply):
    auth, _ = _auth_client(lambda request: (200, reply), session_store, config)

    with pytest.raises(GraphQLProtocolError):
        auth.login("ana@example.com", "secret")

    assert session_store.get() is None


def test_login_connection_failure(session_store, config):
    auth, _ = _auth_client(lambda request: requests.ConnectionError("refused"), session_store, config)

    with pytest.raises(ConnectivityError):
        auth.login("ana@example.com", "secret")


def test_register_returns_reply(session_store, config):
    auth, adapter = _auth_client(lambda request: (200, {"id": 9, "email": "new@example.com"}), session_store, config)

    reply = auth.register({"email": "new@example.com", "password": "pw"})

    assert reply == {"id": 9, "email": "new@example.com"}
    assert adapter.last_request.url == "http://mrp.test/mrp/auth/register"


def test_register_rejects_empty_payload(session_store, config):
    auth, _ = _auth_client(lambda request: (200, {}), session_store, config)

    with pytest.raises(ValidationError):
        auth.register({})


def test_logout_clears_without_navigation(session_store, navigations, config):
    session_store.set_session("abc")
    auth, _ = _auth_client(lambda request: (200, {}), session_store, config)

    auth.logout()

    assert session_store.get() is None
    assert navigations == []


def test_login_token_flows_into_graphql_client(session_store, config):
    def responder(request):
        if request.url == LOGIN_URL:
            return 200, {"token": "jwt-abc"}
        return 200, {"data": {"ping": True}}

    session, adapter = fake_session(responder)
    AuthClient(session_store, session=session, config=config).login("ana@example.com", "secret")
    client = GraphQLClient(token_source=session_store, session=session, config=config)

    client.query("query { ping }")

    assert adapter.last_request.url == GRAPHQL_URL
    assert adapter.last_request.headers["Authorization"] == "Bearer jwt-abc"


def test_expired_token_on_graphql_logs_out(session_store, navigations, config):
    session_store.set_session("expired")
    body = {"errors": [{"message": "Unauthorized", "extensions": {"code": "UNAUTHENTICATED"}}]}
    session, _ = fake_session(lambda request: (401, body))
    client = GraphQLClient(token_source=session_store, session=session, config=config)

    with pytest.raises(UnauthorizedError):
        client.query("query { ping }")

    assert session_store.get() is None
    assert navigations == ["/login"]
