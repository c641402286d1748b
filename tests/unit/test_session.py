"""Session store and token source tests."""

from __future__ import annotations

import threading

import pytest

from mrp_client.constants import LOGIN_ROUTE
from mrp_client.exceptions import ValidationError
from mrp_client.session import EnvTokenSource, SessionStore, StaticTokenSource, TokenSource


def test_new_store_is_signed_out(session_store):
    assert session_store.get() is None
    assert session_store.is_authenticated is False
    assert session_store.current_user == {}


def test_set_session_exposes_token_and_user(session_store):
    session_store.set_session("abc", {"email": "ana@example.com", "rol": "ADMIN"})

    assert session_store.get() == "abc"
    assert session_store.is_authenticated is True
    assert session_store.current_user == {"email": "ana@example.com", "rol": "ADMIN"}


@pytest.mark.parametrize("token", ["", "   ", None])
def test_set_session_rejects_empty_token(session_store, token):
    with pytest.raises(ValidationError):
        session_store.set_session(token)


def test_current_user_is_a_copy(session_store):
    session_store.set_session("abc", {"email": "ana@example.com"})

    session_store.current_user["email"] = "changed"

    assert session_store.current_user["email"] == "ana@example.com"


def test_update_user_merges_fields(session_store):
    session_store.set_session("abc", {"email": "ana@example.com"})

    state = session_store.update_user(nombre="Ana")

    assert state.user == {"email": "ana@example.com", "nombre": "Ana"}
    assert state.token == "abc"


def test_on_unauthorized_clears_and_navigates_to_login(session_store, navigations):
    session_store.set_session("abc", {"email": "ana@example.com"})

    session_store.on_unauthorized()

    assert session_store.get() is None
    assert session_store.current_user == {}
    assert navigations == [LOGIN_ROUTE]


def test_custom_login_route():
    routes = []
    store = SessionStore(navigator=routes.append, login_route="/auth/signin")

    store.on_unauthorized()

    assert routes == ["/auth/signin"]


def test_on_unauthorized_without_navigator(caplog):
    store = SessionStore()
    store.set_session("abc")

    with caplog.at_level("WARNING", logger="mrp_client.session"):
        store.on_unauthorized()

    assert store.get() is None
    assert "Session cleared" in caplog.text


def test_listeners_receive_previous_state(session_store):
    seen = []
    session_store.subscribe(seen.append)
    session_store.set_session("abc", {"email": "ana@example.com"})

    session_store.clear()

    assert len(seen) == 1
    assert seen[0].token == "abc"


def test_unsubscribe_stops_notifications(session_store):
    seen = []
    unsubscribe = session_store.subscribe(seen.append)
    unsubscribe()

    session_store.clear()

    assert seen == []


def test_concurrent_teardown_leaves_store_signed_out(session_store, navigations):
    session_store.set_session("abc")
    threads = [threading.Thread(target=session_store.on_unauthorized) for _ in range(8)]

    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert session_store.get() is None
    assert navigations == [LOGIN_ROUTE] * 8


def test_static_token_source():
    assert StaticTokenSource(" abc ").get() == "abc"
    assert StaticTokenSource("").get() is None
    assert StaticTokenSource(None).get() is None


def test_env_token_source_reads_on_every_call(monkeypatch):
    source = EnvTokenSource()
    assert source.get() is None

    monkeypatch.setenv("MRP_ACCESS_TOKEN", "from-env")

    assert source.get() == "from-env"


def test_token_sources_satisfy_protocol(session_store):
    sources: list[TokenSource] = [session_store, StaticTokenSource("x"), EnvTokenSource()]

    for source in sources:
        assert callable(source.get)
        assert callable(source.on_unauthorized)


def test_failing_navigator_does_not_escape_teardown(caplog):
    def navigator(route):
        raise RuntimeError("router gone")

    store = SessionStore(navigator=navigator)
    store.set_session("abc")

    with caplog.at_level("ERROR", logger="mrp_client.session"):
        store.on_unauthorized()

    assert store.get() is None
    assert "Navigation to /login failed" in caplog.text


def test_failing_listener_does_not_block_others(session_store, navigations):
    seen = []

    def broken(state):
        raise RuntimeError("listener broke")

    session_store.subscribe(broken)
    session_store.subscribe(seen.append)
    session_store.set_session("abc")

    session_store.on_unauthorized()

    assert len(seen) == 1
    assert navigations == [LOGIN_ROUTE]
