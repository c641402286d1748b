"""Auth Gate decision and 401 handling tests."""

from __future__ import annotations

import httpx
import pytest
import requests

from mrp_client.auth_gate import AuthGate, GateDecision, HttpxAuthGate, RequestsAuthGate
from mrp_client.config import ClientConfig
from tests.helpers import GRAPHQL_URL, RecordingTokenSource, fake_session

UPLOAD_URL = "https://api.cloudinary.com/v1_1/demo/image/upload"
LOGIN_URL = "http://mrp.test/mrp/auth/login"
REST_URL = "http://mrp.test/mrp/api/materiales"


@pytest.fixture
def gate(token_source: RecordingTokenSource) -> AuthGate:
    return AuthGate(token_source)


class TestDecide:
    def test_upload_endpoint_bypasses_even_with_token(self, gate):
        decision = gate.decide(UPLOAD_URL)

        assert decision.bypass is True
        assert decision.token is None

    def test_public_endpoint_gets_no_token(self, gate):
        decision = gate.decide(LOGIN_URL)

        assert decision.public is True
        assert decision.token is None

    def test_graphql_endpoint_gets_token(self, gate):
        decision = gate.decide(GRAPHQL_URL)

        assert decision.is_graphql is True
        assert decision.token == "token-123"

    def test_missing_token_passes_through(self):
        gate = AuthGate(RecordingTokenSource(token=None))

        decision = gate.decide(GRAPHQL_URL)

        assert decision.token is None
        assert decision.bypass is False

    def test_from_config_uses_configured_markers(self, token_source):
        config = ClientConfig(public_endpoints=("public/",), upload_markers=("uploads.example",))
        gate = AuthGate.from_config(token_source, config)

        assert gate.decide("https://uploads.example/x").bypass is True
        assert gate.decide("http://mrp.test/mrp/public/status").public is True
        assert gate.decide(LOGIN_URL).token == "token-123"


class TestApply:
    def test_adds_bearer_header(self, gate):
        headers = {}
        gate.apply(headers, GateDecision(url=GRAPHQL_URL, token="abc"))

        assert headers == {"Authorization": "Bearer abc"}

    @pytest.mark.parametrize("token", [None, ""])
    def test_never_sends_empty_bearer(self, gate, token):
        headers = {}
        gate.apply(headers, GateDecision(url=GRAPHQL_URL, token=token))

        assert "Authorization" not in headers


class TestHandleResponse:
    def test_rest_401_tears_down_once(self, gate, token_source):
        decision = gate.decide(REST_URL)

        assert gate.handle_response(decision, 401, None) is True
        assert token_source.unauthorized_calls == 1

    def test_public_401_does_not_tear_down(self, gate, token_source):
        decision = gate.decide(LOGIN_URL)

        assert gate.handle_response(decision, 401, {"message": "Bad credentials"}) is False
        assert token_source.unauthorized_calls == 0

    @pytest.mark.parametrize(
        "error",
        [
            {"message": "Unauthorized access"},
            {"message": "Full AUTHENTICATION is required"},
            {"message": "Token rejected", "extensions": {"code": "UNAUTHENTICATED"}},
        ],
    )
    def test_graphql_401_with_auth_error_tears_down(self, gate, token_source, error):
        decision = gate.decide(GRAPHQL_URL)

        assert gate.handle_response(decision, 401, {"errors": [error]}) is True
        assert token_source.unauthorized_calls == 1

    def test_graphql_401_with_unrelated_errors_keeps_session(self, gate, token_source):
        decision = gate.decide(GRAPHQL_URL)
        body = {"errors": [{"message": "Rate limit exceeded", "extensions": {"code": "THROTTLED"}}]}

        assert gate.handle_response(decision, 401, body) is False
        assert token_source.unauthorized_calls == 0

    def test_graphql_401_without_body_errors_tears_down(self, gate, token_source):
        decision = gate.decide(GRAPHQL_URL)

        assert gate.handle_response(decision, 401, None) is True
        assert token_source.unauthorized_calls == 1

    @pytest.mark.parametrize("status", [200, 403, 500])
    def test_other_statuses_have_no_side_effect(self, gate, token_source, status):
        decision = gate.decide(GRAPHQL_URL)

        assert gate.handle_response(decision, status, {"errors": [{"message": "Unauthorized"}]}) is False
        assert token_source.unauthorized_calls == 0

    def test_bypassed_request_never_tears_down(self, gate, token_source):
        decision = gate.decide(UPLOAD_URL)

        assert gate.handle_response(decision, 401, None) is False
        assert token_source.unauthorized_calls == 0


class TestRequestsAdapter:
    def test_upload_request_has_no_authorization(self, gate):
        session, adapter = fake_session(lambda request: (200, {"secure_url": "https://img"}))

        session.post(UPLOAD_URL, data={"file": "x"}, auth=RequestsAuthGate(gate))

        assert "Authorization" not in adapter.last_request.headers

    def test_token_attached_to_graphql_request(self, gate):
        session, adapter = fake_session(lambda request: (200, {"data": {}}))

        session.post(GRAPHQL_URL, json={"query": "{ ping }"}, auth=RequestsAuthGate(gate))

        assert adapter.last_request.headers["Authorization"] == "Bearer token-123"

    def test_401_hook_tears_down_and_returns_response(self, gate, token_source):
        session, _ = fake_session(lambda request: (401, {"error": "Unauthorized"}))

        response = session.get(REST_URL, auth=RequestsAuthGate(gate))

        assert response.status_code == 401
        assert token_source.unauthorized_calls == 1

    def test_upload_401_is_not_intercepted(self, gate, token_source):
        session, _ = fake_session(lambda request: (401, "denied"))

        session.post(UPLOAD_URL, auth=RequestsAuthGate(gate))

        assert token_source.unauthorized_calls == 0


class TestHttpxAdapter:
    def test_token_attached_and_401_handled(self, gate, token_source):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers.get("Authorization"))
            return httpx.Response(401, json={"errors": [{"message": "Unauthorized"}]})

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            response = client.post(GRAPHQL_URL, json={"query": "{ ping }"}, auth=HttpxAuthGate(gate))

        assert response.status_code == 401
        assert seen == ["Bearer token-123"]
        assert token_source.unauthorized_calls == 1

    def test_upload_request_untouched(self, gate):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers.get("Authorization"))
            return httpx.Response(200, json={})

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            client.post(UPLOAD_URL, content=b"file", auth=HttpxAuthGate(gate))

        assert seen == [None]


def test_requests_adapter_is_requests_auth(gate):
    assert isinstance(RequestsAuthGate(gate), requests.auth.AuthBase)
