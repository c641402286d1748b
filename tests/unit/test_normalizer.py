"""Response normalizer behaviour tests."""

from __future__ import annotations

import pytest

from mrp_client.envelope import OperationError, ResponseEnvelope
from mrp_client.exceptions import (
    ConnectivityError,
    EmptyResponseError,
    ForbiddenError,
    GraphQLProtocolError,
    GraphQLResponseError,
    HTTPStatusError,
    ServerError,
    UnauthorizedError,
)
from mrp_client.normalizer import (
    CONNECTIVITY_MESSAGE,
    FORBIDDEN_MESSAGE,
    SERVER_ERROR_MESSAGE,
    UNAUTHORIZED_MESSAGE,
    classify_transport_failure,
    format_operation_errors,
    normalize_http_response,
    normalize_response,
)


def test_success_returns_data_unchanged():
    data = normalize_response(ResponseEnvelope.from_json({"data": {"ping": True}}))

    assert data == {"ping": True}


def test_application_error_message_includes_code():
    envelope = ResponseEnvelope.from_json({"errors": [{"message": "Not found", "extensions": {"code": "NOT_FOUND"}}]})

    with pytest.raises(GraphQLResponseError) as exc_info:
        normalize_response(envelope)

    assert str(exc_info.value) == "[NOT_FOUND] Not found"
    assert exc_info.value.error_code == "GRAPHQL_ERROR"


def test_errors_win_over_partial_data():
    envelope = ResponseEnvelope.from_json(
        {"data": {"getAllMateriales": []}, "errors": [{"message": "Partial failure"}]}
    )

    with pytest.raises(GraphQLResponseError) as exc_info:
        normalize_response(envelope)

    assert exc_info.value.partial_data == {"getAllMateriales": []}


def test_empty_errors_array_is_not_a_failure():
    data = normalize_response(ResponseEnvelope.from_json({"data": {"ping": True}, "errors": []}))

    assert data == {"ping": True}


@pytest.mark.parametrize("body", [{}, {"data": None}, {"errors": []}])
def test_missing_data_raises_empty_response(body):
    with pytest.raises(EmptyResponseError):
        normalize_response(ResponseEnvelope.from_json(body))


def test_format_operation_errors_joins_code_message_and_path():
    message = format_operation_errors(
        [
            OperationError(message="Invalid name", path=("createMaterial", "input", 0), extensions={"code": "BAD_USER_INPUT"}),
            OperationError(message="Second"),
        ]
    )

    assert message == "[BAD_USER_INPUT] Invalid name (path: createMaterial.input.0); Second"


@pytest.mark.parametrize(
    "status, error_class, message",
    [
        (0, ConnectivityError, CONNECTIVITY_MESSAGE),
        (401, UnauthorizedError, UNAUTHORIZED_MESSAGE),
        (403, ForbiddenError, FORBIDDEN_MESSAGE),
        (500, ServerError, SERVER_ERROR_MESSAGE),
        (503, ServerError, SERVER_ERROR_MESSAGE),
    ],
)
def test_transport_failures_use_class_templates(status, error_class, message):
    error = classify_transport_failure(status, "whatever")

    assert isinstance(error, error_class)
    assert str(error) == message
    assert error.status_code == status


def test_connectivity_message_ignores_body():
    error = classify_transport_failure(0, "refused", {"errors": [{"message": "ignored"}]})

    assert str(error) == CONNECTIVITY_MESSAGE
    assert error.errors == ()


def test_other_status_reports_reason():
    error = classify_transport_failure(404, "Not Found")

    assert isinstance(error, HTTPStatusError)
    assert str(error) == "HTTP 404: Not Found"


def test_other_status_prefers_graphql_body_errors():
    body = {"errors": [{"message": "Variable $id is missing", "extensions": {"code": "BAD_USER_INPUT"}}]}

    error = classify_transport_failure(400, "Bad Request", body)

    assert str(error) == "HTTP 400: [BAD_USER_INPUT] Variable $id is missing"
    assert error.errors[0].code == "BAD_USER_INPUT"


def test_unauthorized_keeps_body_errors_for_callers():
    body = {"errors": [{"message": "Token expired", "extensions": {"code": "UNAUTHENTICATED"}}]}

    error = classify_transport_failure(401, "Unauthorized", body)

    assert str(error) == UNAUTHORIZED_MESSAGE
    assert error.errors[0].message == "Token expired"


def test_normalize_http_response_raises_transport_error_first():
    body = {"data": {"ping": True}}

    with pytest.raises(ForbiddenError):
        normalize_http_response(403, body, "Forbidden", url="http://mrp.test/mrp/graphql")


def test_normalize_http_response_rejects_non_json_success():
    with pytest.raises(GraphQLProtocolError):
        normalize_http_response(200, None, "OK")


def test_normalize_http_response_unwraps_data():
    assert normalize_http_response(200, {"data": {"ping": True}}) == {"ping": True}
