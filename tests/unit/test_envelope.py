"""Operation and response envelope tests."""

from __future__ import annotations

import pytest

from mrp_client.envelope import OperationError, ResponseEnvelope, build_operation, parse_errors
from mrp_client.exceptions import GraphQLProtocolError, ValidationError


def test_payload_contains_only_query_when_optional_members_absent():
    envelope = build_operation("query { ping }")

    assert envelope.to_payload() == {"query": "query { ping }"}


@pytest.mark.parametrize("variables", [None, {}])
def test_payload_omits_empty_variables(variables):
    payload = build_operation("query { ping }", variables).to_payload()

    assert "variables" not in payload
    assert "operationName" not in payload


def test_payload_includes_variables_and_operation_name():
    payload = build_operation(
        "query GetRole($id: ID!) { getRoleById(id: $id) { id } }",
        {"id": "7"},
        "GetRole",
    ).to_payload()

    assert payload["variables"] == {"id": "7"}
    assert payload["operationName"] == "GetRole"


def test_envelope_does_not_share_caller_variables():
    variables = {"id": "1"}
    envelope = build_operation("query { ping }", variables)

    variables["id"] = "2"

    assert envelope.to_payload()["variables"] == {"id": "1"}


@pytest.mark.parametrize("document", ["", "   ", None])
def test_empty_document_rejected(document):
    with pytest.raises(ValidationError):
        build_operation(document)


def test_non_mapping_variables_rejected():
    with pytest.raises(ValidationError):
        build_operation("query { ping }", ["id", "1"])


def test_operation_error_from_dict_keeps_code_and_path():
    error = OperationError.from_dict(
        {"message": "Not found", "path": ["getMaterialById", 0], "extensions": {"code": "NOT_FOUND"}}
    )

    assert error.message == "Not found"
    assert error.code == "NOT_FOUND"
    assert error.path == ("getMaterialById", 0)


def test_operation_error_tolerates_malformed_entries():
    errors = parse_errors([{"path": "oops"}, "boom"])

    assert errors[0].message == "Unknown GraphQL error"
    assert errors[0].path == ()
    assert errors[1].message == "boom"


def test_parse_errors_ignores_non_list():
    assert parse_errors(None) == ()
    assert parse_errors({"message": "x"}) == ()


def test_response_envelope_requires_object_body():
    with pytest.raises(GraphQLProtocolError):
        ResponseEnvelope.from_json(["not", "an", "object"])


def test_response_envelope_parses_data_and_errors():
    envelope = ResponseEnvelope.from_json({"data": {"ping": True}, "errors": [{"message": "partial"}]})

    assert envelope.data == {"ping": True}
    assert [error.message for error in envelope.errors] == ["partial"]
