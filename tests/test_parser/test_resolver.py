"""Tests for ramlflat.parser.resolver."""

from __future__ import annotations

from typing import Any

from ramlflat.parser.resolver import resolve_schema_name, resolve_schema_refs


def _document(schema_value: Any, schemas: list[Any]) -> dict[str, Any]:
    return {
        "schemas": schemas,
        "resources": [
            {
                "relativeUri": "/things",
                "methods": [
                    {
                        "method": "post",
                        "body": {"application/json": {"schema": schema_value}},
                        "responses": {
                            "200": {"body": {"application/json": {"schema": schema_value}}}
                        },
                    }
                ],
                "resources": [
                    {
                        "relativeUri": "/child",
                        "methods": [
                            {
                                "method": "put",
                                "body": {"application/json": {"schema": schema_value}},
                            }
                        ],
                    }
                ],
            }
        ],
    }


class TestResolveSchemaRefs:
    def test_request_and_response_bodies_resolved(self) -> None:
        doc = _document("Thing", [{"Thing": '{"type": "object"}'}])
        result = resolve_schema_refs(doc)
        method = result["resources"][0]["methods"][0]
        assert method["body"]["application/json"]["schema"] == '{"type": "object"}'
        response_body = method["responses"]["200"]["body"]
        assert response_body["application/json"]["schema"] == '{"type": "object"}'

    def test_nested_resources_resolved(self) -> None:
        doc = _document("Thing", [{"Thing": '{"type": "object"}'}])
        result = resolve_schema_refs(doc)
        child_method = result["resources"][0]["resources"][0]["methods"][0]
        assert child_method["body"]["application/json"]["schema"] == '{"type": "object"}'

    def test_input_not_modified(self) -> None:
        doc = _document("Thing", [{"Thing": "{}"}])
        resolve_schema_refs(doc)
        assert doc["resources"][0]["methods"][0]["body"]["application/json"]["schema"] == "Thing"

    def test_unknown_name_left_alone(self) -> None:
        doc = _document("Other", [{"Thing": "{}"}])
        result = resolve_schema_refs(doc)
        body = result["resources"][0]["methods"][0]["body"]
        assert body["application/json"]["schema"] == "Other"

    def test_inline_schema_left_alone(self) -> None:
        doc = _document('{"type": "string"}', [{"Thing": "{}"}])
        result = resolve_schema_refs(doc)
        body = result["resources"][0]["methods"][0]["body"]
        assert body["application/json"]["schema"] == '{"type": "string"}'

    def test_no_declared_schemas(self) -> None:
        doc = _document("Thing", [])
        assert resolve_schema_refs(doc) == doc


class TestResolveSchemaName:
    def test_follows_chain(self) -> None:
        declared = {"A": "B", "B": "C", "C": "{}"}
        assert resolve_schema_name("A", declared) == "{}"

    def test_stops_on_cycle(self) -> None:
        declared = {"A": "B", "B": "A"}
        assert resolve_schema_name("A", declared) == "A"

    def test_non_string_returned_unchanged(self) -> None:
        assert resolve_schema_name({"type": "object"}, {"A": "{}"}) == {"type": "object"}
