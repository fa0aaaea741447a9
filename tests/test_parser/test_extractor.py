"""Tests for ramlflat.parser.extractor."""

from __future__ import annotations

from typing import Any

import pytest

from ramlflat.exceptions import DocumentLoadError
from ramlflat.models import ApiDocument
from ramlflat.parser.extractor import extract_document
from ramlflat.parser.loader import parse_content


def _raml(text: str) -> dict[str, Any]:
    return parse_content(text)


class TestParsedTreeInput:
    """Documents that already carry a ``resources`` list are used as given."""

    def test_parsed_tree_validates(self, parsed_tree_raw: dict[str, Any]) -> None:
        document = extract_document(parsed_tree_raw)
        assert isinstance(document, ApiDocument)
        assert document.title == "Parsed Library"
        users = document.resources[0]
        assert users.relative_uri == "/users"
        assert users.uri_parameters == {"tenant": {"type": "string"}}
        assert users.resources[0].relative_uri == "/user-profile"

    def test_input_not_mutated(self, parsed_tree_raw: dict[str, Any]) -> None:
        before = repr(parsed_tree_raw)
        extract_document(parsed_tree_raw)
        assert repr(parsed_tree_raw) == before

    def test_bad_shape_raises(self) -> None:
        with pytest.raises(DocumentLoadError, match="expected shape"):
            extract_document({"resources": [{"methods": []}]})


class TestRawRamlInput:
    """Raw RAML mappings are rewritten into the resource-tree shape."""

    def test_resources_in_declaration_order(self) -> None:
        document = extract_document(_raml("#%RAML 0.8\ntitle: T\n/b:\n/a:\n/c:\n"))
        assert [r.relative_uri for r in document.resources] == ["/b", "/a", "/c"]

    def test_nested_resources_and_segments(self) -> None:
        raw = _raml("#%RAML 0.8\ntitle: T\n/users:\n  /{id}/posts:\n    get:\n")
        document = extract_document(raw)
        child = document.resources[0].resources[0]
        assert child.relative_uri == "/{id}/posts"
        assert child.model_extra["relativeUriPathSegments"] == ["{id}", "posts"]
        assert child.methods[0].method == "get"

    def test_methods_lowercased_and_ordered(self) -> None:
        raw = _raml("#%RAML 0.8\ntitle: T\n/x:\n  POST:\n  get:\n  delete:\n")
        document = extract_document(raw)
        assert [m.method for m in document.resources[0].methods] == ["post", "get", "delete"]

    def test_non_method_keys_kept_on_resource(self) -> None:
        raw = _raml(
            "#%RAML 0.8\ntitle: T\n/x:\n  displayName: Things\n"
            "  uriParameters:\n    x:\n      type: string\n"
        )
        resource = extract_document(raw).resources[0]
        assert resource.model_extra["displayName"] == "Things"
        assert resource.uri_parameters == {"x": {"type": "string"}}
        assert resource.methods == []

    def test_traits_mapping_becomes_list(self) -> None:
        raw = _raml("#%RAML 0.8\ntitle: T\ntraits:\n  a: {}\n  b:\n    x: 1\n")
        document = extract_document(raw)
        assert document.traits == [{"a": {}}, {"b": {"x": 1}}]

    def test_missing_declarations_default_to_empty(self) -> None:
        document = extract_document(_raml("#%RAML 0.8\ntitle: T\n"))
        assert document.traits == []
        assert document.schemas == []
        assert document.resources == []

    def test_string_trait_reference_wrapped(self) -> None:
        raw = _raml("#%RAML 0.8\ntitle: T\n/x:\n  get:\n    is: secured\n")
        method = extract_document(raw).resources[0].methods[0]
        assert method.is_ == ["secured"]

    def test_integer_status_codes_become_strings(self) -> None:
        raw = _raml(
            "#%RAML 0.8\ntitle: T\n/x:\n  get:\n    responses:\n      404:\n"
            "        description: gone\n"
        )
        method = extract_document(raw).resources[0].methods[0]
        assert method.responses == {"404": {"description": "gone"}}

    def test_numeric_version_coerced(self) -> None:
        document = extract_document(_raml("#%RAML 0.8\ntitle: T\nversion: 2\n"))
        assert document.version == "2"

    def test_scalar_resource_rejected(self) -> None:
        with pytest.raises(DocumentLoadError, match="must be a mapping"):
            extract_document(_raml("#%RAML 0.8\ntitle: T\n/x: 5\n"))

    def test_named_schema_resolved(self, library_raml_path) -> None:
        from ramlflat.parser.loader import load_document

        document = extract_document(load_document(str(library_raml_path)))
        post = document.resources[0].methods[1]
        entry = post.body["application/json"]
        assert entry.has_schema
        assert '"required": ["title"]' in entry.schema_
