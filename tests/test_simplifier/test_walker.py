"""Tests for ramlflat.simplifier.walker -- the recursive tree walk.

Covers:
- URI composition down a three-level chain
- Names, methods and responses on every node
- URI parameter accumulation (traversal and branch scopes)
- Accumulator reset between top-level resources
- Error index gathered over the whole document
- A structural fault aborting the walk
"""

from __future__ import annotations

import logging
from typing import Any

import pytest

from ramlflat.exceptions import NoNameFound
from ramlflat.models import ParameterScope, ResourceNode
from ramlflat.simplifier.walker import TreeWalker


def _resource(relative_uri: str, **fields: Any) -> ResourceNode:
    return ResourceNode.model_validate({"relativeUri": relative_uri, **fields})


def _flatten(nodes) -> dict[str, Any]:
    """Map complete URI to node for every node of a simplified tree."""
    found: dict[str, Any] = {}
    pending = list(nodes)
    while pending:
        node = pending.pop()
        found[node.complete_uri] = node
        pending.extend(node.children)
    return found


# ------------------------------------------------------------------ #
# URI composition and naming
# ------------------------------------------------------------------ #


class TestComposition:
    def _chain(self) -> list[ResourceNode]:
        return [
            _resource(
                "/users",
                resources=[
                    {
                        "relativeUri": "/{id}",
                        "resources": [{"relativeUri": "/posts"}],
                    }
                ],
            )
        ]

    def test_complete_uri_down_a_chain(self) -> None:
        walker = TreeWalker(name_parameter_segments=True)
        nodes, _ = walker.walk_top_level(self._chain())
        grandchild = nodes[0].children[0].children[0]
        assert grandchild.complete_uri == "/users/{id}/posts"
        assert grandchild.relative_uri == "/posts"
        assert nodes[0].children[0].complete_uri == "/users/{id}"

    def test_names_on_every_node(self) -> None:
        walker = TreeWalker(name_parameter_segments=True)
        nodes, _ = walker.walk_top_level(self._chain())
        names = [nodes[0].name, nodes[0].children[0].name, nodes[0].children[0].children[0].name]
        assert names == ["users", "id", "posts"]

    def test_parameter_only_segment_aborts_strict_walk(self) -> None:
        with pytest.raises(NoNameFound) as exc_info:
            TreeWalker().walk_top_level(self._chain())
        assert exc_info.value.relative_uri == "/{id}"

    def test_children_keep_declaration_order(self) -> None:
        root = _resource(
            "/root",
            resources=[{"relativeUri": "/c"}, {"relativeUri": "/a"}, {"relativeUri": "/b"}],
        )
        nodes, _ = TreeWalker().walk_top_level([root])
        assert [child.name for child in nodes[0].children] == ["c", "a", "b"]

    def test_one_output_node_per_input_resource(self) -> None:
        roots = [
            _resource("/a", resources=[{"relativeUri": "/b"}, {"relativeUri": "/c"}]),
            _resource("/d"),
        ]
        nodes, _ = TreeWalker().walk_top_level(roots)
        assert len(_flatten(nodes)) == 5

    def test_empty_document(self) -> None:
        nodes, errors = TreeWalker().walk_top_level([])
        assert nodes == []
        assert errors.as_dict() == {}


# ------------------------------------------------------------------ #
# URI parameters
# ------------------------------------------------------------------ #


def _two_branches() -> ResourceNode:
    return _resource(
        "/orgs",
        uriParameters={"id": {"type": "string"}},
        resources=[
            {"relativeUri": "/members", "uriParameters": {"memberId": {"type": "integer"}}},
            {"relativeUri": "/projects"},
        ],
    )


class TestTraversalScope:
    def test_ancestor_parameters_visible(self) -> None:
        nodes, _ = TreeWalker().walk_top_level([_two_branches()])
        members = nodes[0].children[0]
        assert set(members.uri_parameters) == {"id", "memberId"}

    def test_parameters_leak_into_later_sibling(self) -> None:
        """The accumulator is shared by every subtree of one top-level resource."""
        nodes, _ = TreeWalker().walk_top_level([_two_branches()])
        projects = nodes[0].children[1]
        assert set(projects.uri_parameters) == {"id", "memberId"}

    def test_root_snapshot_not_affected_by_descendants(self) -> None:
        nodes, _ = TreeWalker().walk_top_level([_two_branches()])
        assert set(nodes[0].uri_parameters) == {"id"}

    def test_reset_between_top_level_resources(self) -> None:
        roots = [
            _resource("/alpha", uriParameters={"a": {}}),
            _resource("/beta", uriParameters={"b": {}}),
        ]
        nodes, _ = TreeWalker().walk_top_level(roots)
        assert set(nodes[0].uri_parameters) == {"a"}
        assert set(nodes[1].uri_parameters) == {"b"}

    def test_later_declaration_overrides(self) -> None:
        root = _resource(
            "/a",
            uriParameters={"id": {"type": "string"}},
            resources=[{"relativeUri": "/b", "uriParameters": {"id": {"type": "integer"}}}],
        )
        nodes, _ = TreeWalker().walk_top_level([root])
        assert nodes[0].uri_parameters["id"] == {"type": "string"}
        assert nodes[0].children[0].uri_parameters["id"] == {"type": "integer"}


class TestBranchScope:
    def test_sibling_parameters_do_not_leak(self) -> None:
        walker = TreeWalker(parameter_scope=ParameterScope.BRANCH)
        nodes, _ = walker.walk_top_level([_two_branches()])
        members, projects = nodes[0].children
        assert set(members.uri_parameters) == {"id", "memberId"}
        assert set(projects.uri_parameters) == {"id"}

    def test_accepts_string_scope(self) -> None:
        walker = TreeWalker(parameter_scope="branch")
        assert walker.parameter_scope is ParameterScope.BRANCH


# ------------------------------------------------------------------ #
# Methods, responses and the error index
# ------------------------------------------------------------------ #


class TestErrorIndex:
    def test_one_entry_per_distinct_error_status(self) -> None:
        def get_with(description: str) -> list[dict[str, Any]]:
            return [
                {
                    "method": "get",
                    "responses": {"200": {"description": "ok"}, "404": {"description": description}},
                }
            ]

        roots = [
            _resource("/a", methods=get_with("a"), resources=[
                {"relativeUri": "/b", "methods": get_with("b")},
            ]),
            _resource("/c", methods=get_with("c")),
        ]
        _, errors = TreeWalker().walk_top_level(roots)
        index = errors.as_dict()
        assert list(index["get"]) == ["404"]
        assert index["get"]["404"] == {"description": "c"}

    def test_errors_span_top_level_resources(self) -> None:
        roots = [
            _resource("/a", methods=[{"method": "get", "responses": {"401": "x"}}]),
            _resource("/b", methods=[{"method": "post", "responses": {"409": "y"}}]),
        ]
        _, errors = TreeWalker().walk_top_level(roots)
        assert errors.as_dict() == {"get": {"401": "x"}, "post": {"409": "y"}}

    def test_node_responses_merge_all_methods(self) -> None:
        root = _resource(
            "/a",
            methods=[
                {"method": "get", "responses": {"200": "g"}},
                {"method": "delete", "responses": {"204": "d"}},
            ],
        )
        nodes, _ = TreeWalker().walk_top_level([root])
        assert nodes[0].responses == {"200": "g", "204": "d"}


class TestMethodSummaries:
    def test_traits_flattened(self) -> None:
        root = _resource(
            "/a", methods=[{"method": "get", "is": [{"secured": {}}, "paginated"]}]
        )
        nodes, _ = TreeWalker().walk_top_level([root])
        assert nodes[0].methods[0].traits == ["secured", "paginated"]

    def test_missing_schema_logged_with_complete_uri(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        root = _resource(
            "/a",
            resources=[
                {
                    "relativeUri": "/b",
                    "methods": [
                        {"method": "post", "body": {"application/json": {"example": "{}"}}}
                    ],
                }
            ],
        )
        with caplog.at_level(logging.WARNING, logger="ramlflat"):
            nodes, _ = TreeWalker().walk_top_level([root])
        assert nodes[0].children[0].methods[0].schema_ == {}
        assert '"/a/b" resource does not have a valid schema for the post method' in caplog.text
