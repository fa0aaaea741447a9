"""Replace named schema references in request and response bodies.

RAML lets a body say ``schema: User`` where ``User`` is declared in the
top-level ``schemas`` list. A RAML parser substitutes the declaration; this
module does the same for documents read from raw RAML, so that the method
summarizer always sees the schema text.

A declared schema may itself be the name of another schema; such chains
are followed. A chain that loops back on itself is left unresolved at the
point where the loop closes.
"""

from __future__ import annotations

import copy
from typing import Any, Optional


def resolve_schema_refs(document: dict[str, Any]) -> dict[str, Any]:
    """Return a deep copy of *document* with body schema names resolved.

    Args:
        document: A document in parsed-tree shape (``resources`` lists,
            ``methods`` lists, ``schemas`` as a list of single-key mappings).

    Returns:
        A **new** dictionary; the input is not modified.
    """
    root = copy.deepcopy(document)
    declared = _declared_schemas(root.get("schemas"))
    if declared:
        for resource in root.get("resources") or []:
            _resolve_resource(resource, declared)
    return root


def resolve_schema_name(
    value: Any, declared: dict[str, Any], seen: Optional[set[str]] = None
) -> Any:
    """Follow *value* through *declared* while it names a declared schema."""
    seen = set() if seen is None else set(seen)
    while isinstance(value, str) and value in declared and value not in seen:
        seen.add(value)
        value = declared[value]
    return value


def _declared_schemas(declarations: Any) -> dict[str, Any]:
    declared: dict[str, Any] = {}
    if not isinstance(declarations, list):
        return declared
    for declaration in declarations:
        if isinstance(declaration, dict):
            declared.update(declaration)
    return declared


def _resolve_resource(resource: Any, declared: dict[str, Any]) -> None:
    if not isinstance(resource, dict):
        return
    for method in resource.get("methods") or []:
        if not isinstance(method, dict):
            continue
        _resolve_bodies(method.get("body"), declared)
        responses = method.get("responses") or {}
        if isinstance(responses, dict):
            for response in responses.values():
                if isinstance(response, dict):
                    _resolve_bodies(response.get("body"), declared)
    for child in resource.get("resources") or []:
        _resolve_resource(child, declared)


def _resolve_bodies(body: Any, declared: dict[str, Any]) -> None:
    if not isinstance(body, dict):
        return
    for entry in body.values():
        if isinstance(entry, dict) and isinstance(entry.get("schema"), str):
            entry["schema"] = resolve_schema_name(entry["schema"], declared)
