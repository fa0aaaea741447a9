"""Normalise a loaded document into an :class:`~ramlflat.models.ApiDocument`.

Two input shapes are accepted:

* **Parsed trees** -- a mapping with a ``resources`` list, as written out by
  a RAML parser. These are validated as they are.
* **Raw RAML** -- the mapping read straight from a ``.raml`` file. It is
  rewritten into the parsed-tree shape first:

  - keys starting with ``/`` become ordered child ``resources``, each with
    its ``relativeUri`` and ``relativeUriPathSegments``;
  - HTTP verb keys become ordered ``methods`` with a lowercase ``method``;
  - ``traits`` and ``schemas`` given as a mapping become a list of
    single-key mappings;
  - empty (``null``) resources and methods become empty mappings.

Named schema references in bodies are then replaced by the declared schema
(see :mod:`~ramlflat.parser.resolver`).

The single public entry point is :func:`extract_document`.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from ramlflat.exceptions import DocumentLoadError
from ramlflat.models import ApiDocument, HTTPMethod
from ramlflat.parser.resolver import resolve_schema_refs

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)


def extract_document(raw: dict[str, Any]) -> ApiDocument:
    """Build an :class:`~ramlflat.models.ApiDocument` from a loaded document.

    Args:
        raw: The mapping returned by
            :func:`~ramlflat.parser.loader.load_document`.

    Returns:
        The validated document tree.

    Raises:
        DocumentLoadError: If the document does not have a resource-tree
            shape.

    Example::

        raw = load_document("api.raml")
        document = extract_document(raw)
        print([r.relative_uri for r in document.resources])
    """
    if isinstance(raw.get("resources"), list):
        data = raw
    else:
        data = _normalise_raml(raw)

    data = resolve_schema_refs(data)
    try:
        return ApiDocument.model_validate(data)
    except ValidationError as exc:
        raise DocumentLoadError(f"Document does not have the expected shape: {exc}") from exc


def _is_resource_key(key: Any) -> bool:
    return isinstance(key, str) and key.startswith("/")


def _is_method_key(key: Any) -> bool:
    return isinstance(key, str) and key.lower() in _HTTP_METHODS


def _normalise_raml(raw: dict[str, Any]) -> dict[str, Any]:
    data = {key: value for key, value in raw.items() if not _is_resource_key(key)}
    data["traits"] = _as_declaration_list(raw.get("traits"))
    data["schemas"] = _as_declaration_list(raw.get("schemas"))
    data["resources"] = [
        _extract_resource(key, value) for key, value in raw.items() if _is_resource_key(key)
    ]
    return data


def _as_declaration_list(value: Any) -> Any:
    """RAML allows ``traits:``/``schemas:`` as a mapping or a list of mappings."""
    if value is None:
        return []
    if isinstance(value, dict):
        return [{name: definition} for name, definition in value.items()]
    return value


def _extract_resource(relative_uri: str, node: Any) -> dict[str, Any]:
    if node is None:
        node = {}
    if not isinstance(node, dict):
        raise DocumentLoadError(
            f"Resource '{relative_uri}' must be a mapping, got {type(node).__name__}"
        )

    resource = {
        key: value
        for key, value in node.items()
        if not _is_resource_key(key) and not _is_method_key(key)
    }
    resource["relativeUri"] = relative_uri
    resource["relativeUriPathSegments"] = [s for s in relative_uri.split("/") if s]
    resource["methods"] = [
        _extract_method(key, value) for key, value in node.items() if _is_method_key(key)
    ]
    resource["resources"] = [
        _extract_resource(key, value) for key, value in node.items() if _is_resource_key(key)
    ]
    return resource


def _extract_method(verb: str, node: Any) -> dict[str, Any]:
    if node is None:
        node = {}
    if not isinstance(node, dict):
        raise DocumentLoadError(
            f"Method '{verb}' must be a mapping, got {type(node).__name__}"
        )

    method = dict(node)
    method["method"] = verb.lower()
    return method
