"""Summarize the methods declared on a resource.

For every method, in declaration order, :func:`summarize_methods` builds a
:class:`~ramlflat.models.MethodSummary`, merges the method's responses into
the resource-level response map, and feeds the error responses into the
walk's :class:`~ramlflat.simplifier.errors.ErrorIndex`.

Two details of the summary depend on the input shape:

* **Request schema** -- only a ``post`` with an ``application/json`` body
  gets a ``schema``. It is the decoded JSON text of that body's ``schema``
  field, or ``{}`` when the entry is not a mapping or its ``schema`` is
  missing or not valid JSON. The latter is logged as a warning and the
  walk continues. A ``body`` that is not a mapping is ignored with a
  warning.
* **Traits** -- a method's ``is`` list is read positionally. The first slot
  is a mapping of trait name to parameters, the second a bare trait name::

      is: [{secured: {}}, paginated]   ->   ["secured", "paginated"]

  A bare name in the first slot or a mapping in the second is accepted as
  well. Anything past the second slot is ignored with a warning.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from ramlflat.models import BodyEntry, MethodDefinition, MethodSummary, ResourceNode
from ramlflat.simplifier.errors import ErrorIndex

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


def summarize_methods(
    resource: ResourceNode,
    errors: ErrorIndex,
    resource_label: Optional[str] = None,
) -> tuple[list[MethodSummary], dict[str, Any]]:
    """Summarize every method of *resource*.

    Args:
        resource: The resource being visited.
        errors: The walk's error index; error responses are recorded in it.
        resource_label: How to name the resource in diagnostics. Defaults
            to its relative URI.

    Returns:
        A ``(summaries, responses)`` tuple. ``responses`` merges the
        response maps of all methods; a status declared by more than one
        method keeps the last method's definition.
    """
    label = resource_label or resource.relative_uri
    summaries: list[MethodSummary] = []
    responses: dict[str, Any] = {}

    for method in resource.methods:
        summaries.append(summarize_method(method, label))
        method_responses = method.responses or {}
        errors.record(method.method, method_responses)
        responses.update(method_responses)

    return summaries, responses


def summarize_method(method: MethodDefinition, resource_label: str) -> MethodSummary:
    """Build the summary of a single method."""
    fields: dict[str, Any] = {
        "method": method.method,
        "query_parameters": method.query_parameters,
        "description": method.description,
        "traits": resolve_trait_names(method.is_, resource_label, method.method),
    }

    body = method.body
    if body is not None and not isinstance(body, dict):
        logger.warning(
            "Ignoring body of %s %s: expected a mapping of media types, got %s",
            method.method,
            resource_label,
            type(body).__name__,
        )
        body = None

    if method.method.lower() == "post" and body and JSON_MEDIA_TYPE in body:
        fields["schema_"] = _decode_body_schema(
            body[JSON_MEDIA_TYPE], resource_label, method.method
        )

    return MethodSummary(**fields)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a JSON value")


def _load_json(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def is_json_text(value: Any) -> bool:
    """Return ``True`` if *value* is a string holding syntactically valid JSON.

    ``NaN`` and ``Infinity`` are rejected.
    """
    if not isinstance(value, str):
        return False
    try:
        _load_json(value)
    except ValueError:
        return False
    return True


def _decode_body_schema(entry: Any, resource_label: str, verb: str) -> Any:
    if isinstance(entry, BodyEntry) and entry.has_schema and is_json_text(entry.schema_):
        return _load_json(entry.schema_)

    logger.warning(
        '"%s" resource does not have a valid schema for the %s method',
        resource_label,
        verb,
    )
    return {}


def resolve_trait_names(
    references: Optional[list[Any]],
    resource_label: str = "",
    verb: str = "",
) -> list[str]:
    """Flatten a method's ``is`` list into trait names.

    Args:
        references: The method's trait references, or ``None``.
        resource_label: Resource name used in diagnostics.
        verb: Method verb used in diagnostics.

    Returns:
        The names from the first slot's mapping keys, followed by the name
        in the second slot.
    """
    if not references:
        return []

    names: list[str] = []
    for slot, reference in enumerate(references[:2]):
        if isinstance(reference, dict):
            names.extend(str(key) for key in reference)
        elif isinstance(reference, str):
            names.append(reference)
        else:
            logger.warning(
                "Ignoring trait reference %r in slot %d of %s %s",
                reference,
                slot,
                verb,
                resource_label,
            )

    if len(references) > 2:
        logger.warning(
            "Ignoring %d trait reference(s) past the second slot of %s %s",
            len(references) - 2,
            verb,
            resource_label,
        )

    return names
