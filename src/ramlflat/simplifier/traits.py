"""Flatten top-level trait declarations into a single mapping."""

from __future__ import annotations

from typing import Any

from ramlflat.exceptions import MalformedTraitDeclaration


def build_trait_dictionary(declarations: list[Any]) -> dict[str, Any]:
    """Merge a list of single-key trait declarations into ``{name: definition}``.

    Args:
        declarations: The document's ``traits`` list, e.g.
            ``[{"secured": {...}}, {"paginated": {...}}]``.

    Returns:
        One mapping from trait name to definition, in declaration order.

    Raises:
        MalformedTraitDeclaration: If an entry is not a mapping with exactly
            one key.
    """
    traits: dict[str, Any] = {}
    for index, declaration in enumerate(declarations):
        if not isinstance(declaration, dict) or len(declaration) != 1:
            raise MalformedTraitDeclaration(index, declaration)
        ((name, definition),) = declaration.items()
        traits[name] = definition
    return traits
