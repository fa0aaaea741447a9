"""Resource naming and URI composition.

Two small rules the tree walker applies at every node:

* :func:`extract_resource_name` -- derive a short name (``users``,
  ``user-profile``) from a resource's relative URI.
* :func:`compose_uri` -- append a relative URI to the URI composed so far.

Neither rule normalises slashes or validates path syntax. Whatever
conventions the document authors used are carried through untouched.
"""

from __future__ import annotations

import re
from typing import Optional

from ramlflat.exceptions import NoNameFound

# A word run, optionally joined to a second run by one hyphen or underscore.
_NAME_TOKEN = re.compile(r"(\w+(-|_)\w+|\w+)", re.ASCII)

# URI template expressions such as ``{id}`` or ``{mediaTypeExtension}``.
_TEMPLATE_EXPRESSION = re.compile(r"\{[^}]*\}")


def extract_resource_name(relative_uri: str, parameter_fallback: bool = False) -> str:
    """Return the first resource-name token found in *relative_uri*.

    Template expressions are not names, so they are skipped when searching:
    ``/users{mediaTypeExtension}`` is named ``users`` and ``/{id}`` has no
    name at all.

    Args:
        relative_uri: The resource's relative URI, e.g. ``"/user-profile"``.
        parameter_fallback: When no name token exists outside template
            expressions, use the first token inside them instead (``/{id}``
            becomes ``id``).

    Returns:
        The first matching token.

    Raises:
        NoNameFound: If no token can be found.

    Example::

        >>> extract_resource_name("/user-profile")
        'user-profile'
        >>> extract_resource_name("/{id}", parameter_fallback=True)
        'id'
    """
    match = _NAME_TOKEN.search(_TEMPLATE_EXPRESSION.sub("/", relative_uri))
    if match is None and parameter_fallback:
        match = _NAME_TOKEN.search(relative_uri)
    if match is None:
        raise NoNameFound(relative_uri)
    return match.group(1)


def compose_uri(parent_uri: Optional[str], relative_uri: str) -> str:
    """Concatenate *parent_uri* (``None`` at the root) with *relative_uri*.

    >>> compose_uri("/users", "/{id}")
    '/users/{id}'
    >>> compose_uri(None, "/users")
    '/users'
    """
    return (parent_uri or "") + relative_uri
