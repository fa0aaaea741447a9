"""The :class:`RamlParser` facade.

Ties a loaded :class:`~ramlflat.models.ApiDocument` to the simplifier and
exposes the views callers use: the simplified resource tree, the error
index gathered while producing it, the trait dictionary, and pass-through
access to the schemas and the raw document.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

from ramlflat.models import ApiDocument, ParameterScope, SimplifiedNode
from ramlflat.parser import extract_document, load_document
from ramlflat.simplifier import TreeWalker, build_trait_dictionary

logger = logging.getLogger(__name__)


class RamlParser:
    """Simplified views over one RAML document.

    Args:
        document: The parsed document, or a raw mapping that
            :func:`~ramlflat.parser.extract_document` accepts.
        parameter_scope: How URI parameters are accumulated during
            :meth:`resources`.
        name_parameter_segments: Name parameter-only segments (``/{id}``)
            after their variable instead of failing.

    Example::

        parser = RamlParser.from_source("api.raml")
        tree = parser.resources()
        errors = parser.all_status_errors()   # valid after resources()
    """

    def __init__(
        self,
        document: Union[ApiDocument, dict[str, Any]],
        parameter_scope: ParameterScope = ParameterScope.TRAVERSAL,
        name_parameter_segments: bool = False,
    ) -> None:
        if not isinstance(document, ApiDocument):
            document = extract_document(document)
        self.api = document
        self._walker = TreeWalker(
            parameter_scope=parameter_scope,
            name_parameter_segments=name_parameter_segments,
        )
        self._errors: dict[str, dict[str, Any]] = {}

    @classmethod
    def from_source(
        cls,
        source: str,
        absolute: bool = False,
        parameter_scope: ParameterScope = ParameterScope.TRAVERSAL,
        name_parameter_segments: bool = False,
    ) -> RamlParser:
        """Load *source* (file path, URL or ``'-'``) and wrap it.

        Args:
            source: Where to read the document from.
            absolute: Resolve a file path to an absolute path before reading.

        Raises:
            DocumentLoadError: If the document cannot be loaded.
        """
        if absolute and source != "-" and not source.startswith(("http://", "https://")):
            source = str(Path(source).resolve())

        logger.debug("Loading document from %s", source)
        raw = load_document(source)
        return cls(
            extract_document(raw),
            parameter_scope=parameter_scope,
            name_parameter_segments=name_parameter_segments,
        )

    def resources(self) -> list[SimplifiedNode]:
        """Walk the whole document and return the simplified top-level nodes.

        Also rebuilds the error index returned by :meth:`all_status_errors`.

        Raises:
            StructuralError: If a resource has no name token. The previous
                error index is kept in that case.
        """
        nodes, errors = self._walker.walk_top_level(self.api.resources)
        self._errors = errors.as_dict()
        return nodes

    def get_traits(self) -> dict[str, Any]:
        """Trait name to definition, from the document's trait declarations.

        Raises:
            MalformedTraitDeclaration: If a declaration has other than one key.
        """
        return build_trait_dictionary(self.api.traits)

    def all_status_errors(self) -> dict[str, dict[str, Any]]:
        """Error responses (status >= 400) by verb, from the last :meth:`resources` walk."""
        return {method: dict(errors) for method, errors in self._errors.items()}

    def schemas(self) -> list[Any]:
        """The document's schema declarations, unmodified."""
        return self.api.schemas

    def get_api(self) -> ApiDocument:
        """The underlying document tree."""
        return self.api

    def parsed_object(self) -> ApiDocument:
        """Alias of :meth:`get_api`."""
        return self.api

    def to_dict(self, nodes: Optional[list[SimplifiedNode]] = None) -> dict[str, Any]:
        """Everything at once: resources, errors, traits and schemas.

        Walks the document unless *nodes* from an earlier :meth:`resources`
        call are supplied.
        """
        if nodes is None:
            nodes = self.resources()
        return {
            "resources": [node.to_dict() for node in nodes],
            "errors": self.all_status_errors(),
            "traits": self.get_traits(),
            "schemas": self.schemas(),
        }
