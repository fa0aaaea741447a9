"""Recursive walk of a RAML resource tree into simplified nodes.

This is the core of ramlflat. :class:`TreeWalker` visits every resource in
pre-order and emits one :class:`~ramlflat.models.SimplifiedNode` per input
resource, children in declaration order.

**Per-node steps**

1. Compose the complete URI from the parent's and the node's relative URI.
2. Merge the node's URI parameters into the accumulator and take a
   snapshot.
3. Summarize the methods, which also feeds the error index.
4. Extract the node's name.
5. Recurse into the children with the complete URI as their parent URI.

**State lifecycle**

* The :class:`~ramlflat.simplifier.errors.ErrorIndex` is created once per
  :meth:`TreeWalker.walk_top_level` call and shared by the whole document.
* The :class:`~ramlflat.simplifier.params.ParameterAccumulator` is reset
  before each top-level resource. With ``ParameterScope.TRAVERSAL`` it is
  shared by all subtrees below that resource; with ``ParameterScope.BRANCH``
  each recursive call works on its own fork.

A :class:`~ramlflat.exceptions.StructuralError` raised at any depth aborts
the walk; no partial tree is returned.
"""

from __future__ import annotations

import logging
from typing import Optional

from ramlflat.models import ParameterScope, ResourceNode, SimplifiedNode
from ramlflat.simplifier.errors import ErrorIndex
from ramlflat.simplifier.methods import summarize_methods
from ramlflat.simplifier.params import ParameterAccumulator
from ramlflat.simplifier.path_rules import compose_uri, extract_resource_name

logger = logging.getLogger(__name__)


class TreeWalker:
    """Walks resource trees into simplified nodes.

    Args:
        parameter_scope: How URI parameters are accumulated, see
            :class:`~ramlflat.models.ParameterScope`.
        name_parameter_segments: Name parameter-only segments such as
            ``/{id}`` after their variable instead of raising
            :class:`~ramlflat.exceptions.NoNameFound`.
    """

    def __init__(
        self,
        parameter_scope: ParameterScope = ParameterScope.TRAVERSAL,
        name_parameter_segments: bool = False,
    ) -> None:
        self.parameter_scope = ParameterScope(parameter_scope)
        self.name_parameter_segments = name_parameter_segments

    def walk_top_level(
        self, resources: list[ResourceNode]
    ) -> tuple[list[SimplifiedNode], ErrorIndex]:
        """Walk every top-level resource of a document.

        Returns:
            The simplified top-level nodes and the error index for the
            whole document.
        """
        errors = ErrorIndex()
        parameters = ParameterAccumulator()
        nodes: list[SimplifiedNode] = []

        for resource in resources:
            parameters.reset()
            nodes.append(self.walk(resource, None, parameters, errors))

        logger.debug(
            "Walked %d top-level resource(s), %d error response(s) indexed",
            len(nodes),
            len(errors),
        )
        return nodes, errors

    def walk(
        self,
        resource: ResourceNode,
        uri: Optional[str],
        parameters: ParameterAccumulator,
        errors: ErrorIndex,
    ) -> SimplifiedNode:
        """Simplify *resource* and its descendants.

        Args:
            resource: The resource to visit.
            uri: The parent's complete URI, ``None`` for a top-level resource.
            parameters: The accumulator in effect for this call.
            errors: The error index of the current walk.
        """
        if self.parameter_scope is ParameterScope.BRANCH:
            parameters = parameters.fork()

        complete_uri = compose_uri(uri, resource.relative_uri)
        uri_parameters = parameters.merge(resource.uri_parameters)
        methods, responses = summarize_methods(resource, errors, complete_uri)
        name = extract_resource_name(
            resource.relative_uri, parameter_fallback=self.name_parameter_segments
        )
        children = [
            self.walk(child, complete_uri, parameters, errors)
            for child in resource.resources
        ]

        return SimplifiedNode(
            name=name,
            relative_uri=resource.relative_uri,
            complete_uri=complete_uri,
            uri_parameters=uri_parameters,
            methods=methods,
            responses=responses,
            children=children,
        )
