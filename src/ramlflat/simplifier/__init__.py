"""Resource-tree simplification.

Sub-modules:

* :mod:`~ramlflat.simplifier.walker` -- the recursive tree walker.
* :mod:`~ramlflat.simplifier.path_rules` -- resource names and URI
  composition.
* :mod:`~ramlflat.simplifier.params` -- URI parameter accumulation.
* :mod:`~ramlflat.simplifier.methods` -- per-method summaries.
* :mod:`~ramlflat.simplifier.errors` -- the document-wide error index.
* :mod:`~ramlflat.simplifier.traits` -- the trait dictionary.
"""

from ramlflat.simplifier.errors import ErrorIndex
from ramlflat.simplifier.params import ParameterAccumulator
from ramlflat.simplifier.path_rules import compose_uri, extract_resource_name
from ramlflat.simplifier.traits import build_trait_dictionary
from ramlflat.simplifier.walker import TreeWalker

__all__ = [
    "ErrorIndex",
    "ParameterAccumulator",
    "TreeWalker",
    "build_trait_dictionary",
    "compose_uri",
    "extract_resource_name",
]
