"""RAML document loading -- fetch, normalise and resolve schema names.

This sub-package turns a source (file, URL or stdin) into the
:class:`~ramlflat.models.ApiDocument` the simplifier walks.

Typical usage::

    from ramlflat.parser import load_document, extract_document

    raw = load_document("api.raml")
    document = extract_document(raw)

Sub-modules:

* :mod:`~ramlflat.parser.loader` -- I/O, format detection and ``!include``.
* :mod:`~ramlflat.parser.extractor` -- raw RAML to resource-tree
  normalisation.
* :mod:`~ramlflat.parser.resolver` -- named schema substitution.
"""

from ramlflat.parser.extractor import extract_document
from ramlflat.parser.loader import load_document

__all__ = ["load_document", "extract_document"]
