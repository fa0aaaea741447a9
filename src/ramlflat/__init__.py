"""ramlflat -- Flatten RAML API descriptions into simplified JSON.

This package takes a parsed RAML document (a tree of resources, each with
nested child resources, methods, URI parameters and responses) and produces
an application-friendly view of it: resource names, composed absolute URIs,
inherited URI parameters, per-method summaries and a document-wide index of
error responses grouped by HTTP method.

Typical usage::

    from ramlflat import RamlParser

    parser = RamlParser.from_source("api.raml")
    for node in parser.resources():
        print(node.complete_uri, [m.method for m in node.methods])
    print(parser.all_status_errors())

Modules:
    document: The :class:`RamlParser` facade.
    simplifier: The tree walker and the components it drives.
    parser: Loading and normalising RAML source documents.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"

from ramlflat.document import RamlParser  # noqa: E402

__all__ = ["RamlParser", "__version__"]
