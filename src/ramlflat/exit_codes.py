"""Numeric process exit codes for the ``ramlflat`` command.

Each constant maps to one error category and is referenced by the matching
:class:`~ramlflat.exceptions.RamlFlatError` subclass, so shell scripts can
tell a missing document from a malformed one without parsing stderr.

Example::

    $ ramlflat flatten broken.raml
    $ echo $?
    4   # EXIT_STRUCTURE_ERROR -- a resource has no name token
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_DOCUMENT_ERROR = 3
"""The source document could not be fetched, read or parsed."""

EXIT_STRUCTURE_ERROR = 4
"""The document tree violates a shape the simplifier relies on."""
