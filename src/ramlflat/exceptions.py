"""Exception hierarchy for ramlflat.

All exceptions inherit from :class:`RamlFlatError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`ramlflat.exit_codes`.
The entry point in :func:`ramlflat.app.main` catches ``RamlFlatError`` and
exits with that code.

Subclass hierarchy::

    RamlFlatError (exit 1)
    +-- InvalidUsageError            (exit 2)
    +-- DocumentLoadError            (exit 3)
    +-- StructuralError              (exit 4)
    |   +-- NoNameFound
    |   +-- MalformedTraitDeclaration
    +-- ConfigError                  (exit 1)

Soft problems (a POST body without a usable JSON schema) are never raised;
they are logged and the walk carries on.
"""

from ramlflat.exit_codes import (
    EXIT_DOCUMENT_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_STRUCTURE_ERROR,
)


class RamlFlatError(Exception):
    """Base exception for all ramlflat errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(RamlFlatError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class DocumentLoadError(RamlFlatError):
    """Raised when the source document cannot be obtained or parsed."""

    exit_code = EXIT_DOCUMENT_ERROR


class StructuralError(RamlFlatError):
    """Raised when the resource tree does not have the shape the walker reads.

    A structural fault aborts the whole traversal: names and composed URIs
    computed past that point would be meaningless.
    """

    exit_code = EXIT_STRUCTURE_ERROR


class NoNameFound(StructuralError):
    """Raised when a relative URI contains no resource-name token."""

    def __init__(self, relative_uri: str):
        super().__init__(f"No resource name found in relative URI '{relative_uri}'")
        self.relative_uri = relative_uri


class MalformedTraitDeclaration(StructuralError):
    """Raised when a top-level trait declaration does not have exactly one key."""

    def __init__(self, index: int, declaration: object):
        super().__init__(
            f"Trait declaration #{index} must be a mapping with exactly one key, "
            f"got: {declaration!r}"
        )
        self.index = index
        self.declaration = declaration


class ConfigError(RamlFlatError):
    """Raised for configuration problems (invalid JSON, unknown values)."""

    exit_code = EXIT_GENERIC_FAILURE
