"""Document-wide index of error responses grouped by HTTP method."""

from __future__ import annotations

from typing import Any, Optional

ERROR_STATUS_THRESHOLD = 400


def is_error_status(status: str) -> bool:
    """Return ``True`` for numeric status codes of 400 and above.

    Non-numeric keys such as ``default`` are never errors.
    """
    try:
        return int(status) >= ERROR_STATUS_THRESHOLD
    except (TypeError, ValueError):
        return False


class ErrorIndex:
    """Accumulates error responses for one full walk of a document.

    The index is keyed by verb, then by status code. It is never reset
    during a walk; when two resources declare the same verb and status the
    one visited last wins. Every verb seen gets a key, even when none of
    its responses is an error.
    """

    def __init__(self) -> None:
        self._by_method: dict[str, dict[str, Any]] = {}

    def record(self, method: str, responses: Optional[dict[str, Any]]) -> None:
        """Add the error entries of one method's *responses* under *method*."""
        errors = self._by_method.setdefault(method, {})
        for status, spec in (responses or {}).items():
            if is_error_status(status):
                errors[status] = spec

    def as_dict(self) -> dict[str, dict[str, Any]]:
        """A copy of the index: ``{verb: {status: response_spec}}``."""
        return {method: dict(errors) for method, errors in self._by_method.items()}

    def __len__(self) -> int:
        return sum(len(errors) for errors in self._by_method.values())
