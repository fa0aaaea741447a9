"""URI parameter accumulation across a resource tree.

The accumulator is mutable state owned by one walk. The walker resets it
once per top-level resource and merges each visited resource's own
``uriParameters`` into it, so a node sees every parameter declared earlier
in the same top-level traversal -- including ones declared on a sibling
branch visited before it. :meth:`ParameterAccumulator.fork` gives the
``branch`` scope instead: a private copy for one recursive call.
"""

from __future__ import annotations

from typing import Any, Optional


class ParameterAccumulator:
    """Name-keyed URI parameter set; later declarations overwrite earlier ones."""

    def __init__(self, initial: Optional[dict[str, Any]] = None) -> None:
        self._parameters: dict[str, Any] = dict(initial or {})

    def reset(self) -> None:
        """Forget every accumulated parameter."""
        self._parameters.clear()

    def merge(self, declared: Optional[dict[str, Any]]) -> dict[str, Any]:
        """Insert *declared* parameters and return a snapshot of the whole set."""
        if declared:
            for name, spec in declared.items():
                self._parameters[name] = spec
        return self.snapshot()

    def snapshot(self) -> dict[str, Any]:
        """A copy of the current set, unaffected by later merges."""
        return dict(self._parameters)

    def fork(self) -> ParameterAccumulator:
        """A new accumulator starting from the current set."""
        return ParameterAccumulator(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __contains__(self, name: object) -> bool:
        return name in self._parameters
