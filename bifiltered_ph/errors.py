"""bifiltered_ph.errors

Failure modes of the simplex tree and its matrix exporters.

Absence is not an error here: `find_simplex` and `grade_to_index` return
None and `find_nodes_at` returns an empty list. The classes below are for
misuse of the API or a tree whose invariants no longer hold.
"""

from __future__ import annotations


class BifiltrationError(Exception):
    """Base class for errors raised by this package."""


class InvalidDimensionRequest(BifiltrationError, ValueError):
    """A matrix was requested for a dimension outside the indexed band."""

    def __init__(self, dim: int, allowed: tuple) -> None:
        self.dim = dim
        self.allowed = allowed
        super().__init__(
            f"cannot export matrices for dimension {dim}; allowed: {', '.join(str(a) for a in allowed)}"
        )


class MissingFacetError(BifiltrationError, RuntimeError):
    """A facet that closure guarantees could not be located."""

    def __init__(self, facet) -> None:
        self.facet = list(facet)
        super().__init__(f"facet simplex {self.facet} not found in the simplex tree")


class EmptyTraversalError(BifiltrationError, RuntimeError):
    """A global-index lookup reached a leaf while still searching."""

    def __init__(self, global_index: int, depth: int) -> None:
        self.global_index = global_index
        self.depth = depth
        super().__init__(
            f"node without children reached at depth {depth} while looking up global index {global_index}"
        )
