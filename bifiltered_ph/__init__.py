"""bifiltered_ph

Combinatorial core of two-parameter persistent homology: a simplex tree with
multi-graded simplices, a bifiltered Vietoris-Rips builder and the matrix
exports consumed by a downstream reduction / decomposition step.

The public API is intentionally small:

- default_config
- SimplexTree (insert, lookups, re-indexing)
- build_vietoris_rips
- boundary_matrix, boundary_matrix_for_order, index_matrix
- merge_matrices, split_matrices
- compute_bifiltration_matrices
- slice_to_gudhi
- matrices_to_json, save_matrices, load_matrices
"""

from .config import default_config
from .errors import BifiltrationError, EmptyTraversalError, InvalidDimensionRequest, MissingFacetError
from .simplex_tree import SimplexTree
from .rips import build_vietoris_rips
from .boundary import boundary_matrix, boundary_matrix_for_order, index_matrix
from .direct_sum import merge_matrices, split_matrices
from .pipeline import compute_bifiltration_matrices
from .interop import slice_to_gudhi
from .io import load_matrices, matrices_to_json, save_matrices

__all__ = [
    "default_config",
    "BifiltrationError",
    "EmptyTraversalError",
    "InvalidDimensionRequest",
    "MissingFacetError",
    "SimplexTree",
    "build_vietoris_rips",
    "boundary_matrix",
    "boundary_matrix_for_order",
    "index_matrix",
    "merge_matrices",
    "split_matrices",
    "compute_bifiltration_matrices",
    "slice_to_gudhi",
    "matrices_to_json",
    "save_matrices",
    "load_matrices",
]
