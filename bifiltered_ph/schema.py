"""bifiltered_ph.schema

Lightweight data-model definitions used across the package.

As elsewhere in the package, inputs and results are plain TypedDicts so
they stay friendly to notebooks/scripts and easy to serialise. A
multi-grade is always stored as a pair of *grade indices* (x, y) into the
two axis grids of the tree; the real coordinate values live in the grids.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, TypedDict, Union

import numpy as np
from numpy.typing import NDArray
from scipy.sparse import csc_matrix


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

class Point(TypedDict):
    """One point of the cloud fed to the Vietoris-Rips builder."""
    birth: float                                   # appearance time (first axis)
    coords: Union[Sequence[float], NDArray[np.float64]]


Vertices = List[int]


# ---------------------------------------------------------------------------
# Lookup results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SimplexData:
    """Multi-grade (as grade indices) and dimension of one simplex."""
    x: int
    y: int
    dim: int


# ---------------------------------------------------------------------------
# Exported matrices
# ---------------------------------------------------------------------------

class DirectSumMatrices(TypedDict):
    """Matrices for one merge or split step of the module decomposition."""
    boundary: csc_matrix      # boundary map of B+C
    map: csc_matrix           # merge [B+C -> D] or split [A -> B+C]
    index: NDArray[np.int64]  # last used B+C column per grade, indexed [y, x]


class BifiltrationResult(TypedDict, total=False):
    """Output of `pipeline.compute_bifiltration_matrices`."""
    hom_dim: int
    num_points: int
    num_simplices: int
    x_grades: List[float]
    y_grades: List[float]
    band_sizes: Dict[str, int]
    boundary: Dict[int, csc_matrix]          # dim -> boundary matrix
    index: Dict[int, NDArray[np.int64]]      # dim -> index matrix
    merge: DirectSumMatrices
    split: DirectSumMatrices
    config: Dict[str, Any]
    library_versions: Dict[str, str]
