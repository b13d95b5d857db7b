"""
Bifiltration Pipeline
=====================

End-to-end entry point: point cloud -> bifiltered Vietoris-Rips complex ->
every matrix the reduction step needs for the configured homology dimension.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from .boundary import boundary_matrix, index_matrix
from .config import default_config, get_library_versions
from .direct_sum import merge_matrices, split_matrices
from .rips import build_vietoris_rips
from .schema import BifiltrationResult, Point
from .simplex_tree import SimplexTree


def compute_bifiltration_matrices(
    points: Sequence[Point],
    config: Optional[Dict[str, Any]] = None,
    *,
    tree: Optional[SimplexTree] = None,
) -> BifiltrationResult:
    """Build the Vietoris-Rips bifiltration and export its matrices.

    Parameters
    ----------
    points : Sequence[Point]
        Points with a `birth` time and `coords`.
    config : dict, optional
        Overrides for `default_config()`.
    tree : SimplexTree, optional
        Empty tree to build into (e.g. to keep it for later queries).

    Returns
    -------
    BifiltrationResult with boundary and index matrices for hom_dim and
    hom_dim+1, merge and split matrices, the axis grids and provenance.
    """
    cfg = default_config()
    if config:
        cfg.update(config)

    hom_dim = int(cfg["hom_dim"])
    verbose = bool(cfg["verbose"])

    tree = build_vietoris_rips(
        points,
        cfg["spatial_dim"],
        int(cfg["max_dimension"]),
        float(cfg["max_edge_length"]),
        hom_dim=hom_dim,
        tree=tree,
        verbose=verbose,
    )
    tree.update_dim_indexes()

    dims = (hom_dim, hom_dim + 1)
    band_sizes = {str(d): len(tree.dim_ordered(d)) for d in tree.band_dims() if d >= 0}

    return {
        "hom_dim": hom_dim,
        "num_points": len(points),
        "num_simplices": tree.simplex_count(),
        "x_grades": tree.grades("x"),
        "y_grades": tree.grades("y"),
        "band_sizes": band_sizes,
        "boundary": {d: boundary_matrix(tree, d) for d in dims},
        "index": {d: index_matrix(tree, d) for d in dims},
        "merge": merge_matrices(tree),
        "split": split_matrices(tree),
        "config": cfg,
        "library_versions": get_library_versions(),
    }
