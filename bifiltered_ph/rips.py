"""
Bifiltered Vietoris-Rips Construction
=====================================

Builds the flag complex of a point cloud in which every point carries an
appearance time. A simplex is born at the multi-grade

    (max birth time of its vertices, max pairwise distance of its vertices)

which is the coordinate-wise least grade at which it exists. The first axis
grid holds the distinct birth times, the second the distinct pairwise
distances not exceeding the cutoff (plus 0).

Simplices are generated once each, by extending a simplex only with
vertices larger than its current last vertex. Children are therefore
appended in label order and global indexes are handed out in preorder
during the same pass.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.distance import pdist

from .node import STNode
from .schema import Point
from .simplex_tree import SimplexTree


def condensed_index(n: int, i: int, j: int) -> int:
    """Position of the pair (i, j), i < j, in a condensed distance table of n points."""
    return n * i - i * (i + 3) // 2 + j - 1


def points_to_arrays(
    points: Sequence[Point],
    spatial_dim: Optional[int] = None,
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Split points into a birth vector (N,) and a coordinate array (N, spatial_dim)."""
    if spatial_dim is not None and spatial_dim < 1:
        raise ValueError(f"spatial_dim must be at least 1, got {spatial_dim}")
    births = np.array([float(p["birth"]) for p in points], dtype=np.float64)
    if not points:
        return births, np.zeros((0, spatial_dim or 0), dtype=np.float64)

    coords = np.array([np.asarray(p["coords"], dtype=np.float64) for p in points])
    if coords.ndim == 1:
        coords = coords.reshape(-1, 1)
    if spatial_dim is not None:
        if spatial_dim > coords.shape[1]:
            raise ValueError(
                f"spatial_dim={spatial_dim} but points only have {coords.shape[1]} coordinates"
            )
        coords = coords[:, :spatial_dim]
    if np.isnan(coords).any():
        raise ValueError("point coordinates must not be NaN")
    return births, coords


def compute_distances(
    coords: NDArray[np.float64],
    births: NDArray[np.float64],
    max_distance: float,
) -> Tuple[NDArray[np.float64], List[float], List[float]]:
    """Pairwise Euclidean distances plus the two axis grids.

    Returns
    -------
    (distances, time_values, dist_values) where `distances` is the condensed
    upper-triangular table and the value lists are sorted and distinct.
    """
    n = coords.shape[0]
    if n > 1:
        distances = pdist(coords, metric="euclidean")
    else:
        distances = np.zeros(0, dtype=np.float64)

    time_values = sorted(set(float(b) for b in births))
    kept = distances[distances <= max_distance]
    dist_values = sorted(set(float(d) for d in kept) | {0.0})
    return distances, time_values, dist_values


def build_vietoris_rips(
    points: Sequence[Point],
    spatial_dim: Optional[int],
    max_simplex_dim: int,
    max_distance: float,
    *,
    hom_dim: int = 1,
    tree: Optional[SimplexTree] = None,
    verbose: bool = False,
) -> SimplexTree:
    """Build the bifiltered Vietoris-Rips complex of a point cloud.

    Parameters
    ----------
    points : Sequence[Point]
        Points with a `birth` time and `coords`.
    spatial_dim : int or None
        Number of leading coordinates used for distances (None = all).
    max_simplex_dim : int
        No simplex above this dimension is created.
    max_distance : float
        Largest pairwise distance allowed inside a simplex.
    hom_dim : int
        Homology dimension for a newly created tree.
    tree : SimplexTree, optional
        Empty tree to fill; a new one is created when omitted.
    verbose : bool
        Print progress information.

    Returns
    -------
    The populated SimplexTree with global indexes assigned.
    """
    if np.isnan(max_distance) or max_distance < 0:
        raise ValueError(f"max_distance must be non-negative, got {max_distance}")
    if max_simplex_dim < 0:
        raise ValueError(f"max_simplex_dim must be non-negative, got {max_simplex_dim}")
    if tree is None:
        tree = SimplexTree(hom_dim, verbose=verbose)
    elif len(tree) > 0:
        raise ValueError("build_vietoris_rips needs an empty simplex tree")

    births, coords = points_to_arrays(points, spatial_dim)
    n = len(births)

    if verbose:
        print(f"[bifiltered_ph] computing distances: {n} points in dimension {coords.shape[1]}")
    distances, time_values, dist_values = compute_distances(coords, births, max_distance)
    tree.set_axes(time_values, dist_values)

    if verbose:
        print(
            f"[bifiltered_ph] grid: {len(time_values)} distinct times, "
            f"{len(dist_values)} distinct distances <= {max_distance}"
        )

    largest = dist_values[-1]
    next_index = 0
    for i in range(n):
        node = tree.append_child(
            tree.root, i, tree.grade_to_index("x", births[i]), 0, next_index
        )
        next_index = _build_subtree(
            tree, births, distances, n, node, [i],
            float(births[i]), 0.0, 1, max_simplex_dim, largest, next_index + 1,
        )

    if verbose:
        print(f"[bifiltered_ph] built simplex tree with {next_index} simplices")
    return tree


def _build_subtree(
    tree: SimplexTree,
    births: NDArray[np.float64],
    distances: NDArray[np.float64],
    n: int,
    parent: STNode,
    parent_vertices: List[int],
    prev_time: float,
    prev_dist: float,
    cur_dim: int,
    max_dim: int,
    largest: float,
    next_index: int,
) -> int:
    """Append every cofacet of `parent` with a larger last vertex. Returns the next free global index."""
    if cur_dim > max_dim:
        return next_index

    for j in range(parent_vertices[-1] + 1, n):
        current_dist = prev_dist
        for p in parent_vertices:
            d = float(distances[condensed_index(n, p, j)])
            if d > current_dist:
                current_dist = d

        if current_dist > largest:
            continue

        current_time = max(prev_time, float(births[j]))
        node = tree.append_child(
            parent,
            j,
            tree.grade_to_index("x", current_time),
            tree.grade_to_index("y", current_dist),
            next_index,
        )
        next_index += 1

        if cur_dim < max_dim:
            parent_vertices.append(j)
            next_index = _build_subtree(
                tree, births, distances, n, node, parent_vertices,
                current_time, current_dist, cur_dim + 1, max_dim, largest, next_index,
            )
            parent_vertices.pop()

    return next_index
