"""
Boundary and Index Matrix Export
================================

Read-only exports of a `SimplexTree` for the downstream reduction step.

Boundary matrices are sparse 0/1 matrices over Z/2Z (`scipy.sparse.csc_matrix`,
dtype uint8). Rows are simplices of dimension dim-1, columns simplices of
dimension dim, both in dimension-index order. Index matrices are dense
int64 arrays indexed [y, x] that give, for each grid cell, the last column
whose grade has been reached by the sweep, or -1.
"""

from __future__ import annotations

from typing import List, Mapping, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray
from scipy.sparse import coo_matrix, csc_matrix

from .errors import InvalidDimensionRequest, MissingFacetError
from .node import STNode
from .simplex_tree import SimplexTree

Entries = Tuple[List[int], List[int]]


def facets(vertices: Sequence[int]) -> List[List[int]]:
    """All vertex lists obtained by dropping one vertex (empty for a vertex)."""
    if len(vertices) < 2:
        return []
    return [list(vertices[:k]) + list(vertices[k + 1:]) for k in range(len(vertices))]


def to_sparse(entries: Entries, shape: Tuple[int, int]) -> csc_matrix:
    rows, cols = entries
    data = np.ones(len(rows), dtype=np.uint8)
    return coo_matrix((data, (rows, cols)), shape=shape, dtype=np.uint8).tocsc()


def write_boundary_column(
    tree: SimplexTree,
    entries: Entries,
    simplex: STNode,
    col: int,
    offset: int = 0,
) -> None:
    """Record the facets of `simplex` in column `col`, rows shifted by `offset`."""
    verts = tree.find_vertices(simplex.global_index)
    for facet in facets(verts):
        facet_node = tree.find_simplex(facet)
        if facet_node is None or facet_node.dim_index is None:
            raise MissingFacetError(facet)
        entries[0].append(facet_node.dim_index + offset)
        entries[1].append(col)


def _check_dim(tree: SimplexTree, dim: int) -> None:
    allowed = (tree.hom_dim, tree.hom_dim + 1)
    if dim not in allowed:
        raise InvalidDimensionRequest(dim, allowed)


def boundary_matrix(tree: SimplexTree, dim: int) -> csc_matrix:
    """Boundary matrix of the `dim`-simplices, dim in {hom_dim, hom_dim+1}."""
    _check_dim(tree, dim)
    simplices = tree.dim_ordered(dim)
    num_rows = len(tree.dim_ordered(dim - 1)) if dim >= 1 else 0

    entries: Entries = ([], [])
    for col, simplex in enumerate(simplices):
        write_boundary_column(tree, entries, simplex, col)

    if tree.verbose:
        print(f"[bifiltered_ph] boundary matrix dim {dim}: {num_rows} x {len(simplices)}, {len(entries[0])} entries")
    return to_sparse(entries, (num_rows, len(simplices)))


def boundary_matrix_for_order(
    tree: SimplexTree,
    coface_global: Sequence[int],
    face_order: Mapping[int, int],
) -> csc_matrix:
    """Boundary matrix against caller-chosen orderings.

    Parameters
    ----------
    coface_global : Sequence[int]
        coface_global[j] is the global index of the simplex in column j.
    face_order : Mapping[int, int]
        Global index of a face -> its row.
    """
    num_rows = len(face_order)
    num_cols = len(coface_global)
    entries: Entries = ([], [])

    for j, gi in enumerate(coface_global):
        for facet in facets(tree.find_vertices(gi)):
            facet_node = tree.find_simplex(facet)
            if facet_node is None or facet_node.global_index not in face_order:
                raise MissingFacetError(facet)
            entries[0].append(face_order[facet_node.global_index])
            entries[1].append(j)

    return to_sparse(entries, (num_rows, num_cols))


def index_matrix(tree: SimplexTree, dim: int) -> NDArray[np.int64]:
    """Last column reached at each grade, for the `dim`-simplices.

    The sweep visits cells in order x + y * num_x. Cells before the first
    simplex hold -1; every other cell holds the column of the last simplex
    at or before it in the sweep.
    """
    _check_dim(tree, dim)
    simplices = tree.dim_ordered(dim)
    x_size = tree.axis_size("x")
    y_size = tree.axis_size("y")

    flat = np.full(x_size * y_size, -1, dtype=np.int64)
    cur_entry = 0
    col = -1
    for simplex in simplices:
        cell = simplex.x + simplex.y * x_size
        # skipped cells carry the previous column
        flat[cur_entry:cell] = col
        col += 1
        flat[cell] = col
        cur_entry = cell + 1
    flat[cur_entry:] = col

    return flat.reshape(y_size, x_size)
