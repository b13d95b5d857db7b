"""
Merge / Split Matrices
======================

Matrices for the direct-sum step of the module decomposition. The
bifiltration is compared with two coarsened copies of itself:

B
    every simplex shifted to grade (x+1, y), i.e. present at (x, y) in B
    when its own grade is (x-1, y);
C
    every simplex shifted to grade (x, y+1).

Both copies are swept together over the grid, y outer and x inner. At each
cell the B columns come first, then the C columns. This needs one extra row
and column of cells, so index matrices here have shape (num_y+1, num_x+1).
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Tuple

import numpy as np
from numpy.typing import NDArray

from .boundary import Entries, to_sparse, write_boundary_column
from .node import STNode
from .schema import DirectSumMatrices
from .simplex_tree import SimplexTree

# (source, position of the simplex in its band, simplex); source is "B" or "C"
SweepStep = Tuple[str, int, STNode]


def _sweep(
    simplices: List[STNode],
    x_size: int,
    y_size: int,
    on_cell_done: Callable[[int, int], None],
) -> Iterator[SweepStep]:
    """Walk the (num_y+1) x (num_x+1) cells, yielding B and C copies in order."""
    it_b = 0
    it_c = 0
    n = len(simplices)
    for y in range(y_size + 1):
        for x in range(x_size + 1):
            while it_b < n and simplices[it_b].x == x - 1 and simplices[it_b].y == y:
                yield "B", it_b, simplices[it_b]
                it_b += 1
            while it_c < n and simplices[it_c].x == x and simplices[it_c].y == y - 1:
                yield "C", it_c, simplices[it_c]
                it_c += 1
            on_cell_done(y, x)


def _sweep_boundary(
    tree: SimplexTree,
    simplices: List[STNode],
    num_rows: int,
) -> Tuple[Entries, List[SweepStep], NDArray[np.int64]]:
    """Boundary entries of B+C, the sweep order of its columns and the index matrix."""
    x_size = tree.axis_size("x")
    y_size = tree.axis_size("y")
    end_cols = np.full((y_size + 1, x_size + 1), -1, dtype=np.int64)
    entries: Entries = ([], [])
    order: List[SweepStep] = []

    def record(y: int, x: int) -> None:
        end_cols[y, x] = len(order) - 1

    for step in _sweep(simplices, x_size, y_size, record):
        source, _, simplex = step
        offset = 0 if source == "B" else num_rows
        write_boundary_column(tree, entries, simplex, len(order), offset)
        order.append(step)

    return entries, order, end_cols


def merge_matrices(tree: SimplexTree) -> DirectSumMatrices:
    """Matrices for the merge map [B+C -> D] at dimension hom_dim.

    boundary
        (2 * low, 2 * mid) boundary of B+C; C rows start at `low`.
    map
        (mid, 2 * mid); the B and C copies of simplex k map to row k.
    index
        (num_y+1, num_x+1) last B+C column per cell.
    """
    low = tree.dim_ordered(tree.hom_dim - 1) if tree.hom_dim >= 1 else []
    mid = tree.dim_ordered(tree.hom_dim)
    num_rows = len(low)
    num_cols = len(mid)

    entries, order, end_cols = _sweep_boundary(tree, mid, num_rows)
    merge_entries: Entries = ([], [])
    for col, (_, k, _) in enumerate(order):
        merge_entries[0].append(k)
        merge_entries[1].append(col)

    if tree.verbose:
        print(f"[bifiltered_ph] merge matrices: {len(order)} columns over {num_cols} simplices")
    return {
        "boundary": to_sparse(entries, (2 * num_rows, 2 * num_cols)),
        "map": to_sparse(merge_entries, (num_cols, 2 * num_cols)),
        "index": end_cols,
    }


def split_matrices(tree: SimplexTree) -> DirectSumMatrices:
    """Matrices for the split map [A -> B+C] at dimension hom_dim.

    boundary
        (2 * mid, 2 * high) boundary of B+C one dimension up.
    map
        (2 * mid, mid); simplex k of A maps to its B row and its C row.
    index
        (num_y+1, num_x+1) last B+C column per cell of the boundary above.
    """
    mid = tree.dim_ordered(tree.hom_dim)
    high = tree.dim_ordered(tree.hom_dim + 1)
    num_rows = len(mid)
    num_cols = len(high)

    entries, _, end_cols = _sweep_boundary(tree, high, num_rows)

    # rows of B+C in sweep order; each simplex of A appears once in B and once in C
    split_entries: Entries = ([], [])
    for row, (_, k, _) in enumerate(_sweep(mid, tree.axis_size("x"), tree.axis_size("y"), lambda y, x: None)):
        split_entries[0].append(row)
        split_entries[1].append(k)

    if tree.verbose:
        print(f"[bifiltered_ph] split matrices: {num_rows} simplices, {num_cols} cofaces")
    return {
        "boundary": to_sparse(entries, (2 * num_rows, 2 * num_cols)),
        "map": to_sparse(split_entries, (2 * num_rows, num_rows)),
        "index": end_cols,
    }
