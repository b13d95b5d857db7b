"""bifiltered_ph.interop

Hand a one-parameter slice of the bifiltration to GUDHI.

Fixing the first axis at grade index `x_index` leaves an ordinary
filtration: every simplex with x <= x_index, filtered by the real value of
its y grade. This is how a slice can be checked against, or processed by,
standard one-parameter tooling.
"""

from __future__ import annotations

from typing import Optional

from .simplex_tree import SimplexTree


def slice_to_gudhi(tree: SimplexTree, x_index: Optional[int] = None):
    """Return a `gudhi.SimplexTree` for the slice at first-axis grade `x_index`.

    Parameters
    ----------
    tree : SimplexTree
        The bifiltered complex.
    x_index : int, optional
        Grade index on the first axis; defaults to the last one.

    Returns
    -------
    gudhi.SimplexTree with filtration value = y-grade value of each simplex.
    """
    import gudhi

    if x_index is None:
        x_index = tree.axis_size("x") - 1

    st = gudhi.SimplexTree()
    # gudhi lowers the value of faces already present, so the visit order does not matter
    for vertices, x, y in tree.iter_simplices():
        if x > x_index:
            continue
        st.insert(list(vertices), filtration=tree.index_to_grade("y", y))
    return st
