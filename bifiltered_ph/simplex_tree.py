"""
Bifiltered Simplex Tree
=======================

A simplex tree whose simplices carry a two-dimensional birth grade.

A simplex with vertices v0 < v1 < ... < vk is the node reached from the
root by following children labelled v0, v1, ..., vk. Each node records the
grade indices (x, y) at which its simplex is born, plus two orderings:

global index
    Preorder rank over the whole tree, dense in [0, N). Recomputed in full
    after every insertion.
dimension index
    Rank inside one of the three dimension bands hom_dim-1, hom_dim,
    hom_dim+1, in multi-grade sweep order. Recomputed on demand.

The sweep order sorts by (y, x, global index): y-grade is the outer key.
Boundary and index matrices are laid out in this order, and the merge /
split exporters in `direct_sum` rely on it.

Notes
-----
Any structural change invalidates both orderings. Read indexes only once
the tree is no longer being mutated.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import EmptyTraversalError, InvalidDimensionRequest
from .grades import GradeAxis
from .node import ROOT, STNode
from .schema import SimplexData, Vertices

Axis = Union[str, int]

_AXIS_NAMES = {"x": "x", "y": "y", 0: "x", 1: "y"}


def _validate_vertices(vertices: Sequence[int]) -> Vertices:
    verts = [int(v) for v in vertices]
    if not verts:
        raise ValueError("a simplex needs at least one vertex")
    if verts[0] < 0:
        raise ValueError(f"vertex labels must be non-negative, got {verts}")
    for a, b in zip(verts, verts[1:]):
        if b <= a:
            raise ValueError(f"vertex labels must be strictly increasing, got {verts}")
    return verts


class SimplexTree:
    """Simplex tree over a two-parameter grid.

    Parameters
    ----------
    hom_dim : int
        Homology dimension of interest. Dimension indexes are kept for
        simplices of dimension hom_dim-1, hom_dim and hom_dim+1.
    verbose : bool
        Print progress information.
    """

    def __init__(self, hom_dim: int = 1, *, verbose: bool = False) -> None:
        if hom_dim < 0:
            raise ValueError(f"hom_dim must be non-negative, got {hom_dim}")
        self.hom_dim = int(hom_dim)
        self.verbose = verbose
        self._nodes: List[STNode] = [STNode(id=ROOT, vertex=-1, parent=-1)]
        self._axes: Dict[str, GradeAxis] = {"x": GradeAxis(), "y": GradeAxis()}
        self._bands: Dict[int, List[int]] = {d: [] for d in self.band_dims()}
        self._dim_indexes_valid = True

    def __len__(self) -> int:
        return len(self._nodes) - 1

    def __repr__(self) -> str:
        return (
            f"SimplexTree(hom_dim={self.hom_dim}, simplices={len(self)}, "
            f"grid={self.axis_size('x')}x{self.axis_size('y')})"
        )

    # =========================================================================
    # Axis grids
    # =========================================================================

    def _axis(self, axis: Axis) -> GradeAxis:
        try:
            return self._axes[_AXIS_NAMES[axis]]
        except KeyError:
            raise ValueError(f"unknown axis {axis!r}; use 'x' or 'y'") from None

    def axis_size(self, axis: Axis) -> int:
        return len(self._axis(axis))

    def grade_to_index(self, axis: Axis, value: float) -> Optional[int]:
        """Position of `value` on the axis grid, or None if absent."""
        return self._axis(axis).index_of(value)

    def index_to_grade(self, axis: Axis, index: int) -> float:
        return self._axis(axis).value_at(index)

    def grades(self, axis: Axis) -> List[float]:
        return self._axis(axis).values

    def set_axes(self, x_values: Sequence[float], y_values: Sequence[float]) -> None:
        """Replace both grids. Only allowed while the tree is empty."""
        if len(self) > 0:
            raise ValueError("axis grids can only be replaced on an empty simplex tree")
        self._axes = {"x": GradeAxis(x_values), "y": GradeAxis(y_values)}

    def _shift_grades(self, axis: str, start: int) -> None:
        # a value was inserted at `start`; grade indices at or above it move up
        for node in self._nodes[1:]:
            if axis == "x" and node.x >= start:
                node.x += 1
            elif axis == "y" and node.y >= start:
                node.y += 1

    # =========================================================================
    # Nodes
    # =========================================================================

    @property
    def root(self) -> STNode:
        return self._nodes[ROOT]

    def node(self, node_id: int) -> STNode:
        return self._nodes[node_id]

    def children(self, node: STNode) -> List[STNode]:
        return [self._nodes[c] for c in node.children]

    def _find_child(self, node: STNode, vertex: int) -> Tuple[bool, int]:
        """Binary search the children of `node` by vertex label.

        Returns (found, position); when not found, position is where a child
        with this label would be inserted.
        """
        kids = node.children
        lo, hi = 0, len(kids) - 1
        while hi >= lo:
            mid = (lo + hi) // 2
            label = self._nodes[kids[mid]].vertex
            if label == vertex:
                return True, mid
            if label < vertex:
                lo = mid + 1
            else:
                hi = mid - 1
        return False, lo

    def _new_node(self, parent: STNode, vertex: int, x: int, y: int) -> STNode:
        child = STNode(id=len(self._nodes), vertex=vertex, parent=parent.id, x=x, y=y)
        self._nodes.append(child)
        return child

    def _add_child(self, parent: STNode, vertex: int, x: int, y: int) -> STNode:
        """Return the child of `parent` labelled `vertex`, creating it if needed."""
        found, pos = self._find_child(parent, vertex)
        if found:
            return self._nodes[parent.children[pos]]
        child = self._new_node(parent, vertex, x, y)
        parent.children.insert(pos, child.id)
        return child

    def append_child(self, parent: STNode, vertex: int, x: int, y: int, global_index: int) -> STNode:
        """Builder primitive: append a child with an already assigned global index.

        No face closure and no re-index pass. The caller must append children
        in increasing label order and hand out global indexes in preorder.
        """
        if parent.children and self._nodes[parent.children[-1]].vertex >= vertex:
            raise ValueError(
                f"children must be appended in increasing label order (got {vertex} after "
                f"{self._nodes[parent.children[-1]].vertex})"
            )
        child = self._new_node(parent, vertex, x, y)
        child.global_index = global_index
        parent.children.append(child.id)
        parent.child_keys.append(global_index)
        self._dim_indexes_valid = False
        return child

    # =========================================================================
    # Insertion
    # =========================================================================

    def insert(self, vertices: Sequence[int], x_value: float, y_value: float) -> None:
        """Add a simplex and every missing face of it, born at (x_value, y_value).

        Grades are real coordinate values. Faces that already exist keep their
        grades. New values are placed on the axis grids in sorted position.
        Global indexes are recomputed afterwards.
        """
        verts = _validate_vertices(vertices)
        if math.isnan(x_value) or math.isnan(y_value):
            raise ValueError(f"grade values must not be NaN, got ({x_value}, {y_value})")

        x, shifted = self._axes["x"].insert(x_value)
        if shifted:
            self._shift_grades("x", x)
        y, shifted = self._axes["y"].insert(y_value)
        if shifted:
            self._shift_grades("y", y)

        self._add_faces(verts, x, y)
        self._dim_indexes_valid = False
        self.update_global_indexes()

    def _add_faces(self, vertices: Vertices, x: int, y: int) -> None:
        node = self.root
        for v in vertices:
            node = self._add_child(node, v, x, y)

        # the facet that drops the last vertex lies on the path just walked
        for i in range(len(vertices) - 1):
            self._add_faces(vertices[:i] + vertices[i + 1:], x, y)

    # =========================================================================
    # Re-indexing
    # =========================================================================

    def update_global_indexes(self) -> int:
        """Assign preorder ranks to every simplex. Returns the simplex count."""
        return self._assign_global_indexes(self.root, 0)

    def _assign_global_indexes(self, node: STNode, next_index: int) -> int:
        node.child_keys = []
        for cid in node.children:
            child = self._nodes[cid]
            child.global_index = next_index
            node.child_keys.append(next_index)
            next_index = self._assign_global_indexes(child, next_index + 1)
        return next_index

    def band_dims(self) -> Tuple[int, int, int]:
        return (self.hom_dim - 1, self.hom_dim, self.hom_dim + 1)

    def _sweep_key(self, node_id: int) -> Tuple[int, int, int]:
        node = self._nodes[node_id]
        return (node.y, node.x, node.global_index)

    def update_dim_indexes(self) -> None:
        """Rank the simplices of each band in multi-grade sweep order."""
        bands: Dict[int, List[int]] = {d: [] for d in self.band_dims()}
        self._collect_bands(self.root, 0, bands)

        for ids in bands.values():
            ids.sort(key=self._sweep_key)
            for i, nid in enumerate(ids):
                self._nodes[nid].dim_index = i

        self._bands = bands
        self._dim_indexes_valid = True

        if self.verbose:
            sizes = ", ".join(f"dim {d}: {len(ids)}" for d, ids in bands.items() if d >= 0)
            print(f"[bifiltered_ph] dimension indexes updated ({sizes})")

    def _collect_bands(self, node: STNode, dim: int, bands: Dict[int, List[int]]) -> None:
        # children of `node` are simplices of dimension `dim`
        if dim in bands:
            bands[dim].extend(node.children)
        if dim >= self.hom_dim + 1:
            return
        for cid in node.children:
            self._collect_bands(self._nodes[cid], dim + 1, bands)

    def dim_ordered(self, dim: int) -> List[STNode]:
        """Simplices of dimension `dim` in dimension-index order."""
        if dim not in self.band_dims() or dim < 0:
            raise InvalidDimensionRequest(dim, tuple(d for d in self.band_dims() if d >= 0))
        if not self._dim_indexes_valid:
            self.update_dim_indexes()
        return [self._nodes[nid] for nid in self._bands[dim]]

    # =========================================================================
    # Lookups
    # =========================================================================

    def find_simplex(self, vertices: Sequence[int]) -> Optional[STNode]:
        """Node for the simplex with these (sorted) vertices, or None."""
        if len(vertices) == 0:
            return None
        node = self.root
        for v in vertices:
            found, pos = self._find_child(node, v)
            if not found:
                return None
            node = self._nodes[node.children[pos]]
        return node

    def _descend(self, global_index: int) -> List[STNode]:
        """Path of nodes from a vertex down to the simplex with this global index.

        At each level the child with the greatest global index <= the key is
        taken; an exact match ends the search.
        """
        count = self.simplex_count()
        if global_index < 0 or global_index >= count:
            raise ValueError(f"global index {global_index} outside [0, {count})")

        path: List[STNode] = []
        node = self.root
        while True:
            if not node.children:
                raise EmptyTraversalError(global_index, len(path))
            pos = bisect_right(node.child_keys, global_index) - 1
            if pos < 0:
                raise EmptyTraversalError(global_index, len(path))
            node = self._nodes[node.children[pos]]
            path.append(node)
            if node.global_index == global_index:
                return path

    def find_vertices(self, global_index: int) -> Vertices:
        """Vertex list of the simplex with the given global index."""
        return [n.vertex for n in self._descend(global_index)]

    def simplex_data(self, global_index: int) -> SimplexData:
        """Grade indices and dimension of the simplex with the given global index."""
        path = self._descend(global_index)
        target = path[-1]
        return SimplexData(x=target.x, y=target.y, dim=len(path) - 1)

    def node_at(self, global_index: int) -> STNode:
        return self._descend(global_index)[-1]

    def find_nodes_at(self, x_index: int, y_index: int, dim: int) -> List[int]:
        """Global indexes of `dim`-simplices whose grade is <= (x_index, y_index)."""
        found: List[int] = []
        if x_index < 0 or y_index < 0 or dim < 0:
            return found
        self._find_nodes(self.root, 0, found, x_index, y_index, dim)
        return found

    def _find_nodes(self, node: STNode, level: int, found: List[int], x: int, y: int, dim: int) -> None:
        if level == dim + 1 and node.x <= x and node.y <= y:
            found.append(node.global_index)
        if level <= dim:
            for cid in node.children:
                self._find_nodes(self._nodes[cid], level + 1, found, x, y, dim)

    def simplex_count(self) -> int:
        """Total number of simplices: global index of the preorder-last node + 1."""
        node = self.root
        while node.children:
            node = self._nodes[node.children[-1]]
        if node.is_root():
            return 0
        return node.global_index + 1

    def iter_simplices(self) -> Iterator[Tuple[Tuple[int, ...], int, int]]:
        """Yield (vertices, x, y) for every simplex in preorder."""
        stack: List[Tuple[STNode, Tuple[int, ...]]] = [
            (self._nodes[cid], ()) for cid in reversed(self.root.children)
        ]
        while stack:
            node, prefix = stack.pop()
            verts = prefix + (node.vertex,)
            yield verts, node.x, node.y
            for cid in reversed(node.children):
                stack.append((self._nodes[cid], verts))
