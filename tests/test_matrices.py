import numpy as np
import pytest

from bifiltered_ph.boundary import boundary_matrix, boundary_matrix_for_order, facets, index_matrix
from bifiltered_ph.direct_sum import merge_matrices, split_matrices
from bifiltered_ph.errors import InvalidDimensionRequest, MissingFacetError
from bifiltered_ph.rips import build_vietoris_rips
from bifiltered_ph.simplex_tree import SimplexTree



def _make_rips_tree(n=10, seed=2, hom_dim=1):
    rng = np.random.default_rng(seed)
    X = rng.uniform(0.0, 1.0, size=(n, 2))
    births = rng.integers(0, 4, size=n)
    points = [{"birth": float(births[i]), "coords": X[i]} for i in range(n)]
    tree = build_vietoris_rips(points, 2, hom_dim + 1, 0.5, hom_dim=hom_dim)
    tree.update_dim_indexes()
    return tree


def test_facets():
    assert facets([1, 2, 4]) == [[2, 4], [1, 4], [1, 2]]
    assert facets([3]) == []


def test_boundary_matrix_hand_example(make_triangle_tree):
    tree = make_triangle_tree()
    d1 = boundary_matrix(tree, 1)
    assert d1.shape == (3, 3)
    assert d1.dtype == np.uint8
    assert d1.toarray().tolist() == [[1, 0, 1], [1, 1, 0], [0, 1, 1]]

    d2 = boundary_matrix(tree, 2)
    assert d2.toarray().tolist() == [[1], [1], [1]]


def test_boundary_columns_have_one_entry_per_facet():
    tree = _make_rips_tree()
    for dim in (1, 2):
        mat = boundary_matrix(tree, dim)
        assert mat.shape == (len(tree.dim_ordered(dim - 1)), len(tree.dim_ordered(dim)))
        counts = np.asarray(mat.sum(axis=0)).ravel()
        assert (counts == dim + 1).all()


def test_boundary_of_boundary_vanishes_mod_two():
    tree = _make_rips_tree(n=12, seed=4)
    d1 = boundary_matrix(tree, 1).astype(np.int64)
    d2 = boundary_matrix(tree, 2).astype(np.int64)
    assert not ((d1 @ d2).toarray() % 2).any()


def test_hom_dim_zero_has_empty_vertex_columns(make_triangle_tree):
    tree = make_triangle_tree(hom_dim=0)
    d0 = boundary_matrix(tree, 0)
    assert d0.shape == (0, 3)
    assert d0.nnz == 0
    assert boundary_matrix(tree, 1).shape == (3, 3)


def test_invalid_dimension_requests(make_triangle_tree):
    tree = make_triangle_tree()
    for bad in (tree.hom_dim - 2, tree.hom_dim - 1, tree.hom_dim + 2):
        with pytest.raises(InvalidDimensionRequest):
            boundary_matrix(tree, bad)
        with pytest.raises(InvalidDimensionRequest):
            index_matrix(tree, bad)


def test_missing_facet_is_fatal(make_triangle_tree):
    tree = make_triangle_tree()
    tree.update_dim_indexes()
    tree.find_simplex([0, 2]).dim_index = None
    with pytest.raises(MissingFacetError):
        boundary_matrix(tree, 2)


def test_boundary_for_custom_order(make_triangle_tree):
    tree = make_triangle_tree()
    gi = {v: tree.find_simplex(list(v)).global_index for v, _, _ in tree.iter_simplices()}
    face_order = {gi[(0,)]: 0, gi[(1,)]: 1, gi[(2,)]: 2}

    mat = boundary_matrix_for_order(tree, [gi[(0, 2)], gi[(0, 1)], gi[(0,)]], face_order)
    assert mat.shape == (3, 3)
    assert mat.toarray().tolist() == [[1, 1, 0], [0, 1, 0], [1, 0, 0]]

    del face_order[gi[(2,)]]
    with pytest.raises(MissingFacetError):
        boundary_matrix_for_order(tree, [gi[(0, 2)]], face_order)


def test_index_matrix_hand_example(make_triangle_tree):
    tree = make_triangle_tree()
    assert index_matrix(tree, 1).tolist() == [[-1, -1], [0, 1], [1, 2]]
    assert index_matrix(tree, 2).tolist() == [[-1, -1], [-1, -1], [-1, 0]]


def test_index_matrix_monotone_and_final_cell():
    tree = _make_rips_tree(n=12, seed=7)
    for dim in (1, 2):
        mat = index_matrix(tree, dim)
        assert mat.shape == (tree.axis_size("y"), tree.axis_size("x"))
        assert (np.diff(mat, axis=0) >= 0).all()
        assert (np.diff(mat, axis=1) >= 0).all()
        assert mat[-1, -1] == len(tree.dim_ordered(dim)) - 1


def test_index_matrix_points_at_columns_of_that_grade():
    tree = _make_rips_tree(n=10, seed=9)
    band = tree.dim_ordered(1)
    mat = index_matrix(tree, 1)
    for node in band:
        last = mat[node.y, node.x]
        assert last >= node.dim_index
        assert (band[last].y, band[last].x) == (node.y, node.x)


def test_index_matrix_empty_band():
    tree = SimplexTree()
    tree.insert([0], 0.0, 0.0)
    tree.insert([1], 1.0, 0.0)
    assert index_matrix(tree, 1).tolist() == [[-1, -1]]


def test_merge_matrices_hand_example(make_triangle_tree):
    tree = make_triangle_tree()
    result = merge_matrices(tree)

    assert result["index"].tolist() == [
        [-1, -1, -1],
        [-1, 0, 1],
        [2, 3, 4],
        [4, 5, 5],
    ]
    assert result["map"].shape == (3, 6)
    assert result["map"].toarray().tolist() == [
        [1, 0, 1, 0, 0, 0],
        [0, 1, 0, 1, 0, 0],
        [0, 0, 0, 0, 1, 1],
    ]
    boundary = result["boundary"].toarray()
    assert boundary.shape == (6, 6)
    assert boundary[:, 0].nonzero()[0].tolist() == [0, 1]  # e01 in B
    assert boundary[:, 1].nonzero()[0].tolist() == [1, 2]  # e12 in B
    assert boundary[:, 2].nonzero()[0].tolist() == [3, 4]  # e01 in C
    assert boundary[:, 3].nonzero()[0].tolist() == [4, 5]  # e12 in C
    assert boundary[:, 4].nonzero()[0].tolist() == [0, 2]  # e02 in B
    assert boundary[:, 5].nonzero()[0].tolist() == [3, 5]  # e02 in C


def test_split_matrices_hand_example(make_triangle_tree):
    tree = make_triangle_tree()
    result = split_matrices(tree)

    assert result["index"].tolist() == [
        [-1, -1, -1],
        [-1, -1, -1],
        [-1, -1, 0],
        [0, 1, 1],
    ]
    assert result["boundary"].toarray().tolist() == [
        [1, 0],
        [1, 0],
        [1, 0],
        [0, 1],
        [0, 1],
        [0, 1],
    ]
    assert result["map"].toarray().tolist() == [
        [1, 0, 0],
        [0, 1, 0],
        [1, 0, 0],
        [0, 1, 0],
        [0, 0, 1],
        [0, 0, 1],
    ]


def test_merge_puts_b_columns_before_c_columns_in_a_shared_cell():
    # [2, 3] sits at grade (1, 0) and [0, 1] at (0, 1), so at cell (x=1, y=1)
    # the B copy of [0, 1] and the C copy of [2, 3] arrive together
    tree = SimplexTree()
    tree.insert([0, 1], 0.0, 1.0)
    tree.insert([2, 3], 1.0, 0.0)
    assert [tree.find_vertices(e.global_index) for e in tree.dim_ordered(1)] == [[2, 3], [0, 1]]

    result = merge_matrices(tree)

    assert result["index"].tolist() == [
        [-1, -1, 0],
        [0, 2, 2],
        [3, 3, 3],
    ]
    assert result["map"].toarray().tolist() == [
        [1, 0, 1, 0],
        [0, 1, 0, 1],
    ]
    boundary = result["boundary"].toarray()
    assert boundary.shape == (8, 4)
    assert boundary[:, 0].nonzero()[0].tolist() == [0, 1]  # [2, 3] in B
    assert boundary[:, 1].nonzero()[0].tolist() == [2, 3]  # [0, 1] in B, cell (1, 1)
    assert boundary[:, 2].nonzero()[0].tolist() == [4, 5]  # [2, 3] in C, cell (1, 1)
    assert boundary[:, 3].nonzero()[0].tolist() == [6, 7]  # [0, 1] in C


def test_merge_and_split_consume_every_simplex():
    tree = _make_rips_tree(n=12, seed=11)
    mid = len(tree.dim_ordered(1))
    high = len(tree.dim_ordered(2))

    merge = merge_matrices(tree)
    assert merge["map"].nnz == 2 * mid
    assert (np.asarray(merge["map"].sum(axis=1)).ravel() == 2).all()
    assert (np.asarray(merge["map"].sum(axis=0)).ravel() == 1).all()
    assert merge["boundary"].nnz == 2 * 2 * mid
    assert merge["index"][-1, -1] == 2 * mid - 1

    split = split_matrices(tree)
    assert split["map"].shape == (2 * mid, mid)
    assert (np.asarray(split["map"].sum(axis=0)).ravel() == 2).all()
    assert split["boundary"].shape == (2 * mid, 2 * high)
    assert split["boundary"].nnz == 2 * 3 * high
    assert split["index"][-1, -1] == 2 * high - 1

    for mat in (merge["index"], split["index"]):
        assert (np.diff(mat, axis=0) >= 0).all()
        assert (np.diff(mat, axis=1) >= 0).all()


def test_exports_are_fresh_copies(make_triangle_tree):
    tree = make_triangle_tree()
    a = index_matrix(tree, 1)
    a[:] = 99
    assert index_matrix(tree, 1).tolist() == [[-1, -1], [0, 1], [1, 2]]
