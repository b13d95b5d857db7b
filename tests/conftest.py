import pytest

from bifiltered_ph.simplex_tree import SimplexTree


def _make_triangle_tree(hom_dim=1):
    """Triangle {0,1,2} whose faces appear at different grades.

    grade indices: v0, v1 (0,0); v2 (1,0); e01 (0,1); e12 (1,1); e02 (1,2); t012 (1,2)
    global indexes: 0 (0), 1 (0,1), 2 (0,1,2), 3 (0,2), 4 (1), 5 (1,2), 6 (2)
    """
    tree = SimplexTree(hom_dim)
    tree.insert([0], 0.0, 0.0)
    tree.insert([1], 0.0, 0.0)
    tree.insert([2], 1.0, 0.0)
    tree.insert([0, 1], 0.0, 1.0)
    tree.insert([1, 2], 1.0, 1.0)
    tree.insert([0, 2], 1.0, 2.0)
    tree.insert([0, 1, 2], 1.0, 2.0)
    return tree


@pytest.fixture
def make_triangle_tree():
    return _make_triangle_tree
