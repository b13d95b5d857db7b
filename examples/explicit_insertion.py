"""Worked example: building a bifiltered complex by hand

Inserts a few simplices at real-valued grades, then prints the tree, its
axis grids, the dimension-ordered boundary matrix and the index matrix.

Run:
    python examples/explicit_insertion.py
"""

from bifiltered_ph import SimplexTree, boundary_matrix, index_matrix
from bifiltered_ph.pretty import print_grades, print_simplex_tree


def main() -> None:
    tree = SimplexTree(hom_dim=1)
    tree.insert([1, 2, 4], 0.0, 0.0)
    tree.insert([0, 1], 0.5, 1.0)
    tree.insert([0, 4], 1.0, 0.5)
    tree.update_dim_indexes()

    print_simplex_tree(tree)
    print()
    print_grades(tree)

    print("\nboundary matrix (dim 1):")
    print(boundary_matrix(tree, 1).toarray())
    print("\nindex matrix (dim 1), rows = y, columns = x:")
    print(index_matrix(tree, 1))

    gi = tree.find_simplex([1, 2, 4]).global_index
    print(f"\nsimplex {tree.find_vertices(gi)}: {tree.simplex_data(gi)}")


if __name__ == "__main__":
    main()
