"""Pretty-print helpers for inspecting a bifiltered simplex tree.

Kept out of the core algorithms so the tree itself never writes to stdout
except for `verbose` progress lines.
"""

from __future__ import annotations

from typing import List

from .node import STNode
from .simplex_tree import SimplexTree


def _format_grade(tree: SimplexTree, node: STNode) -> str:
    gx = tree.index_to_grade("x", node.x)
    gy = tree.index_to_grade("y", node.y)
    return f"({gx:g}, {gy:g})"


def format_simplex_tree(tree: SimplexTree, *, show_values: bool = True) -> str:
    """Render the tree one node per line, indented by depth.

    Each line shows the vertex label, grade indices, grade values (optional),
    global index and, inside the indexed band, the dimension index.
    """
    lines: List[str] = [repr(tree)]

    def _walk(node: STNode, depth: int) -> None:
        for child in tree.children(node):
            parts = [f"{'  ' * (depth + 1)}{child.vertex}", f"grade=[{child.x},{child.y}]"]
            if show_values:
                parts.append(_format_grade(tree, child))
            parts.append(f"gi={child.global_index}")
            if child.dim_index is not None:
                parts.append(f"di={child.dim_index}")
            lines.append("  ".join(parts))
            _walk(child, depth + 1)

    _walk(tree.root, 0)
    return "\n".join(lines)


def print_simplex_tree(tree: SimplexTree, *, show_values: bool = True) -> None:
    print(format_simplex_tree(tree, show_values=show_values))


def print_grades(tree: SimplexTree) -> None:
    """Print both axis grids."""
    for axis, name in (("x", "GRADE X"), ("y", "GRADE Y")):
        values = tree.grades(axis)
        print(f"{name} ({len(values)}):")
        print("  " + (", ".join(f"{v:g}" for v in values) if values else "(empty)"))
