"""bifiltered_ph.node

Nodes of the simplex tree.

Nodes live in an arena (a list owned by `SimplexTree`) and refer to each
other by their position in that list. Position 0 is the root, which stands
for the empty simplex and carries no grade.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

ROOT = 0


@dataclass
class STNode:
    id: int                          # position in the arena
    vertex: int                      # label of the last vertex of the simplex
    parent: int                      # arena position of the parent (-1 for the root)
    x: int = 0                       # grade index on the first axis
    y: int = 0                       # grade index on the second axis
    global_index: int = -1
    dim_index: Optional[int] = None  # only set inside the hom_dim band
    children: List[int] = field(default_factory=list)     # sorted by vertex label
    # global indexes of `children`, same order; rebuilt by every re-index pass
    child_keys: List[int] = field(default_factory=list)

    @property
    def grade(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def is_root(self) -> bool:
        return self.parent < 0
