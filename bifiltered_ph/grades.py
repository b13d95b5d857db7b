"""bifiltered_ph.grades

One axis of the bifiltration grid: a strictly increasing list of distinct
real coordinate values. Simplices store positions into this list (grade
indices) rather than the values themselves.
"""

from __future__ import annotations

import math
from typing import Iterable, Iterator, List, Optional, Tuple


def _grade_value(value: float) -> float:
    value = float(value)
    if math.isnan(value):
        raise ValueError("grade values must not be NaN")
    return value


class GradeAxis:
    """Sorted, duplicate-free coordinate values of one filtration axis."""

    def __init__(self, values: Optional[Iterable[float]] = None) -> None:
        self._values: List[float] = []
        if values is not None:
            for v in sorted(set(_grade_value(v) for v in values)):
                self._values.append(v)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"GradeAxis({self._values!r})"

    @property
    def values(self) -> List[float]:
        return list(self._values)

    def _search(self, value: float) -> int:
        # leftmost position whose value is >= `value`
        lo, hi = 0, len(self._values)
        while lo < hi:
            mid = (lo + hi) // 2
            if self._values[mid] < value:
                lo = mid + 1
            else:
                hi = mid
        return lo

    def index_of(self, value: float) -> Optional[int]:
        """Binary search for `value`; None if it is not on the axis."""
        pos = self._search(float(value))
        if pos < len(self._values) and self._values[pos] == value:
            return pos
        return None

    def value_at(self, index: int) -> float:
        if index < 0 or index >= len(self._values):
            raise IndexError(f"grade index {index} outside [0, {len(self._values)})")
        return self._values[index]

    def append(self, value: float) -> int:
        """Append a value larger than every value already present."""
        value = _grade_value(value)
        if self._values and value <= self._values[-1]:
            raise ValueError(
                f"grade value {value} does not exceed the current maximum {self._values[-1]}"
            )
        self._values.append(value)
        return len(self._values) - 1

    def insert(self, value: float) -> Tuple[int, bool]:
        """Place `value` on the axis, keeping it sorted.

        Returns ``(index, shifted)``. ``shifted`` is True when the value landed
        strictly inside the axis, in which case every grade index >= ``index``
        held elsewhere is now off by one and must be incremented by the caller.
        """
        value = _grade_value(value)
        pos = self._search(value)
        if pos < len(self._values) and self._values[pos] == value:
            return pos, False
        if pos == len(self._values):
            return self.append(value), False
        self._values.insert(pos, value)
        return pos, True
