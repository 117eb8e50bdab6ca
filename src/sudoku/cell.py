"""A single Sudoku cell: a finalized value or the set of values still possible."""

from typing import Optional, Set

GROUP_SIZE = 9


class Cell:
    """
    One grid position. Values are 0-based internally and shown 1-based.
    The cell knows nothing about its neighbours; the owning grid propagates
    eliminations.
    """

    __slots__ = ("resolved", "_possible")

    def __init__(self, size: int = GROUP_SIZE):
        self.resolved: Optional[int] = None
        self._possible: Set[int] = set(range(size))

    def finalize(self, value: int) -> None:
        self.resolved = value
        self._possible = {value}

    def remove(self, value: int) -> None:
        """Drop `value` as a candidate unless this cell is already finalized to it."""
        if self.resolved == value:
            return
        self._possible.discard(value)

    def is_finalized(self) -> bool:
        return self.resolved is not None

    def is_empty(self) -> bool:
        """True when no candidate is left for an unfinalized cell."""
        return self.resolved is None and not self._possible

    def ready(self) -> Optional[int]:
        """Return the only remaining candidate of an unfinalized cell, if any."""
        if self.resolved is not None or len(self._possible) != 1:
            return None
        return next(iter(self._possible))

    def possible(self) -> Set[int]:
        return set(self._possible)

    def describe(self) -> str:
        candidates = ",".join(str(v + 1) for v in sorted(self._possible))
        return f"{self}:{{{candidates}}}"

    def __str__(self) -> str:
        if self.resolved is None:
            return "X"
        return str(self.resolved + 1)

    def __repr__(self) -> str:
        return f"Cell({self.describe()})"
