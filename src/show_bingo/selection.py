from __future__ import annotations

from typing import FrozenSet, Set

from .grid import CELL_COUNT, CENTER_INDEX


def initial_selection() -> FrozenSet[int]:
    """Selection of a freshly created grid: only the center is marked."""
    return frozenset({CENTER_INDEX})


class SelectionState:
    """Set of marked cell indices (0..24)."""

    def __init__(self) -> None:
        self._marked: Set[int] = set(initial_selection())

    def toggle(self, index: int) -> bool:
        """Flip membership of `index`; returns True when the cell is now marked.

        The center is not exempt. Out-of-range indices raise IndexError.
        """
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"cell index must be int, got {type(index).__name__}")
        if not 0 <= index < CELL_COUNT:
            raise IndexError(f"cell index {index} outside 0..{CELL_COUNT - 1}")
        if index in self._marked:
            self._marked.remove(index)
            return False
        self._marked.add(index)
        return True

    def reset(self) -> None:
        self._marked.clear()
        self._marked.update(initial_selection())

    def regenerate(self) -> None:
        # A new grid starts from the same state reset() converges to.
        self._marked = set(initial_selection())

    def current_selection(self) -> FrozenSet[int]:
        return frozenset(self._marked)
