from __future__ import annotations

import logging
from types import MappingProxyType
from typing import AbstractSet, Dict, FrozenSet, Iterable, List, Mapping

from .grid import GRID_SIZE

logger = logging.getLogger(__name__)

WinLineId = str


def row_lines(size: int = GRID_SIZE) -> Dict[WinLineId, FrozenSet[int]]:
    return {f"row-{r}": frozenset(r * size + c for c in range(size)) for r in range(size)}


def col_lines(size: int = GRID_SIZE) -> Dict[WinLineId, FrozenSet[int]]:
    return {f"col-{c}": frozenset(r * size + c for r in range(size)) for c in range(size)}


def diagonal_lines(size: int = GRID_SIZE) -> Dict[WinLineId, FrozenSet[int]]:
    return {
        "diag-main": frozenset(i * size + i for i in range(size)),
        "diag-anti": frozenset(i * size + (size - 1 - i) for i in range(size)),
    }


def _build_table() -> Mapping[WinLineId, FrozenSet[int]]:
    table: Dict[WinLineId, FrozenSet[int]] = {}
    table.update(row_lines())
    table.update(col_lines())
    table.update(diagonal_lines())
    return MappingProxyType(table)


# 5 rows, 5 columns, 2 diagonals; built once at import and never mutated.
WIN_LINES: Mapping[WinLineId, FrozenSet[int]] = _build_table()


def completed_lines(selection: AbstractSet[int]) -> FrozenSet[WinLineId]:
    return frozenset(line_id for line_id, cells in WIN_LINES.items() if cells <= selection)


def sorted_line_ids(line_ids: Iterable[WinLineId]) -> List[WinLineId]:
    """Table order (rows, columns, diagonals) for stable display."""
    order = {line_id: pos for pos, line_id in enumerate(WIN_LINES)}
    return sorted(line_ids, key=lambda x: order[x])


class WinDetector:
    """Evaluates the fixed line table against a selection."""

    def evaluate(self, selection: AbstractSet[int]) -> FrozenSet[WinLineId]:
        result = completed_lines(selection)
        if result:
            logger.debug("Completed lines: %s", ", ".join(sorted_line_ids(result)))
        return result
