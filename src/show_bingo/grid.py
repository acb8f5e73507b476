"""Grid generation: a shuffled 24-phrase subset around a fixed center cell."""

from __future__ import annotations

import logging
from typing import List, MutableSequence, Optional, Sequence, Tuple, TypeVar

from .errors import InsufficientPhrasesError
from .rng import RandomSource, create_rng

logger = logging.getLogger(__name__)

GRID_SIZE = 5
CELL_COUNT = GRID_SIZE * GRID_SIZE
CENTER_INDEX = CELL_COUNT // 2
MIN_PHRASES = CELL_COUNT - 1
DEFAULT_CENTER_LABEL = "FREE SPACE"

T = TypeVar("T")

Grid = Tuple[str, ...]


def fisher_yates_shuffle(items: MutableSequence[T], rng: RandomSource) -> None:
    """Shuffle in place, walking i from the last index down to 1."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


def resolve_center_label(center: Optional[str]) -> str:
    if center is None or not center.strip():
        return DEFAULT_CENTER_LABEL
    return center


def generate_grid(
    phrases: Sequence[str],
    center: Optional[str],
    rng: RandomSource,
    *,
    show_id: Optional[int] = None,
) -> Grid:
    """Build a row-major 25-cell grid.

    Raises InsufficientPhrasesError when fewer than 24 phrases are supplied.
    """
    if len(phrases) < MIN_PHRASES:
        raise InsufficientPhrasesError(len(phrases), show_id=show_id, required=MIN_PHRASES)

    pool: List[str] = list(phrases)
    fisher_yates_shuffle(pool, rng)
    cells = pool[:MIN_PHRASES]
    cells.insert(CENTER_INDEX, resolve_center_label(center))
    logger.debug("Generated grid from pool of %d phrases (%s)", len(phrases), rng.engine)
    return tuple(cells)


def grid_rows(grid: Sequence[str]) -> List[List[str]]:
    return [list(grid[r * GRID_SIZE:(r + 1) * GRID_SIZE]) for r in range(GRID_SIZE)]


class GridGenerator:
    """Grid factory bound to one random source."""

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng if rng is not None else create_rng("py_random")

    def generate(
        self, phrases: Sequence[str], center: Optional[str] = None, *, show_id: Optional[int] = None
    ) -> Grid:
        return generate_grid(phrases, center, self.rng, show_id=show_id)
