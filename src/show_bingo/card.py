"""Card controller: one player, one card, one explicit state record."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Sequence, Union

from .alert import AlertCoordinator
from .errors import CardNotReadyError, InvalidShowIdError, ShowBingoError
from .grid import Grid, GridGenerator
from .lines import WinDetector, WinLineId
from .rng import RandomSource
from .selection import SelectionState
from .shows import ShowProvider, ShowRecord

logger = logging.getLogger(__name__)


class CardStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass
class CardState:
    status: CardStatus = CardStatus.IDLE
    show: Optional[ShowRecord] = None
    grid: Optional[Grid] = None
    winning_lines: FrozenSet[WinLineId] = frozenset()
    failure: Optional[ShowBingoError] = None
    selection: SelectionState = field(default_factory=SelectionState)


def parse_show_id(raw: Union[int, str]) -> int:
    if isinstance(raw, bool):
        raise InvalidShowIdError(raw)
    if isinstance(raw, int):
        show_id = raw
    else:
        text = str(raw).strip()
        if not (text.isascii() and text.isdecimal()):
            raise InvalidShowIdError(raw)
        show_id = int(text)
    if show_id <= 0:
        raise InvalidShowIdError(raw)
    return show_id


class BingoCard:
    """Commands and queries for a single bingo card.

    Lifecycle: IDLE -> LOADING -> READY | FAILED. From READY, toggle,
    regenerate and reset keep the card READY.
    """

    def __init__(self, provider: Optional[ShowProvider] = None, rng: Optional[RandomSource] = None):
        self.provider = provider
        self.generator = GridGenerator(rng)
        self.detector = WinDetector()
        self.alerts = AlertCoordinator()
        self.state = CardState()

    # -- commands -------------------------------------------------------

    async def load(self, show_id: Union[int, str]) -> CardStatus:
        """Fetch the show and generate a grid.

        Card errors move the card to FAILED and are kept in `failure()`;
        nothing is retried. Any other exception also leaves the card FAILED
        and is re-raised.
        """
        if self.provider is None:
            raise RuntimeError("BingoCard.load() needs a show provider")
        self.state = CardState(status=CardStatus.LOADING)
        self.alerts.clear()
        try:
            parsed = parse_show_id(show_id)
            record = await self.provider.get_show(parsed)
            self.start(record)
        except ShowBingoError as e:
            logger.warning("Loading show %r failed: %s", show_id, e)
            self.state = CardState(status=CardStatus.FAILED, failure=e)
        except BaseException:
            self.state = CardState(status=CardStatus.FAILED)
            raise
        return self.state.status

    def start(self, record: ShowRecord) -> Grid:
        """Generate a grid for an already fetched record and become READY."""
        grid = self.generate(record.phrases, record.center_square, show_id=record.id)
        self.state = CardState(status=CardStatus.READY, show=record, grid=grid)
        self.alerts.clear()
        logger.info("Card ready for %r (%d phrases)", record.show_title or record.id, len(record.phrases))
        return grid

    def generate(
        self, phrases: Sequence[str], center: Optional[str] = None, *, show_id: Optional[int] = None
    ) -> Grid:
        return self.generator.generate(phrases, center, show_id=show_id)

    def toggle(self, index: int) -> bool:
        """Flip a cell, re-evaluate lines and update the alert; returns the new mark."""
        self._require_ready()
        previous = self.state.winning_lines
        marked = self.state.selection.toggle(index)
        self.state.winning_lines = self.detector.evaluate(self.state.selection.current_selection())
        self.alerts.on_toggle(previous, self.state.winning_lines)
        logger.debug("Cell %d %s", index, "marked" if marked else "unmarked")
        return marked

    def regenerate(self) -> Grid:
        """New grid from the same phrase pool with a fresh selection."""
        self._require_ready()
        show = self.state.show
        if show is None:
            raise CardNotReadyError(self.state.status.value)
        self.state.grid = self.generate(show.phrases, show.center_square, show_id=show.id)
        self.state.selection.regenerate()
        self._refresh_after_restart()
        return self.state.grid

    def reset(self) -> None:
        """Keep the grid, clear every mark except the center."""
        self._require_ready()
        self.state.selection.reset()
        self._refresh_after_restart()

    def dismiss_alert(self) -> None:
        self.alerts.dismiss()

    # -- queries --------------------------------------------------------

    def status(self) -> CardStatus:
        return self.state.status

    def failure(self) -> Optional[ShowBingoError]:
        return self.state.failure

    def show(self) -> Optional[ShowRecord]:
        return self.state.show

    def current_grid(self) -> Optional[Grid]:
        return self.state.grid

    def current_selection(self) -> FrozenSet[int]:
        return self.state.selection.current_selection()

    def current_winning_lines(self) -> FrozenSet[WinLineId]:
        return self.state.winning_lines

    def alert_visible(self) -> bool:
        return self.alerts.visible

    # -- internals ------------------------------------------------------

    def _require_ready(self) -> None:
        if self.state.status is not CardStatus.READY:
            raise CardNotReadyError(self.state.status.value)

    def _refresh_after_restart(self) -> None:
        self.state.winning_lines = self.detector.evaluate(self.state.selection.current_selection())
        self.alerts.clear()
