from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet

logger = logging.getLogger(__name__)


@dataclass
class AlertState:
    visible: bool = False
    last_win_count: int = 0


class AlertCoordinator:
    """Edge-triggered bingo notification.

    Hidden -> Visible only when the count of completed lines grows.
    Visible -> Hidden only through dismiss() or clear().
    """

    def __init__(self) -> None:
        self.state = AlertState()

    @property
    def visible(self) -> bool:
        return self.state.visible

    def on_toggle(self, previous_lines: AbstractSet[str], new_lines: AbstractSet[str]) -> bool:
        """Record a toggle result; returns True when the win count grew."""
        raised = len(new_lines) > len(previous_lines)
        self.state.last_win_count = len(new_lines)
        if raised:
            if not self.state.visible:
                logger.info("BINGO! %d line(s) complete", len(new_lines))
            self.state.visible = True
        return raised

    def dismiss(self) -> None:
        self.state.visible = False

    def clear(self) -> None:
        """Return to a fresh playing state (new grid or reset)."""
        self.state = AlertState()
