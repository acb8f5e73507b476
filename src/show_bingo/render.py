from __future__ import annotations

from typing import Optional

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .card import BingoCard
from .grid import CENTER_INDEX, GRID_SIZE
from .lines import WIN_LINES, sorted_line_ids


def card_table(card: BingoCard, *, show_indices: bool = True) -> Table:
    grid = card.current_grid()
    if grid is None:
        raise ValueError("card has no grid to render")
    show = card.show()
    title: Optional[str] = None
    if show is not None:
        title = show.show_title or None
        if show.game_title:
            title = f"{title} - {show.game_title}" if title else show.game_title

    selection = card.current_selection()
    in_win = set()
    for line_id in card.current_winning_lines():
        in_win.update(WIN_LINES[line_id])

    table = Table(title=title, box=box.SQUARE, show_header=False, show_lines=True, expand=False)
    for _ in range(GRID_SIZE):
        table.add_column(justify="center", vertical="middle", width=16, overflow="fold")

    for row in range(GRID_SIZE):
        cells = []
        for col in range(GRID_SIZE):
            idx = row * GRID_SIZE + col
            style = ""
            if idx in in_win:
                style = "bold black on green"
            elif idx in selection:
                style = "bold black on yellow"
            elif idx == CENTER_INDEX:
                style = "italic"
            cell = Text(grid[idx], style=style)
            if show_indices:
                cell = Text.assemble((f"{idx}\n", "dim"), cell)
            cells.append(cell)
        table.add_row(*cells)
    return table


def bingo_panel(card: BingoCard) -> Panel:
    message = "BINGO!"
    lines = sorted_line_ids(card.current_winning_lines())
    if lines:
        message = f"{message}  {', '.join(lines)}"
    return Panel(Text(message, style="bold green"), expand=False)
