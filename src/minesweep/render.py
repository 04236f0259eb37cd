"""
Text rendering for Minesweeper fields.

Reads spot snapshots through the Minefield accessors only.
"""
from typing import List

from .minefield import Minefield
from .spot import Spot, SpotState


def _symbol(spot: Spot, reveal_mines: bool) -> str:
    """Single character for a spot."""
    if spot.state == SpotState.HIDDEN:
        return "M" if reveal_mines and spot.is_mine else "."
    if spot.state == SpotState.FLAGGED:
        return "F"
    if spot.state == SpotState.EXPLODED or spot.is_mine:
        return "*"
    if spot.adjacent_mines == 0:
        return " "
    return str(spot.adjacent_mines)


def symbol_grid(field: Minefield, reveal_mines: bool = False) -> List[List[str]]:
    """Symbols indexed ``[y][x]``."""
    rows: List[List[str]] = [[] for _ in range(field.height)]
    for (_, y), spot in field.spots():
        rows[y].append(_symbol(spot, reveal_mines))
    return rows


def render_field(field: Minefield, reveal_mines: bool = False) -> str:
    """
    Render a field as ASCII, one line per row.

    Args:
        field: Minefield to render.
        reveal_mines: Show hidden mines as ``M`` (e.g. after game over).

    Returns:
        Rows of space-separated symbols.
    """
    return "\n".join(
        " ".join(row) for row in symbol_grid(field, reveal_mines)
    )


def render_with_axes(field: Minefield, reveal_mines: bool = False) -> str:
    """Render a field with column (x) and row (y) indices."""
    label_width = len(str(max(field.width, field.height) - 1))
    cell_width = label_width + 1

    header = " " * (label_width + 2) + "".join(
        str(x).rjust(cell_width) for x in range(field.width)
    )
    lines = [header]
    for y, row in enumerate(symbol_grid(field, reveal_mines)):
        cells = "".join(symbol.rjust(cell_width) for symbol in row)
        lines.append(f"{str(y).rjust(label_width)} |{cells}")
    return "\n".join(lines)
