"""
Spot module for Minesweeper.

Represents a single spot of the minefield: what it holds (mine or empty
with a neighbor count) and how far the player has uncovered it.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class SpotKind(Enum):
    """What a spot holds."""

    MINE = auto()
    EMPTY = auto()


class SpotState(Enum):
    """Visibility state of a spot."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()
    EXPLODED = auto()


# ============================================================================
# Spot Data Class
# ============================================================================

@dataclass
class Spot:
    """
    A single spot in the minefield grid.

    Attributes:
        is_mine: Whether this spot holds a mine.
        adjacent_mines: Count of mines among the neighboring spots (0-8).
            Unused for mine spots.
        state: Current visibility state.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: SpotState = SpotState.HIDDEN

    @property
    def kind(self) -> SpotKind:
        """Kind of the spot, fixed once mines are placed."""
        return SpotKind.MINE if self.is_mine else SpotKind.EMPTY

    @property
    def is_hidden(self) -> bool:
        return self.state == SpotState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state == SpotState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state == SpotState.FLAGGED

    @property
    def is_exploded(self) -> bool:
        return self.state == SpotState.EXPLODED

    def to_observation(self) -> int:
        """
        Convert spot to an observation value.

        Returns:
            -1: Hidden spot
            -2: Flagged spot
            0-8: Revealed empty spot with adjacent mine count
            9: Exploded (or revealed) mine
        """
        if self.state == SpotState.HIDDEN:
            return -1
        if self.state == SpotState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines
