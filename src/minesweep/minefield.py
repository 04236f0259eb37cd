"""
Minefield module for Minesweeper.

Implements the minefield grid with mine placement, flood revealing,
flagging, chorded auto-stepping and clear detection.
"""
import logging
from dataclasses import replace
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .spot import Spot, SpotState

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class StepResult(Enum):
    """Outcome of stepping on a spot."""

    PHEW = auto()
    BOOM = auto()
    INVALID = auto()


class FlagToggleResult(Enum):
    """Outcome of toggling a flag."""

    ADDED = auto()
    REMOVED = auto()
    NONE = auto()


# ============================================================================
# Minefield Class
# ============================================================================

class Minefield:
    """
    Minesweeper minefield.

    Coordinates are ``(x, y)`` with ``x`` the column and ``y`` the row,
    ``(0, 0)`` being the top-left spot. Spots are kept in a flat list
    indexed by ``y * width + x``.

    A width or height below 1 is raised to 1 rather than rejected;
    callers that need validation should go through ``GameConfig``.
    """

    def __init__(
        self,
        width: int,
        height: int,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Create an empty minefield with all spots hidden.

        Args:
            width: Number of columns (minimum 1).
            height: Number of rows (minimum 1).
            rng: Random generator used for mine placement.
        """
        self._width = max(int(width), 1)
        self._height = max(int(height), 1)
        self._rng = rng if rng is not None else np.random.default_rng()
        self._mine_count = 0
        self._spots: List[Spot] = [
            Spot() for _ in range(self._width * self._height)
        ]

    def __repr__(self) -> str:
        return (
            f"Minefield(width={self._width}, height={self._height}, "
            f"mines={self._mine_count})"
        )

    # ========================================================================
    # Mine Placement (Low-level)
    # ========================================================================

    def with_mines(self, mine_count: int) -> "Minefield":
        """
        Place mines at distinct random positions.

        At most ``width * height`` mines are placed. Picks are drawn from
        a shrinking list of free indices, so placement never retries no
        matter how dense the field is.

        Args:
            mine_count: Number of mines to place.

        Returns:
            This minefield, for chaining after construction.
        """
        spot_count = len(self._spots)
        mine_count = min(max(int(mine_count), 0), spot_count)

        spots_remaining = list(range(spot_count))
        for _ in range(mine_count):
            pick = int(self._rng.integers(len(spots_remaining)))
            # swap-remove
            spots_remaining[pick], spots_remaining[-1] = (
                spots_remaining[-1],
                spots_remaining[pick],
            )
            index = spots_remaining.pop()
            self.place_mine(index % self._width, index // self._width)

        logger.debug("Placed %d mines in %r", mine_count, self)
        return self

    def with_mines_at(self, coords: Iterable[Coordinate]) -> "Minefield":
        """Place mines at the given coordinates, skipping invalid ones."""
        for x, y in coords:
            self.place_mine(x, y)
        return self

    def place_mine(self, x: int, y: int) -> bool:
        """
        Place a single mine and update neighboring counts.

        Returns:
            True if a mine was placed, False if the coordinates are
            invalid or the spot already holds a mine.
        """
        spot = self._spot_at(x, y)
        if spot is None or spot.is_mine:
            return False

        spot.is_mine = True
        self._mine_count += 1

        for nx, ny in self.neighbors(x, y):
            neighbor = self._spots[self._index(nx, ny)]
            if not neighbor.is_mine:
                neighbor.adjacent_mines += 1
        return True

    # ========================================================================
    # Grid Utilities (Low-level)
    # ========================================================================

    def is_valid(self, x: int, y: int) -> bool:
        """Check if position is within field bounds."""
        return 0 <= x < self._width and 0 <= y < self._height

    def _index(self, x: int, y: int) -> int:
        return y * self._width + x

    def _spot_at(self, x: int, y: int) -> Optional[Spot]:
        if not self.is_valid(x, y):
            return None
        return self._spots[self._index(x, y)]

    def neighbors(self, x: int, y: int) -> List[Coordinate]:
        """
        Get valid neighboring positions.

        Args:
            x: Column of center spot.
            y: Row of center spot.

        Returns:
            Up to 8 (x, y) tuples, column by column. Empty if the center
            itself is out of bounds.
        """
        if not self.is_valid(x, y):
            return []

        neighbors = []
        for delta_x in (-1, 0, 1):
            for delta_y in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self.is_valid(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    def adjacent_flags(self, x: int, y: int) -> int:
        """Count flagged spots adjacent to position."""
        count = 0
        for nx, ny in self.neighbors(x, y):
            if self._spots[self._index(nx, ny)].is_flagged:
                count += 1
        return count

    # ========================================================================
    # Player Actions (Mid-level)
    # ========================================================================

    def step(self, x: int, y: int) -> StepResult:
        """
        Step on the spot at the given position.

        Flags do not protect a spot: a flagged mine still explodes and a
        flagged empty spot is revealed. Stepping on an empty spot with no
        adjacent mines flood reveals the surrounding area.

        Args:
            x: Column to step on.
            y: Row to step on.

        Returns:
            BOOM on a mine, PHEW on an empty spot, INVALID if the
            position is outside the field.
        """
        spot = self._spot_at(x, y)
        if spot is None:
            return StepResult.INVALID

        if spot.is_mine:
            spot.state = SpotState.EXPLODED
            return StepResult.BOOM

        spot.state = SpotState.REVEALED
        if spot.adjacent_mines == 0:
            self._flood_reveal(x, y)
        return StepResult.PHEW

    def _flood_reveal(self, x: int, y: int) -> None:
        """
        Reveal every hidden spot reachable through zero-count spots.

        Spots are marked revealed when pushed, so each one is pushed at
        most once.
        """
        spots_to_visit = [(x, y)]
        while spots_to_visit:
            cx, cy = spots_to_visit.pop()
            for nx, ny in self.neighbors(cx, cy):
                neighbor = self._spots[self._index(nx, ny)]
                if neighbor.is_hidden and not neighbor.is_mine:
                    neighbor.state = SpotState.REVEALED
                    if neighbor.adjacent_mines == 0:
                        spots_to_visit.append((nx, ny))

    def auto_step(self, x: int, y: int) -> StepResult:
        """
        Chord: step on all hidden neighbors of a satisfied revealed spot.

        Only acts when the spot is revealed and the number of flags around
        it equals its adjacent mine count. Stops at the first explosion,
        leaving the remaining neighbors untouched.

        Returns:
            INVALID if the position is outside the field or holds a mine,
            BOOM if an unflagged mine was stepped on, PHEW otherwise.
        """
        spot = self._spot_at(x, y)
        if spot is None or spot.is_mine:
            return StepResult.INVALID

        if not spot.is_revealed:
            return StepResult.PHEW
        if self.adjacent_flags(x, y) != spot.adjacent_mines:
            return StepResult.PHEW

        for nx, ny in self.neighbors(x, y):
            if self._spots[self._index(nx, ny)].is_hidden:
                result = self.step(nx, ny)
                if result != StepResult.PHEW:
                    return result
        return StepResult.PHEW

    def toggle_flag(self, x: int, y: int) -> FlagToggleResult:
        """
        Flag a hidden spot, or unflag a flagged one.

        Returns:
            ADDED or REMOVED on a change, NONE for revealed or exploded
            spots and invalid positions.
        """
        spot = self._spot_at(x, y)
        if spot is None:
            return FlagToggleResult.NONE

        if spot.state == SpotState.HIDDEN:
            spot.state = SpotState.FLAGGED
            return FlagToggleResult.ADDED
        if spot.state == SpotState.FLAGGED:
            spot.state = SpotState.HIDDEN
            return FlagToggleResult.REMOVED
        return FlagToggleResult.NONE

    def is_cleared(self) -> bool:
        """Check that every mine is flagged and every empty spot revealed."""
        for spot in self._spots:
            if spot.is_mine:
                if not spot.is_flagged:
                    return False
            elif not spot.is_revealed:
                return False
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def mine_count(self) -> int:
        """Number of mines in the field."""
        return self._mine_count

    @property
    def flag_count(self) -> int:
        """Number of flags currently placed."""
        return sum(1 for spot in self._spots if spot.is_flagged)

    @property
    def remaining_flags(self) -> int:
        """Mines minus placed flags; negative when over-flagged."""
        return self._mine_count - self.flag_count

    def spot(self, x: int, y: int) -> Optional[Spot]:
        """Get a copy of the spot at position, or None if invalid."""
        spot = self._spot_at(x, y)
        if spot is None:
            return None
        return replace(spot)

    def spots(self) -> Iterator[Tuple[Coordinate, Spot]]:
        """Iterate over ((x, y), spot copy) pairs, row by row."""
        for index, spot in enumerate(self._spots):
            yield (index % self._width, index // self._width), replace(spot)

    def __iter__(self) -> Iterator[Tuple[Coordinate, Spot]]:
        return self.spots()

    def hidden_coords(self) -> List[Coordinate]:
        """Positions of all hidden (unflagged) spots."""
        return [
            (index % self._width, index // self._width)
            for index, spot in enumerate(self._spots)
            if spot.is_hidden
        ]

    def to_array(self) -> np.ndarray:
        """
        Get the visible field state as a numpy array.

        Returns:
            int8 array of shape (height, width) indexed ``[y, x]`` where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = exploded mine
        """
        obs = np.fromiter(
            (spot.to_observation() for spot in self._spots),
            dtype=np.int8,
            count=len(self._spots),
        )
        return obs.reshape(self._height, self._width)
