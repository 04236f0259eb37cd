"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports, and the root for main.py
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweep import Game, GameConfig, Minefield, Spot


# ============================================================================
# Minefield Fixtures
# ============================================================================

@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for reproducible mine placement."""
    return np.random.default_rng(1234)


@pytest.fixture
def empty_field() -> Minefield:
    """Create a 5x5 field with no mines for flood testing."""
    return Minefield(5, 5)


@pytest.fixture
def small_field() -> Minefield:
    """
    Create a 3x4 field with mines at (2, 0) and (0, 3).

        x: 0 1 2
    y=0 [   1 * ]
    y=1 [   1 1 ]
    y=2 [ 1 1   ]
    y=3 [ * 1   ]
    """
    return Minefield(3, 4).with_mines_at([(2, 0), (0, 3)])


@pytest.fixture
def maze_field() -> Minefield:
    """
    Create a 10x10 field whose zero region is bounded by numbers.

        x: 0 1 2 3 4 5 6 7 8 9
    y=0 [     1 * 1           ]
    y=1 [     1 1 1           ]
    y=2 [           1 1 1     ]
    y=3 [   1 1 1   1 * 1 1 1 ]
    y=4 [   1 * 1   1 1 1 1 * ]
    y=5 [   1 1 1         1 1 ]
    y=6 [         1 1 2 1 1   ]
    y=7 [         1 * 2 * 1   ]
    y=8 [         1 1 2 1 1   ]
    y=9 [                     ]
    """
    mines = [(2, 4), (5, 7), (7, 7), (9, 4), (6, 3), (3, 0)]
    return Minefield(10, 10).with_mines_at(mines)


@pytest.fixture
def single_mine_field() -> Minefield:
    """Create a 3x3 field with one mine in the top-left corner."""
    return Minefield(3, 3).with_mines_at([(0, 0)])


# ============================================================================
# Spot Fixtures
# ============================================================================

@pytest.fixture
def hidden_spot() -> Spot:
    """Create a hidden empty spot."""
    return Spot()


@pytest.fixture
def mine_spot() -> Spot:
    """Create a spot containing a mine."""
    return Spot(is_mine=True)


# ============================================================================
# Game Fixtures
# ============================================================================

class FakeClock:
    """Manually advanced time source."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tiny_config() -> GameConfig:
    """A 3x3 game with a single mine."""
    return GameConfig(3, 3, 1)


@pytest.fixture
def tiny_game(tiny_config: GameConfig, clock: FakeClock) -> Game:
    """
    Create a 3x3 game with the mine forced into the top-left corner.
    """
    game = Game(tiny_config, rng=np.random.default_rng(0), clock=clock)
    game.field = Minefield(3, 3).with_mines_at([(0, 0)])
    return game
