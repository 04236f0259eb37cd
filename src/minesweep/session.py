"""
Game session module for Minesweeper.

Wraps a Minefield with difficulty configuration, the ready/running/
paused/stopped lifecycle, the flag counter, elapsed time and a
high score ranking.
"""
import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Dict, List, Optional

import numpy as np

from .minefield import FlagToggleResult, Minefield, StepResult

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a Minesweeper game.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mines: Total mines to place.
    """

    width: int = 10
    height: int = 10
    mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Field dimensions must be positive")
        if self.mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height
        if self.mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")


# Preset difficulty levels
EASY = GameConfig(10, 10, 10)
MEDIUM = GameConfig(16, 16, 40)
HARD = GameConfig(30, 16, 99)
DEFAULT_CUSTOM = GameConfig(45, 24, 150)


class Difficulty(Enum):
    """Game difficulty, with a catch-all for custom configurations."""

    EASY = auto()
    MEDIUM = auto()
    HARD = auto()
    CUSTOM = auto()

    @classmethod
    def from_config(cls, config: GameConfig) -> "Difficulty":
        """Match a configuration against the presets."""
        for difficulty, preset in _PRESETS.items():
            if config == preset:
                return difficulty
        return cls.CUSTOM

    @property
    def config(self) -> Optional[GameConfig]:
        """Preset configuration, or None for CUSTOM."""
        return _PRESETS.get(self)

    @property
    def is_ranked(self) -> bool:
        """Whether high scores are kept for this difficulty."""
        return self is not Difficulty.CUSTOM

    def __str__(self) -> str:
        config = self.config
        if config is None:
            return "Custom"
        return (
            f"{self.name.capitalize()} "
            f"(w:{config.width}, h:{config.height}, m:{config.mines})"
        )


_PRESETS: Dict[Difficulty, GameConfig] = {
    Difficulty.EASY: EASY,
    Difficulty.MEDIUM: MEDIUM,
    Difficulty.HARD: HARD,
}


class GameState(Enum):
    """Possible states of the game."""

    READY = auto()
    RUNNING = auto()
    PAUSED = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# High Scores
# ============================================================================

MAX_HIGH_SCORES_PER_LEVEL = 3
MAX_HIGH_SCORE_NAME_LEN = 32


@dataclass
class Score:
    """
    A finished game time, in whole seconds.

    Names must be shorter than MAX_HIGH_SCORE_NAME_LEN characters.
    """

    name: str
    seconds: int

    def __post_init__(self) -> None:
        self.name = self.name[:MAX_HIGH_SCORE_NAME_LEN - 1]


@dataclass
class HighScoreTable:
    """
    Fastest times per ranked difficulty.

    Scores are kept sorted from fastest to slowest. A new score goes in
    front of the first strictly slower one, so ties keep their arrival
    order.
    """

    max_per_level: int = MAX_HIGH_SCORES_PER_LEVEL
    _scores: Dict[Difficulty, List[Score]] = field(default_factory=dict)

    def insert(self, difficulty: Difficulty, score: Score) -> Optional[int]:
        """
        Try to rank a score.

        Returns:
            Index the score was inserted at, or None if it did not make
            the table or the difficulty is not ranked.
        """
        if not difficulty.is_ranked or self.max_per_level < 1:
            return None

        scores = self._scores.setdefault(difficulty, [])
        for index, existing in enumerate(scores):
            if score.seconds < existing.seconds:
                scores.insert(index, score)
                del scores[self.max_per_level:]
                return index

        if len(scores) < self.max_per_level:
            scores.append(score)
            return len(scores) - 1
        return None

    def scores(self, difficulty: Difficulty) -> List[Score]:
        """Ranked scores for a difficulty, fastest first."""
        return list(self._scores.get(difficulty, []))


# ============================================================================
# Game Session
# ============================================================================

class Game:
    """
    A single Minesweeper game session.

    The first step or flag starts the clock. Steps and flags are ignored
    once the game is paused, won or lost.
    """

    def __init__(
        self,
        config: GameConfig = EASY,
        rng: Optional[np.random.Generator] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize a game session.

        Args:
            config: Field size and mine count.
            rng: Random generator for mine placement.
            clock: Monotonic time source in seconds.
        """
        self._rng = rng if rng is not None else np.random.default_rng()
        self._clock = clock
        self.reset(config)

    def reset(self, config: Optional[GameConfig] = None) -> None:
        """Start over with a fresh field, optionally changing config."""
        if config is not None:
            self.config = config
        self.field = Minefield(
            self.config.width, self.config.height, rng=self._rng
        ).with_mines(self.config.mines)
        self._state = GameState.READY
        self._started_at: Optional[float] = None
        self._elapsed = 0.0
        self.remaining_flags = self.config.mines

    # ========================================================================
    # Lifecycle (Low-level)
    # ========================================================================

    def _start_if_ready(self) -> None:
        if self._state == GameState.READY:
            self._elapsed = 0.0
            self._started_at = self._clock()
            self._state = GameState.RUNNING

    def _stop_clock(self) -> None:
        if self._started_at is not None:
            self._elapsed += self._clock() - self._started_at
            self._started_at = None

    def _game_over(self, won: bool) -> None:
        self._stop_clock()
        self._state = GameState.WON if won else GameState.LOST
        logger.debug(
            "Game over (%s) after %.1fs", self._state.name, self._elapsed
        )

    def pause(self) -> bool:
        """Pause a running game. Returns True if the game was paused."""
        if self._state != GameState.RUNNING:
            return False
        self._stop_clock()
        self._state = GameState.PAUSED
        return True

    def resume(self) -> bool:
        """Resume a paused game. Returns True if the game was resumed."""
        if self._state != GameState.PAUSED:
            return False
        self._started_at = self._clock()
        self._state = GameState.RUNNING
        return True

    # ========================================================================
    # Player Actions (Mid-level)
    # ========================================================================

    def _after_step(self, result: StepResult) -> StepResult:
        if result == StepResult.BOOM:
            self._game_over(won=False)
        elif result == StepResult.PHEW and self.field.is_cleared():
            self._game_over(won=True)
        return result

    def step(self, x: int, y: int) -> StepResult:
        """Step on a spot, starting the game if it is ready."""
        self._start_if_ready()
        if self._state != GameState.RUNNING:
            return StepResult.INVALID
        return self._after_step(self.field.step(x, y))

    def auto_step(self, x: int, y: int) -> StepResult:
        """Chord on a revealed spot of a running game."""
        if self._state != GameState.RUNNING:
            return StepResult.INVALID
        return self._after_step(self.field.auto_step(x, y))

    def toggle_flag(self, x: int, y: int) -> FlagToggleResult:
        """Toggle a flag, starting the game if it is ready."""
        self._start_if_ready()
        if self._state != GameState.RUNNING:
            return FlagToggleResult.NONE

        result = self.field.toggle_flag(x, y)
        if result == FlagToggleResult.REMOVED:
            self.remaining_flags += 1
        elif result == FlagToggleResult.ADDED:
            self.remaining_flags -= 1
            if self.field.is_cleared():
                self._game_over(won=True)
        return result

    def record_win(self, table: HighScoreTable, name: str) -> Optional[int]:
        """
        Add the finished time of a won game to a high score table.

        Returns:
            Rank index, or None if the game was not won, is not ranked,
            or was too slow.
        """
        if self._state != GameState.WON:
            return None
        return table.insert(
            self.difficulty, Score(name, int(self.elapsed_seconds))
        )

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def difficulty(self) -> Difficulty:
        return Difficulty.from_config(self.config)

    @property
    def is_over(self) -> bool:
        """Check if game was won or lost."""
        return self._state in (GameState.WON, GameState.LOST)

    @property
    def is_won(self) -> bool:
        return self._state == GameState.WON

    @property
    def elapsed_seconds(self) -> float:
        """Time spent running, excluding pauses."""
        if self._started_at is None:
            return self._elapsed
        return self._elapsed + self._clock() - self._started_at
