"""
Minesweeper game module.

Provides the minefield engine, game sessions and an RL environment.
"""
from .spot import Spot, SpotKind, SpotState
from .minefield import Minefield, StepResult, FlagToggleResult
from .session import (
    Game,
    GameConfig,
    GameState,
    Difficulty,
    HighScoreTable,
    Score,
    EASY,
    MEDIUM,
    HARD,
    DEFAULT_CUSTOM,
)
from .render import render_field, render_with_axes
from .environment import MinesweeperEnv, ActionKind

__all__ = [
    "Spot",
    "SpotKind",
    "SpotState",
    "Minefield",
    "StepResult",
    "FlagToggleResult",
    "Game",
    "GameConfig",
    "GameState",
    "Difficulty",
    "HighScoreTable",
    "Score",
    "EASY",
    "MEDIUM",
    "HARD",
    "DEFAULT_CUSTOM",
    "render_field",
    "render_with_axes",
    "MinesweeperEnv",
    "ActionKind",
]
