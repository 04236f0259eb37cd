"""
Gymnasium environment wrapper for Minesweeper.

Exposes a game session through the standard RL interface.
"""
from enum import IntEnum
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .minefield import FlagToggleResult, StepResult
from .render import render_field
from .session import Game, GameConfig, EASY


class ActionKind(IntEnum):
    """Action families, in action space order."""

    STEP = 0
    FLAG = 1
    AUTO_STEP = 2


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array indexed [y, x] where:
        - -1 = hidden spot
        - -2 = flagged spot
        - 0-8 = revealed spot with adjacent mine count
        - 9 = exploded mine

    Actions:
        Discrete action space of size 3 * width * height. Action a is
        kind a // (width * height) (0 step, 1 flag, 2 auto step) on the
        spot with index a % (width * height) == y * width + x.

    Rewards:
        - +1 for a step or auto step that revealed something
        - +10 for clearing the field
        - -10 for hitting a mine
        - 0 for a flag toggle
        - -0.1 for an invalid or no-op action
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Game configuration (default: easy preset).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or EASY
        self.render_mode = render_mode
        self._cells = self.config.width * self.config.height
        self.game = Game(self.config, rng=self.np_random)

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(ActionKind) * self._cells)

        self._steps = 0
        self._total_safe_cells = self._cells - self.config.mines

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.game = Game(self.config, rng=self.np_random)
        self._steps = 0

        return self.game.field.to_array(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        kind, x, y = self.decode_action(action)
        self._steps += 1

        reward = self._apply(kind, x, y)
        observation = self.game.field.to_array()
        terminated = self.game.is_over

        return observation, reward, terminated, False, self._get_info()

    def decode_action(self, action: int) -> Tuple[ActionKind, int, int]:
        """Convert flat action index to (kind, x, y)."""
        action = int(action)
        if not 0 <= action < self.action_space.n:
            raise ValueError(f"Action {action} outside action space")
        kind, index = divmod(action, self._cells)
        x, y = index % self.config.width, index // self.config.width
        return ActionKind(kind), x, y

    def encode_action(self, kind: ActionKind, x: int, y: int) -> int:
        """Convert (kind, x, y) to flat action index."""
        return int(kind) * self._cells + y * self.config.width + x

    def _apply(self, kind: ActionKind, x: int, y: int) -> float:
        """Perform an action on the game and compute its reward."""
        if kind == ActionKind.FLAG:
            flag_result = self.game.toggle_flag(x, y)
            if flag_result == FlagToggleResult.NONE:
                return -0.1
            return 10.0 if self.game.is_won else 0.0

        revealed_before = self._revealed_count()
        if kind == ActionKind.STEP:
            result = self.game.step(x, y)
        else:
            result = self.game.auto_step(x, y)

        if result == StepResult.BOOM:
            return -10.0
        if self.game.is_won:
            return 10.0
        if result == StepResult.INVALID:
            return -0.1
        if self._revealed_count() > revealed_before:
            return 1.0
        return -0.1

    def _revealed_count(self) -> int:
        obs = self.game.field.to_array()
        return int(np.count_nonzero((obs >= 0) & (obs <= 8)))

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self._revealed_count(),
            "total_safe": self._total_safe_cells,
            "remaining_flags": self.game.remaining_flags,
            "game_state": self.game.state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current field state."""
        if self.render_mode == "ansi":
            return render_field(self.game.field)
        if self.render_mode == "human":
            print(render_field(self.game.field))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of useful actions.

        Returns:
            int8 array where 1 = valid action, usable as the mask
            argument of ``action_space.sample``.
        """
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        if self.game.is_over:
            return mask

        field = self.game.field
        for (x, y), spot in field.spots():
            index = y * self.config.width + x
            if spot.is_hidden or spot.is_flagged:
                mask[ActionKind.STEP * self._cells + index] = 1
                mask[ActionKind.FLAG * self._cells + index] = 1
            elif spot.is_revealed and spot.adjacent_mines > 0:
                if field.adjacent_flags(x, y) == spot.adjacent_mines:
                    mask[ActionKind.AUTO_STEP * self._cells + index] = 1
        return mask
