"""
Gymnasium adapter for the minefield board.

One action explores one cell, indexed row-major. The observation is the
board's int8 visible-state array (-2 flagged, -1 hidden, 0-8 counts,
9 exploded hazard).
"""
from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig, ExploreOutcome
from .cell import OBS_FLAGGED, OBS_HAZARD
from .errors import BoardError
from .render import render_board

REWARD_SAFE = 1.0
REWARD_WIN = 10.0
REWARD_HAZARD = -10.0
REWARD_INVALID = -0.1


def score(outcome: Optional[ExploreOutcome]) -> float:
    """Reward for an explore outcome; None marks a rejected action."""
    if outcome is None or not outcome.revealed:
        return REWARD_INVALID
    if outcome.is_win:
        return REWARD_WIN
    if outcome.is_loss:
        return REWARD_HAZARD
    return REWARD_SAFE


class MinesweeperEnv(gym.Env):
    """Single-board episodes; each ``reset`` places hazards afresh."""

    metadata = {"render_modes": ["ansi"]}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.board = Board(self.config)
        self.action_space = spaces.Discrete(self.config.area)
        self.observation_space = spaces.Box(
            OBS_FLAGGED,
            OBS_HAZARD,
            (self.config.rows, self.config.cols),
            np.int8,
        )

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        # Board placement draws from the env's seeded generator.
        self.board = Board(self.config, int(self.np_random.integers(2**31 - 1)))
        return self.board.get_observation(), self._info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        row, col = divmod(int(action), self.config.cols)
        try:
            outcome = self.board.explore(row, col)
        except BoardError:
            outcome = None
        return (
            self.board.get_observation(),
            score(outcome),
            not self.board.is_playing,
            False,
            self._info(),
        )

    def _info(self) -> Dict[str, Any]:
        return {
            "revealed": self.board.revealed_count,
            "total_safe": self.config.safe_cells,
            "game_state": self.board.game_state.name,
        }

    def render(self) -> Optional[str]:
        if self.render_mode == "ansi":
            return render_board(self.board)
        return None

    def get_action_mask(self) -> np.ndarray:
        """Boolean mask over actions; True where the cell can be explored."""
        mask = np.zeros(self.config.area, dtype=bool)
        for row, col in self.board.get_valid_actions():
            mask[row * self.config.cols + col] = True
        return mask
