"""
Minefield game module.

Provides the rules engine (board, cells, errors), the text shell that
drives it and a Gymnasium environment for automated players.
"""
from .cell import HAZARD, Cell, CellState, Content
from .board import Board, BoardConfig, ExploreOutcome, GameState
from .errors import (
    AlreadyRevealedError,
    BoardError,
    CellFlaggedError,
    GameOverError,
    InvalidPositionError,
)
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Content",
    "HAZARD",
    "Board",
    "BoardConfig",
    "ExploreOutcome",
    "GameState",
    "BoardError",
    "InvalidPositionError",
    "GameOverError",
    "CellFlaggedError",
    "AlreadyRevealedError",
    "MinesweeperEnv",
]
