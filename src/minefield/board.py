"""
Board module for the minefield engine.

Implements the grid with exact-count hazard placement, exploring with
flood fill over zero-hazard regions, flag toggling and the win/loss
decision.
"""
import logging
import random
from collections import deque
from dataclasses import InitVar, dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Iterable, List, Optional, Set, Tuple, Union

import numpy as np

from .cell import HAZARD, Cell, CellState, Content, toggled_flag
from .errors import (
    AlreadyRevealedError,
    CellFlaggedError,
    GameOverError,
    InvalidPositionError,
)

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
SeedLike = Union[int, random.Random, None]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a board. Immutable once validated.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        hazard_count: Hazards to place. Values above rows * cols are
            clamped to rows * cols.
    """

    rows: int = 10
    cols: int = 10
    hazard_count: int = 50

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Reject bad dimensions, clamp an oversized hazard count."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.hazard_count < 0:
            raise ValueError("Number of hazards cannot be negative")
        if self.hazard_count > self.area:
            object.__setattr__(self, "hazard_count", self.area)

    @property
    def area(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        return self.area - self.hazard_count


@dataclass(frozen=True)
class ExploreOutcome:
    """
    Result of a single explore call.

    Attributes:
        state: Game state after the call settled.
        revealed: Cells revealed by this call as (row, col, adjacent_hazards),
            in reveal order. Empty when the target was already revealed.
        triggered_at: Position of the hazard that ended the game, if any.
    """

    state: GameState
    revealed: Tuple[Tuple[int, int, int], ...] = ()
    triggered_at: Optional[Position] = None

    @property
    def is_loss(self) -> bool:
        return self.state == GameState.LOST

    @property
    def is_win(self) -> bool:
        return self.state == GameState.WON


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper-style game board.

    Hazards are placed when the board is created; the only randomness is
    that placement, so a fixed ``seed`` reproduces the same board. Pass
    ``hazards`` to place them at explicit positions instead.

    Content is stored as nested tuples and never changes after
    construction; visibility lives in a private grid that only
    ``explore`` and ``toggle_flag`` write to.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    seed: InitVar[SeedLike] = None
    hazards: InitVar[Optional[Iterable[Position]]] = None
    _content: Tuple[Tuple[Content, ...], ...] = field(
        init=False, default=(), repr=False
    )
    _states: List[List[CellState]] = field(
        init=False, default_factory=list, repr=False
    )
    _game_state: GameState = field(init=False, default=GameState.IN_PROGRESS)
    _revealed_count: int = field(init=False, default=0)
    _flagged_count: int = field(init=False, default=0)

    def __post_init__(
        self,
        seed: SeedLike,
        hazards: Optional[Iterable[Position]],
    ) -> None:
        """Place hazards, count neighbors and hide every cell."""
        if hazards is None:
            positions = self._sample_hazards(_make_rng(seed))
        else:
            positions = self._check_hazards(hazards)
        self._content = self._build_content(positions)
        self._states = [
            [CellState.HIDDEN] * self.config.cols for _ in range(self.config.rows)
        ]
        logger.debug(
            "New %dx%d board with %d hazards",
            self.rows, self.cols, self.hazard_count,
        )

    @classmethod
    def from_layout(
        cls, rows: int, cols: int, hazards: Iterable[Position]
    ) -> "Board":
        """
        Create a board with hazards at known positions.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            hazards: (row, col) positions of the hazards.
        """
        positions = set(hazards)
        return cls(BoardConfig(rows, cols, len(positions)), hazards=positions)

    # ========================================================================
    # Population (Low-level)
    # ========================================================================

    def _sample_hazards(self, rng: random.Random) -> Set[Position]:
        """Pick exactly ``hazard_count`` distinct positions."""
        indices = rng.sample(range(self.config.area), self.config.hazard_count)
        return {divmod(index, self.config.cols) for index in indices}

    def _check_hazards(self, hazards: Iterable[Position]) -> Set[Position]:
        """Validate explicit hazard positions against the config."""
        positions = set(hazards)
        for row, col in positions:
            if not self._is_valid_position(row, col):
                raise ValueError(f"Hazard position ({row}, {col}) is off the board")
        if len(positions) != self.config.hazard_count:
            raise ValueError(
                f"Expected {self.config.hazard_count} hazards, got {len(positions)}"
            )
        return positions

    def _build_content(
        self, hazards: Set[Position]
    ) -> Tuple[Tuple[Content, ...], ...]:
        """Freeze every square's content, counting hazardous neighbors once."""
        rows = []
        for row in range(self.config.rows):
            cells = []
            for col in range(self.config.cols):
                if (row, col) in hazards:
                    cells.append(HAZARD)
                    continue
                count = sum(
                    1 for neighbor in self._get_neighbors(row, col)
                    if neighbor in hazards
                )
                cells.append(Content.safe(count))
            rows.append(tuple(cells))
        return tuple(rows)

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors; fewer than
            8 along edges and corners.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def _check_playable(self, row: int, col: int) -> CellState:
        """Common precondition checks for mutating operations."""
        if not self._is_valid_position(row, col):
            raise InvalidPositionError(row, col)
        if self._game_state != GameState.IN_PROGRESS:
            raise GameOverError()
        return self._states[row][col]

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def explore(self, row: int, col: int) -> ExploreOutcome:
        """
        Explore (reveal) the cell at the given position.

        A zero-hazard cell also reveals its connected zero-hazard region
        and that region's numbered border. Flagged cells are never
        revealed, neither directly nor by propagation.

        Args:
            row: Row index to explore.
            col: Column index to explore.

        Returns:
            The outcome, listing every cell revealed by this call.

        Raises:
            InvalidPositionError: Position is off the board.
            GameOverError: The game has already been won or lost.
            CellFlaggedError: The cell is flagged.
        """
        state = self._check_playable(row, col)
        if state == CellState.FLAGGED:
            raise CellFlaggedError(row, col)
        if state == CellState.REVEALED:
            return ExploreOutcome(self._game_state)

        content = self._content[row][col]
        if content.is_hazard:
            self._states[row][col] = CellState.REVEALED
            self._game_state = GameState.LOST
            logger.debug("Hazard triggered at (%d, %d)", row, col)
            return ExploreOutcome(
                self._game_state,
                revealed=((row, col, content.adjacent_hazards),),
                triggered_at=(row, col),
            )

        revealed = self._flood_reveal(row, col)
        self._check_win_condition()
        return ExploreOutcome(self._game_state, revealed=tuple(revealed))

    def _flood_reveal(self, row: int, col: int) -> List[Tuple[int, int, int]]:
        """Reveal a safe cell and cascade through zero-hazard neighbors."""
        revealed = []
        queue = deque()
        self._reveal_safe(row, col, revealed, queue)
        while queue:
            current_row, current_col = queue.popleft()
            for neighbor_row, neighbor_col in self._get_neighbors(
                current_row, current_col
            ):
                if (
                    self._states[neighbor_row][neighbor_col] == CellState.HIDDEN
                    and not self._content[neighbor_row][neighbor_col].is_hazard
                ):
                    self._reveal_safe(neighbor_row, neighbor_col, revealed, queue)
        return revealed

    def _reveal_safe(
        self,
        row: int,
        col: int,
        revealed: List[Tuple[int, int, int]],
        queue: deque,
    ) -> None:
        """Reveal one safe cell, queueing it if it has no hazard neighbors."""
        count = self._content[row][col].adjacent_hazards
        self._states[row][col] = CellState.REVEALED
        self._revealed_count += 1
        revealed.append((row, col, count))
        if count == 0:
            queue.append((row, col))

    def _check_win_condition(self) -> None:
        """Win once every non-hazard cell is revealed."""
        if self._revealed_count == self.config.safe_cells:
            self._game_state = GameState.WON
            logger.debug("All %d safe cells revealed", self._revealed_count)

    def toggle_flag(self, row: int, col: int) -> CellState:
        """
        Toggle the flag on a hidden cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The cell's new state (FLAGGED or HIDDEN).

        Raises:
            InvalidPositionError: Position is off the board.
            GameOverError: The game has already been won or lost.
            AlreadyRevealedError: The cell is revealed.
        """
        new_state = toggled_flag(self._check_playable(row, col))
        if new_state is None:
            raise AlreadyRevealedError(row, col)
        self._states[row][col] = new_state
        self._flagged_count += 1 if new_state == CellState.FLAGGED else -1
        return new_state

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def hazard_count(self) -> int:
        return self.config.hazard_count

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.IN_PROGRESS

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def revealed_count(self) -> int:
        """Number of revealed safe cells."""
        return self._revealed_count

    @property
    def flagged_count(self) -> int:
        """Number of flagged cells."""
        return self._flagged_count

    @property
    def safe_cells_remaining(self) -> int:
        """Safe cells still to be revealed before the game is won."""
        return self.config.safe_cells - self._revealed_count

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """
        Get a read-only snapshot of the cell at position.

        Returns:
            A frozen ``Cell``, or None if the position is off the board.
            Later board operations are not reflected in it.
        """
        if not self._is_valid_position(row, col):
            return None
        return Cell(self._content[row][col], self._states[row][col])

    def get_observation(self) -> np.ndarray:
        """
        Get what the player can see as a numpy array.

        Returns:
            2D int8 array of shape (rows, cols) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed hazard
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                obs[row, col] = self.get_cell(row, col).to_observation()
        return obs

    def hazard_positions(self) -> Optional[FrozenSet[Position]]:
        """
        Get the full hazard layout for the end-of-game reveal.

        Returns:
            Positions of every hazard once the game is won or lost,
            None while it is still in progress.
        """
        if self.is_playing:
            return None
        return frozenset(
            (row, col)
            for row in range(self.config.rows)
            for col in range(self.config.cols)
            if self._content[row][col].is_hazard
        )

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can be explored.

        Returns:
            List of (row, col) positions that are hidden and unflagged.
        """
        actions = []
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if self._states[row][col] == CellState.HIDDEN:
                    actions.append((row, col))
        return actions


def _make_rng(seed: SeedLike) -> random.Random:
    """Turn an int seed, an existing generator or None into a generator."""
    if isinstance(seed, random.Random):
        return seed
    return random.Random(seed)
