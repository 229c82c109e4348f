"""
Cell model for the minefield engine.

What a square holds (``Content``) is fixed when the board is populated.
What the player sees of it (``CellState``) changes only through board
operations. ``Cell`` is the read-only pairing of the two handed out by
board queries.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Dict, Optional


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Visibility of a cell to the player."""

    HIDDEN = auto()
    FLAGGED = auto()
    REVEALED = auto()


# Observation codes shared by the board, renderer and environment.
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_HAZARD = 9

# Flag toggling only moves between these two; revealed cells have no entry.
_FLAG_TOGGLE: Dict[CellState, CellState] = {
    CellState.HIDDEN: CellState.FLAGGED,
    CellState.FLAGGED: CellState.HIDDEN,
}


def toggled_flag(state: CellState) -> Optional[CellState]:
    """State after a flag toggle, or None when the cell is revealed."""
    return _FLAG_TOGGLE.get(state)


# ============================================================================
# Content
# ============================================================================

@dataclass(frozen=True)
class Content:
    """
    Immutable content of a square: a hazard, or safe with a neighbor count.

    Use ``HAZARD`` and ``Content.safe(n)`` rather than building one by hand.
    """

    is_hazard: bool
    adjacent_hazards: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.adjacent_hazards <= 8:
            raise ValueError(
                f"Adjacent hazard count must be 0-8, got {self.adjacent_hazards}"
            )
        if self.is_hazard and self.adjacent_hazards:
            raise ValueError("A hazard carries no adjacent count")

    @classmethod
    def safe(cls, adjacent_hazards: int) -> "Content":
        return cls(False, adjacent_hazards)


HAZARD = Content(is_hazard=True)


# ============================================================================
# Read-only View
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    Snapshot of one square as returned by ``Board.get_cell``.

    Attributes:
        content: What the square holds.
        state: Visibility at the time of the query.
    """

    content: Content
    state: CellState = CellState.HIDDEN

    @property
    def is_hazard(self) -> bool:
        return self.content.is_hazard

    @property
    def adjacent_hazards(self) -> int:
        return self.content.adjacent_hazards

    @property
    def is_hidden(self) -> bool:
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Encode what the player can see of this cell.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed safe cell with its adjacent hazard count
            9: Revealed hazard
        """
        if self.state == CellState.HIDDEN:
            return OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.content.is_hazard:
            return OBS_HAZARD
        return self.content.adjacent_hazards
