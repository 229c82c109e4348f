"""
Pytest configuration and shared fixtures.
"""
import io
import random

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Cell, CellState
from minefield.cell import HAZARD, Content


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 10x10 board with 50 hazards."""
    return Board(seed=1234)


@pytest.fixture
def empty_board() -> Board:
    """Create a 5x5 board with no hazards for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


@pytest.fixture
def corner_board() -> Board:
    """
    A 4x4 board with a single hazard in the bottom-right corner.

        . . . .
        . . . .
        . . 1 1
        . . 1 *
    """
    return Board.from_layout(4, 4, [(3, 3)])


@pytest.fixture
def walled_board() -> Board:
    """
    A 3x5 board split by a column of hazards.

        0 2 * 2 0
        0 3 * 3 0
        0 2 * 2 0
    """
    return Board.from_layout(3, 5, [(0, 2), (1, 2), (2, 2)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """A hidden safe cell with no hazard neighbors."""
    return Cell(Content.safe(0))


@pytest.fixture
def hazard_cell() -> Cell:
    """Create a cell containing a hazard."""
    return Cell(HAZARD)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent hazards."""
    return Cell(Content.safe(3), CellState.REVEALED)


# ============================================================================
# Shell Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded generator for shell defaults."""
    return random.Random(42)


@pytest.fixture
def output() -> io.StringIO:
    """Capture buffer for shell output."""
    return io.StringIO()
