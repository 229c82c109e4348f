"""
Text rendering of a board for the terminal.

Labels are 1-based to match the command grammar.
"""
from typing import Optional

from .board import Board
from .cell import OBS_FLAGGED, OBS_HAZARD, OBS_HIDDEN


# ============================================================================
# Constants
# ============================================================================

HIDDEN_GLYPH = "."
FLAG_GLYPH = ">"
HAZARD_GLYPH = "*"
TRIGGERED_GLYPH = "X"
EMPTY_GLYPH = " "


# ============================================================================
# Rendering
# ============================================================================

def cell_glyph(board: Board, row: int, col: int) -> str:
    """
    Get the glyph to draw for one cell.

    Once the game is over every hazard is shown; the one that was
    explored is marked distinctly.
    """
    cell = board.get_cell(row, col)
    value = cell.to_observation()
    if value == OBS_HAZARD:
        return TRIGGERED_GLYPH
    if cell.is_hazard and not board.is_playing:
        return HAZARD_GLYPH
    if value == OBS_HIDDEN:
        return HIDDEN_GLYPH
    if value == OBS_FLAGGED:
        return FLAG_GLYPH
    if value == 0:
        return EMPTY_GLYPH
    return str(value)


def render_board(board: Board) -> str:
    """
    Render the grid with a header of column labels and row labels.

    Returns:
        Multi-line string, no trailing newline.
    """
    row_width = len(str(board.rows))
    col_width = len(str(board.cols)) + 1

    header = " " * row_width + " |" + "".join(
        f"{col + 1:>{col_width}}" for col in range(board.cols)
    )
    lines = [header, "-" * len(header)]
    for row in range(board.rows):
        glyphs = "".join(
            f"{cell_glyph(board, row, col):>{col_width}}"
            for col in range(board.cols)
        )
        lines.append(f"{row + 1:>{row_width}} |{glyphs}")
    return "\n".join(lines)


def format_elapsed(seconds: Optional[float]) -> str:
    """Format a duration as 'Hh Mm Ss'."""
    if seconds is None or seconds < 0:
        return "(Could not compute the total playing time.)"
    total = int(seconds)
    return f"{total // 3600}h {(total % 3600) // 60}m {total % 60}s"


def render_status(board: Board, elapsed_seconds: Optional[float] = None) -> str:
    """Render the flag tally and playing time below the grid."""
    return (
        f"Located {board.flagged_count} of {board.hazard_count} mines\n"
        f"Total playing time: {format_elapsed(elapsed_seconds)}"
    )
