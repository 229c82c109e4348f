"""
Errors raised by board operations.

All of them are recoverable: the caller reports the problem and
carries on with the same board.
"""
from typing import Optional


class BoardError(Exception):
    """Base class for rejected board operations."""

    def __init__(
        self,
        message: str,
        row: Optional[int] = None,
        col: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.row = row
        self.col = col


class InvalidPositionError(BoardError):
    """Coordinates fall outside the grid."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Position ({row}, {col}) is off the board", row, col)


class GameOverError(BoardError):
    """A mutating operation was attempted on a finished game."""

    def __init__(self) -> None:
        super().__init__("The game is over")


class CellFlaggedError(BoardError):
    """Explore was requested on a flagged cell."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is flagged; unflag it before exploring",
            row,
            col,
        )


class AlreadyRevealedError(BoardError):
    """Flag toggle was requested on a revealed cell."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Cell ({row}, {col}) is already revealed", row, col)
