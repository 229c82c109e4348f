"""
Interactive text shell for the minefield engine.

Reads one command per line, applies it to the board and prints the
result. All game rules live in the board; this module only parses,
reports and redraws.

Usage:
    minefield [--rows N] [--cols N] [--hazards N] [--seed N] [--verbose]
"""
import argparse
import logging
import random
import sys
import time
from typing import Callable, List, Optional, TextIO

from .board import Board, BoardConfig
from .commands import (
    EXPLORE,
    FLAG,
    HELP,
    HELP_TEXT,
    NEW_GAME,
    QUIT,
    Command,
    CommandError,
    parse_command,
    resolve_new_game,
    resolve_position,
)
from .errors import BoardError, CellFlaggedError
from .render import render_board, render_status

logger = logging.getLogger(__name__)

PREFIX = ">>"

WELCOME = (
    "\nWelcome to minefield!\n"
    "A board of {rows}x{cols} cells and {hazards} mines has been created.\n"
    "To start a new game with a different board, type 'n <rows>, <cols>, <mines>'.\n"
    "Type 'h' or '?' at the prompt to list all the commands available.\n"
    "Have fun!\n"
)


# ============================================================================
# Shell
# ============================================================================

class Shell:
    """
    Read-process-print loop around a single board at a time.

    The board is replaced, never reset, on each ``n`` command.
    """

    def __init__(
        self,
        board: Board,
        rng: Optional[random.Random] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.board = board
        self.rng = rng or random.Random()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.clock = clock
        self._start_time = clock()
        self._running = True

    def _print(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def _report(self, message: str) -> None:
        self._print(f"{PREFIX} {message}\n")

    def run(self) -> None:
        """Loop until the player quits, the game ends or input runs out."""
        self._print(
            WELCOME.format(
                rows=self.board.rows,
                cols=self.board.cols,
                hazards=self.board.hazard_count,
            )
        )
        while self._running:
            self._print(render_board(self.board))
            self._print(render_status(self.board, self.clock() - self._start_time))
            self._print()
            self.stdout.write(f"{PREFIX} ")
            self.stdout.flush()

            line = self.stdin.readline()
            if not line:
                self._print("\nGoodbye!")
                break
            if not line.strip():
                continue
            self.handle_line(line)

    def handle_line(self, line: str) -> None:
        """Parse and apply one line of input."""
        try:
            command = parse_command(line)
        except CommandError as exc:
            self._report(str(exc))
            return
        self.dispatch(command)

    def dispatch(self, command: Command) -> None:
        """Apply a parsed command."""
        if command.name == NEW_GAME:
            self._new_game(command)
        elif command.name == EXPLORE:
            self._explore(command)
        elif command.name == FLAG:
            self._flag(command)
        elif command.name == HELP:
            self._print("\n" + HELP_TEXT)
        elif command.name == QUIT:
            self._print("Goodbye!")
            self._running = False

    @property
    def running(self) -> bool:
        return self._running

    # ========================================================================
    # Command Handlers
    # ========================================================================

    def _new_game(self, command: Command) -> None:
        rows, cols, hazards = resolve_new_game(
            command, self.board.rows, self.board.cols, self.rng
        )
        config = BoardConfig(rows, cols, hazards)
        self.board = Board(config, self.rng)
        self._start_time = self.clock()
        self._report(
            f"Starting a new game. The new board has {config.rows} rows, "
            f"{config.cols} columns, and {config.hazard_count} mines."
        )

    def _explore(self, command: Command) -> None:
        row, col = resolve_position(
            command, self.board.rows, self.board.cols, self.rng
        )
        try:
            outcome = self.board.explore(row, col)
        except CellFlaggedError:
            self._report(
                f"'x': the cell at ({row + 1}, {col + 1}) is flagged. "
                "Unflag it first."
            )
            return
        except BoardError as exc:
            self._report(f"'x': {self._describe(exc)}")
            return

        if outcome.is_loss:
            self._report("The cell is mined!")
            self._finish("Game over!")
        elif outcome.is_win:
            self._report("Congratulations! All mines have been found!")
            self._finish("You win!")
        elif not outcome.revealed:
            self._report(f"'x': the cell at ({row + 1}, {col + 1}) is clear.")

    def _flag(self, command: Command) -> None:
        row, col = resolve_position(
            command, self.board.rows, self.board.cols, self.rng
        )
        try:
            self.board.toggle_flag(row, col)
        except BoardError as exc:
            self._report(f"'f': {self._describe(exc)}")

    def _finish(self, message: str) -> None:
        self._print(render_board(self.board))
        self._print(message)
        self._running = False

    @staticmethod
    def _describe(exc: BoardError) -> str:
        """Player-facing text for a board error, with 1-based coordinates."""
        if exc.row is None:
            return str(exc).lower() + "."
        message = str(exc).replace(
            f"({exc.row}, {exc.col})", f"({exc.row + 1}, {exc.col + 1})"
        )
        return message[0].lower() + message[1:] + "."


# ============================================================================
# Entry Point
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        description="minefield - clear the board without hitting a mine"
    )
    parser.add_argument("--rows", type=int, default=10, help="Number of rows")
    parser.add_argument("--cols", type=int, default=10, help="Number of columns")
    parser.add_argument(
        "--hazards", type=int, default=50, help="Number of mines (clamped to board size)"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for reproducible games"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log engine events to stderr"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the shell."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )

    try:
        config = BoardConfig(args.rows, args.cols, args.hazards)
    except ValueError as exc:
        parser.error(str(exc))

    rng = random.Random(args.seed)
    shell = Shell(Board(config, rng), rng)
    shell.run()
    logger.debug("Shell exited")
    return 0


if __name__ == "__main__":
    sys.exit(main())
